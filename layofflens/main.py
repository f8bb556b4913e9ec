"""
LayoffLens — FastAPI app factory with startup store bootstrap.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from layofflens.api.dependencies import set_store
from layofflens.api.router_dashboard import router as dashboard_router
from layofflens.api.router_layoffs import router as layoffs_router
from layofflens.api.router_meta import router as meta_router
from layofflens.config import DB_PATH, configure_logging
from layofflens.data.store import LayoffStore

log = logging.getLogger(__name__)


def _lifespan_for(db_path: Path):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Open the record store at startup."""
        configure_logging()
        store = LayoffStore(db_path).bootstrap()
        set_store(store)
        log.info("LayoffLens ready — %d records in %s", store.count(), db_path)
        yield
        set_store(None)

    return lifespan


def create_app(db_path: Path | str = DB_PATH) -> FastAPI:
    app = FastAPI(
        title="LayoffLens API",
        description="Layoff records, dashboard statistics, and map data",
        version="1.0.0",
        lifespan=_lifespan_for(Path(db_path)),
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def bad_request(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request", "detail": jsonable_encoder(exc.errors()), "success": False},
        )

    app.include_router(meta_router)
    app.include_router(layoffs_router)
    app.include_router(dashboard_router)
    return app


app = create_app()

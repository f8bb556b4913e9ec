"""
Meta endpoints: health, sector and location filter options.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from layofflens.api.dependencies import failed, get_store
from layofflens.api.response_models import HealthResponse, OptionsResponse
from layofflens.data.store import LayoffStore, StoreError

router = APIRouter(prefix="/api", tags=["meta"])


@router.get("/health", response_model=HealthResponse)
def health(store: LayoffStore = Depends(get_store)):
    try:
        return HealthResponse(
            status="ok",
            records=store.count(),
            sectors=len(store.sectors()),
            locations=len(store.locations()),
        )
    except StoreError as exc:
        return failed("health", exc)


@router.get("/sectors", response_model=OptionsResponse)
def list_sectors(store: LayoffStore = Depends(get_store)):
    try:
        return OptionsResponse(data=store.sectors())
    except StoreError as exc:
        return failed("sectors", exc)


@router.get("/locations", response_model=OptionsResponse)
def list_locations(store: LayoffStore = Depends(get_store)):
    try:
        return OptionsResponse(data=store.locations())
    except StoreError as exc:
        return failed("locations", exc)

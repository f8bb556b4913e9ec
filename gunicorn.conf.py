"""Gunicorn config for the LayoffLens API."""
import os

wsgi_app = "layofflens.main:app"

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# Each worker opens its own SQLite connections; WAL lets readers run
# alongside an import. Tune via WEB_CONCURRENCY.
worker_class = "uvicorn.workers.UvicornWorker"
workers = int(os.environ.get("WEB_CONCURRENCY", "2"))

timeout = 60
graceful_timeout = 30

# Must exceed the upstream proxy keep-alive (60s)
keepalive = 65

accesslog = "-"
errorlog = "-"
loglevel = os.environ.get("LAYOFFLENS_LOG_LEVEL", "info").lower()

"""Gunicorn settings for serving the track API in a container."""
import os

wsgi_app = "track_analytics.main:app"
bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# Each UvicornWorker loads and cleans its own copy of the inbox on startup,
# so the boot timeout has to cover a full CSV scan.
worker_class = "uvicorn.workers.UvicornWorker"
workers = int(os.environ.get("WEB_CONCURRENCY", "2"))
timeout = int(os.environ.get("GUNICORN_TIMEOUT", "120"))
graceful_timeout = 30
keepalive = 65

accesslog = "-"
errorlog = "-"
loglevel = os.environ.get("LOG_LEVEL", "info")


def on_starting(server):
    data_dir = os.environ.get("TRACK_ANALYTICS_DATA_DIR", "~/Track Analytics")
    print(f"Track Analytics API: {workers} worker(s), data folder {data_dir}")

"""
Track Analytics — FastAPI app factory with startup data loading.
"""
from __future__ import annotations

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from track_analytics.data.store import TrackStore
from track_analytics.api.dependencies import set_store
from track_analytics.api.router_meta import router as meta_router
from track_analytics.api.router_queries import router as queries_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load all data at startup."""
    from track_analytics.config import INBOX_FOLDER, REPORTS_FOLDER
    for d in [INBOX_FOLDER, REPORTS_FOLDER]:
        d.mkdir(parents=True, exist_ok=True)

    print(f"  TRACK_ANALYTICS_DATA_DIR = {os.environ.get('TRACK_ANALYTICS_DATA_DIR', '(not set)')}")
    print(f"  INBOX_FOLDER = {INBOX_FOLDER}")

    store = TrackStore()
    store.load()
    set_store(store)

    if store.row_count() > 0:
        print(f"\nTrack Analytics ready — {store.row_count():,} tracks "
              f"({store.dropped_count():,} dropped, {store.rejected_count():,} rejected)\n")
    else:
        print("\nTrack Analytics ready — no data yet. Drop CSVs into the inbox and POST /api/reload.\n")
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="Track Analytics API",
        description="Spotify & YouTube track metadata — fixed analytical query catalog",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(meta_router)
    app.include_router(queries_router)

    return app


app = create_app()

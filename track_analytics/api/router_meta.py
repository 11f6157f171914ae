"""
Meta endpoints: health, dataset overview, reload.
"""
from __future__ import annotations

import threading

from fastapi import APIRouter, Depends

from track_analytics.analytics.overview import dataset_overview
from track_analytics.data.store import TrackStore
from track_analytics.api.dependencies import get_engine, get_store, get_store_or_empty, set_store
from track_analytics.api.response_models import HealthResponse, OverviewResponse
from track_analytics.engine import Engine
from track_analytics.errors import TrackAnalyticsError

router = APIRouter(prefix="/api", tags=["meta"])


@router.get("/health", response_model=HealthResponse)
def health(
    store: TrackStore = Depends(get_store_or_empty),
    engine: Engine = Depends(get_engine),
):
    return HealthResponse(
        status="ok",
        rows=store.row_count(),
        dropped_rows=store.dropped_count(),
        rejected_rows=store.rejected_count(),
        queries=len(engine.names()),
    )


@router.get("/overview", response_model=OverviewResponse)
def overview(store: TrackStore = Depends(get_store)):
    return OverviewResponse(**dataset_overview(store.df))


@router.post("/reload")
def reload_data(store: TrackStore = Depends(get_store_or_empty)):
    """Re-scan inbox and reload all data.

    Returns immediately; a fresh store is built in the background and swapped
    in when complete, so requests in flight keep reading the old table.
    """
    def _do_reload():
        try:
            fresh = TrackStore().load()
        except (TrackAnalyticsError, OSError) as exc:
            print(f"  Reload failed, keeping the current data: {exc}")
            return
        set_store(fresh)
        print(f"  Reload complete — {fresh.row_count():,} rows, {fresh.dropped_count():,} dropped")

    threading.Thread(target=_do_reload, daemon=True).start()
    return {
        "status": "reloading",
        "message": "Data reload started in background. Check /api/health for updated row counts.",
    }

"""
FastAPI dependencies — TrackStore singleton and the query engine.
"""
from __future__ import annotations

from fastapi import HTTPException

from track_analytics.data.store import TrackStore
from track_analytics.engine import Engine

# ---------------------------------------------------------------------------
# Global store singleton (set during startup, replaced on reload)
# ---------------------------------------------------------------------------
_store: TrackStore | None = None
_engine = Engine()


def set_store(store: TrackStore) -> None:
    global _store
    _store = store


def get_store() -> TrackStore:
    if _store is None or not _store.is_loaded:
        raise HTTPException(503, "Data not loaded yet")
    return _store


def get_store_or_empty() -> TrackStore:
    """Return the store even if it has no data (for health/reload endpoints)."""
    if _store is None:
        raise HTTPException(503, "Server not initialized yet")
    return _store


def get_engine() -> Engine:
    return _engine

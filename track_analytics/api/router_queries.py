"""
Query endpoints — list the catalog, run one entry, download its results.
"""
from __future__ import annotations

import shutil
import tempfile
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query
from fastapi.responses import FileResponse

from track_analytics.analytics.catalog import TIERS
from track_analytics.api.dependencies import get_engine, get_store
from track_analytics.api.response_models import QueryInfo, QueryListResponse, QueryResultResponse
from track_analytics.data.store import TrackStore
from track_analytics.engine import Engine
from track_analytics.errors import EmptyInputError, UnknownQueryError
from track_analytics.reports.query_report import export_rows

router = APIRouter(prefix="/api/queries", tags=["queries"])

_MEDIA_TYPES = {
    "csv": "text/csv",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}


def _run(engine: Engine, name: str, store: TrackStore) -> list[dict]:
    try:
        return engine.run(name, store.table)
    except UnknownQueryError as exc:
        raise HTTPException(404, str(exc))
    except EmptyInputError as exc:
        raise HTTPException(422, str(exc))


@router.get("", response_model=QueryListResponse)
def list_queries(
    tier: Optional[str] = Query(None, description="easy|medium|advanced"),
    engine: Engine = Depends(get_engine),
):
    if tier is not None and tier not in TIERS:
        raise HTTPException(400, f"Invalid tier: {tier}")
    infos = [QueryInfo(**e.describe()) for e in engine.entries(tier)]
    return QueryListResponse(queries=infos, count=len(infos))


@router.get("/{name}", response_model=QueryResultResponse)
def run_query(
    name: str,
    limit: Optional[int] = Query(None, ge=1, description="Return at most this many rows"),
    store: TrackStore = Depends(get_store),
    engine: Engine = Depends(get_engine),
):
    rows = _run(engine, name, store)
    entry = engine.entry(name)
    if limit is not None:
        rows = rows[:limit]
    return QueryResultResponse(
        query=entry.name,
        tier=entry.tier,
        columns=entry.column_names,
        count=len(rows),
        rows=rows,
    )


@router.get("/{name}/export")
def export_query(
    name: str,
    format: str = Query("csv", description="csv|xlsx"),
    store: TrackStore = Depends(get_store),
    engine: Engine = Depends(get_engine),
):
    if format not in _MEDIA_TYPES:
        raise HTTPException(400, f"Invalid format: {format}")
    rows = _run(engine, name, store)
    entry = engine.entry(name)

    workdir = Path(tempfile.mkdtemp())
    out = export_rows(entry, rows, workdir / f"{entry.name}.{format}")
    # Removed once the file has been streamed
    cleanup = BackgroundTasks()
    cleanup.add_task(shutil.rmtree, workdir, ignore_errors=True)
    return FileResponse(path=str(out), filename=out.name, media_type=_MEDIA_TYPES[format], background=cleanup)

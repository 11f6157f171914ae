"""
Pydantic response schemas for the API.
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    rows: int
    dropped_rows: int
    rejected_rows: int
    queries: int


class OverviewResponse(BaseModel):
    total_tracks: int
    distinct_artists: int
    distinct_albums: int
    album_types: list[str]
    max_duration_min: Optional[float] = None
    min_duration_min: Optional[float] = None
    distinct_channels: int
    platforms: list[str]


class QueryInfo(BaseModel):
    name: str
    tier: str
    description: str
    columns: list[str]


class QueryListResponse(BaseModel):
    queries: list[QueryInfo]
    count: int


class QueryResultResponse(BaseModel):
    query: str
    tier: str
    columns: list[str]
    count: int
    rows: list[dict[str, Any]]

"""
Dataset overview — the exploratory counts taken before running the catalog.
"""
from __future__ import annotations

import pandas as pd

from track_analytics.analytics.common import native


def _distinct(series: pd.Series) -> list:
    return sorted(series.dropna().unique().tolist())


def dataset_overview(df: pd.DataFrame) -> dict:
    """Row and distinct-value counts plus the duration range."""
    if df.empty:
        return {
            "total_tracks": 0,
            "distinct_artists": 0,
            "distinct_albums": 0,
            "album_types": [],
            "max_duration_min": None,
            "min_duration_min": None,
            "distinct_channels": 0,
            "platforms": [],
        }
    return {
        "total_tracks": len(df),
        "distinct_artists": int(df["artist"].nunique()),
        "distinct_albums": int(df["album"].nunique()),
        "album_types": _distinct(df["album_type"]),
        "max_duration_min": native(df["duration_min"].max()),
        "min_duration_min": native(df["duration_min"].min()),
        "distinct_channels": int(df["channel"].nunique()),
        "platforms": _distinct(df["most_played_on"]),
    }

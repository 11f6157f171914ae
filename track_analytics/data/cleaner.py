"""
Cleaning pass: drop tracks with a non-positive duration.
"""
from __future__ import annotations

import pandas as pd

from track_analytics.data.schemas import TrackTable


def _valid_duration(df: pd.DataFrame) -> pd.Series:
    return df["duration_min"] > 0


def clean(table: TrackTable) -> TrackTable:
    """Return a new table holding exactly the records with duration_min > 0.

    Row order and all other fields are unchanged. Re-cleaning a cleaned
    table returns an equal table.
    """
    if table.cleaned:
        return table
    df = table.df
    kept = df[_valid_duration(df)].reset_index(drop=True)
    return TrackTable(kept, cleaned=True, rejected=table.rejected)


def invalid_records(table: TrackTable) -> pd.DataFrame:
    """Records the cleaning pass would discard (duration_min <= 0)."""
    df = table.df
    return df[~_valid_duration(df)].reset_index(drop=True)

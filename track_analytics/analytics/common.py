"""
Shared helpers for catalog queries: null-safe masks, stable ordering,
dense ranking, and conversion of result frames to plain Python rows.
"""
from __future__ import annotations

import math

import numpy as np
import pandas as pd


def is_true(series: pd.Series) -> pd.Series:
    """Boolean mask where missing values count as False."""
    return series.fillna(False).astype(bool)


def greater_than(series: pd.Series, threshold: float) -> pd.Series:
    """series > threshold, with missing values never matching."""
    return (series > threshold).fillna(False).astype(bool)


def empty_result(columns: list[str]) -> pd.DataFrame:
    return pd.DataFrame(columns=columns)


def sort_desc(df: pd.DataFrame, metric: str, keys: list[str]) -> pd.DataFrame:
    """Sort by metric descending, then by keys ascending (stable)."""
    ordered = df.sort_values(
        [metric] + keys,
        ascending=[False] + [True] * len(keys),
        kind="mergesort",
        na_position="last",
    )
    return ordered.reset_index(drop=True)


def top_n(df: pd.DataFrame, metric: str, keys: list[str], n: int) -> pd.DataFrame:
    """First n rows by metric descending; ties at the cut resolve by keys ascending."""
    return sort_desc(df, metric, keys).head(n).reset_index(drop=True)


def dense_rank(
    df: pd.DataFrame,
    partition: list[str],
    metric: str,
    tiebreak: list[str] | None = None,
) -> pd.DataFrame:
    """Assign a dense rank of metric (descending) within each partition.

    Rows are sorted by partition, then metric descending, then tiebreak
    ascending, and walked in that order: the rank restarts at 1 on each new
    partition and increases by one only when the metric value changes.
    Returns the sorted frame with a ``rank`` column.
    """
    tiebreak = tiebreak or []
    if df.empty:
        return df.assign(rank=pd.Series(dtype="int64"))

    ordered = df.sort_values(
        partition + [metric] + tiebreak,
        ascending=[True] * len(partition) + [False] + [True] * len(tiebreak),
        kind="mergesort",
        na_position="last",
    ).reset_index(drop=True)

    keys = list(ordered[partition].itertuples(index=False, name=None))
    values = ordered[metric].tolist()
    ranks = np.empty(len(ordered), dtype="int64")

    prev_key = None
    prev_value = None
    rank = 0
    for i, (key, value) in enumerate(zip(keys, values)):
        if i == 0 or not _same_key(key, prev_key):
            rank = 1
        elif not _same_value(value, prev_value):
            rank += 1
        ranks[i] = rank
        prev_key, prev_value = key, value

    return ordered.assign(rank=ranks)


def _same_key(a: tuple, b: tuple) -> bool:
    return all(_same_value(x, y) for x, y in zip(a, b))


def _same_value(a, b) -> bool:
    if pd.isna(a) and pd.isna(b):
        return True
    if pd.isna(a) or pd.isna(b):
        return False
    return a == b


# ---------------------------------------------------------------------------
# Result conversion
# ---------------------------------------------------------------------------

def native(value):
    """Convert a numpy/pandas scalar to a plain Python value; missing → None."""
    if isinstance(value, (np.integer,)):
        return int(value)
    if isinstance(value, (np.floating,)):
        v = float(value)
        return None if math.isnan(v) else v
    if isinstance(value, np.bool_):
        return bool(value)
    if isinstance(value, float) and math.isnan(value):
        return None
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return None
    return value


def to_records(df: pd.DataFrame) -> list[dict]:
    """Frame → list of {column: value} dicts in row order with native values."""
    return [
        {col: native(val) for col, val in row.items()}
        for row in df.to_dict("records")
    ]


def sanitize_for_json(obj):
    """Recursively convert numpy/pandas types to native Python for JSON serialization."""
    if isinstance(obj, dict):
        return {str(k): sanitize_for_json(v) for k, v in obj.items() if k is not None}
    if isinstance(obj, (list, tuple)):
        return [sanitize_for_json(v) for v in obj]
    if isinstance(obj, np.ndarray):
        return sanitize_for_json(obj.tolist())
    if isinstance(obj, float) and math.isinf(obj):
        return None
    return native(obj)

"""
Column mapping, type coercion, and row validation for raw track data.
"""
from __future__ import annotations

import math
import re

import numpy as np
import pandas as pd

from track_analytics.config import COLUMN_MAP, MS_PER_MINUTE
from track_analytics.data.schemas import (
    DTYPES, FIELD_KINDS, REQUIRED_FIELDS, TRACK_COLUMNS, FieldKind, RejectedRow,
)
from track_analytics.errors import ValidationError


BOOLEAN_TOKENS = {
    "true": True, "t": True, "yes": True, "y": True, "1": True, "1.0": True,
    "false": False, "f": False, "no": False, "n": False, "0": False, "0.0": False,
}


# ---------------------------------------------------------------------------
# Column normalisation
# ---------------------------------------------------------------------------

def _snake(name: str) -> str:
    s = re.sub(r"[^\w]+", "_", str(name).strip())
    return s.strip("_").lower()


def normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Rename raw dataset headers to internal names and derive duration_min.

    Known headers go through COLUMN_MAP; anything else is snake-cased.
    Columns outside the schema are dropped, missing schema columns are
    added as all-missing.
    """
    df = df.rename(columns=lambda c: COLUMN_MAP.get(c, _snake(c)))
    df = df.loc[:, ~df.columns.duplicated()].copy()

    if "duration_min" not in df.columns:
        if "duration_ms" not in df.columns:
            raise ValidationError(0, "duration_min", None, "column missing from source")
        ms = pd.to_numeric(df["duration_ms"], errors="coerce")
        df = df.assign(duration_min=ms / MS_PER_MINUTE)

    for col in TRACK_COLUMNS:
        if col not in df.columns:
            df[col] = None

    return df[TRACK_COLUMNS]


# ---------------------------------------------------------------------------
# Type coercion
# ---------------------------------------------------------------------------

def _blank_mask(s: pd.Series) -> pd.Series:
    return s.isna() | s.astype(str).str.strip().eq("")


def _coerce_text(s: pd.Series) -> tuple[pd.Series, pd.Series]:
    out = s.map(lambda v: None if pd.isna(v) else str(v).strip()).astype("object")
    return out, pd.Series(False, index=s.index)


def _coerce_float(s: pd.Series) -> tuple[pd.Series, pd.Series]:
    blank = _blank_mask(s)
    cleaned = s.where(~blank).map(lambda v: v.strip().replace(",", "") if isinstance(v, str) else v)
    num = pd.to_numeric(cleaned, errors="coerce").astype("float64")
    bad = ~blank & num.isna()
    return num, bad


_INT64 = np.iinfo("int64")


def _parse_int(text: str) -> int | None:
    """Exact whole number in int64 range, or None."""
    try:
        n = int(text)
    except ValueError:
        try:
            f = float(text)
        except ValueError:
            return None
        if not math.isfinite(f) or not f.is_integer():
            return None
        n = int(f)
    return n if _INT64.min <= n <= _INT64.max else None


def _coerce_integer(s: pd.Series) -> tuple[pd.Series, pd.Series]:
    # Parsed value by value; a float64 pass would round anything past 2**53
    blank = _blank_mask(s)
    parsed = [
        None if is_blank else _parse_int(str(v).strip().replace(",", ""))
        for v, is_blank in zip(s, blank)
    ]
    out = pd.Series(pd.array(parsed, dtype="Int64"), index=s.index)
    bad = ~blank & out.isna()
    return out, bad


def _coerce_boolean(s: pd.Series) -> tuple[pd.Series, pd.Series]:
    blank = _blank_mask(s)
    mapped = s.where(~blank).map(
        lambda v: None if pd.isna(v) else BOOLEAN_TOKENS.get(str(v).strip().lower())
    )
    bad = ~blank & mapped.isna()
    return mapped.where(~bad).astype("boolean"), bad


_COERCERS = {
    FieldKind.TEXT: _coerce_text,
    FieldKind.FLOAT: _coerce_float,
    FieldKind.INTEGER: _coerce_integer,
    FieldKind.BOOLEAN: _coerce_boolean,
}


def coerce_types(df: pd.DataFrame, strict: bool = True) -> tuple[pd.DataFrame, list[RejectedRow]]:
    """Coerce every schema column to its declared dtype.

    Strict mode raises ValidationError for the lowest offending row (first
    offending field in schema order). Lenient mode drops offending rows and
    returns one RejectedRow per dropped row.

    Row numbers are 0-based positions in the input.
    """
    df = df.reset_index(drop=True)
    coerced: dict[str, pd.Series] = {}
    problems: dict[int, tuple[str, object, str]] = {}

    for col in TRACK_COLUMNS:
        kind = FIELD_KINDS[col]
        values, bad = _COERCERS[kind](df[col])
        coerced[col] = values
        reason = f"not a valid {kind.value}"

        if col in REQUIRED_FIELDS:
            missing = values.isna() & ~bad
            for idx in missing[missing].index:
                problems.setdefault(int(idx), (col, df.at[idx, col], "missing required value"))
        for idx in bad[bad].index:
            problems.setdefault(int(idx), (col, df.at[idx, col], reason))

    # Columns are scanned in schema order, so each row keeps its first offending field
    if problems and strict:
        row = min(problems)
        field, value, reason = problems[row]
        raise ValidationError(row, field, value, reason)

    out = pd.DataFrame(coerced)
    for col in TRACK_COLUMNS:
        out[col] = out[col].astype(DTYPES[FIELD_KINDS[col]])

    rejected = [
        RejectedRow(row=idx, field=f, value=v, reason=r)
        for idx, (f, v, r) in sorted(problems.items())
    ]
    if rejected:
        out = out.drop(index=[r.row for r in rejected]).reset_index(drop=True)
    return out, rejected

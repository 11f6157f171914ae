"""
Track CSV discovery, bulk loading, and row validation.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path

import pandas as pd

from track_analytics.config import INBOX_FOLDER, STRICT_LOAD, TRACK_KEYWORDS
from track_analytics.data.normalize import coerce_types, normalize_columns
from track_analytics.data.schemas import RejectedRow, TrackTable, empty_track_frame
from track_analytics.errors import ValidationError


# ---------------------------------------------------------------------------
# CSV discovery
# ---------------------------------------------------------------------------

def discover_csvs(
    inbox: Path = INBOX_FOLDER,
    keywords: list[str] | None = None,
) -> list[Path]:
    """Recursively find track CSVs in inbox, sorted by name for a stable load order."""
    if keywords is None:
        keywords = TRACK_KEYWORDS

    matches: list[Path] = []
    if not inbox.exists():
        return matches

    for csv_file in inbox.rglob("*.csv"):
        filename_lower = csv_file.name.lower()
        if any(kw in filename_lower for kw in keywords):
            matches.append(csv_file)

    matches.sort(key=lambda p: str(p.relative_to(inbox)).lower())
    return matches


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def load_frame(raw: pd.DataFrame, strict: bool = STRICT_LOAD) -> TrackTable:
    """Normalise headers and coerce a raw frame into a TrackTable."""
    if raw.empty and len(raw.columns) == 0:
        return TrackTable(empty_track_frame())

    df = normalize_columns(raw)
    df, rejected = coerce_types(df, strict=strict)
    if rejected:
        print(f"  Rejected {len(rejected):,} row(s) that failed type checks")
        for r in rejected[:5]:
            print(f"    row {r.row}: {r.field}={r.value!r} ({r.reason})")
    return TrackTable(df, rejected=tuple(rejected))


def load_rows(rows: Iterable[Mapping], strict: bool = STRICT_LOAD) -> TrackTable:
    """Build a TrackTable from raw field mappings (one mapping per track)."""
    return load_frame(pd.DataFrame([dict(r) for r in rows]), strict=strict)


def load_csv(filepath: Path, strict: bool = STRICT_LOAD) -> TrackTable:
    """Load one delimited file. Every column is read as text and coerced by the schema."""
    raw = pd.read_csv(filepath, dtype=str, keep_default_na=True, index_col=False)
    # Some exports carry the pandas index as an unnamed first column
    raw = raw.drop(columns=[c for c in raw.columns if str(c).startswith("Unnamed:")])
    return load_frame(raw, strict=strict)


def load_all_csvs(
    inbox: Path = INBOX_FOLDER,
    strict: bool = STRICT_LOAD,
    keywords: list[str] | None = None,
) -> TrackTable:
    """Discover and load all track CSVs into a single table.

    Row numbers, in rejections and in strict-mode errors, count across all
    files in load order.
    """
    files = discover_csvs(inbox, keywords)
    if not files:
        return TrackTable(empty_track_frame())

    frames: list[pd.DataFrame] = []
    rejected: list[RejectedRow] = []
    offset = 0
    for i, f in enumerate(files, 1):
        raw = pd.read_csv(f, dtype=str, keep_default_na=True, index_col=False)
        raw = raw.drop(columns=[c for c in raw.columns if str(c).startswith("Unnamed:")])
        try:
            table = load_frame(raw, strict=strict)
        except ValidationError as exc:
            raise ValidationError(exc.row + offset, exc.field, exc.value, f"{exc.reason}, in {f.name}") from exc
        frames.append(table.df)
        rejected.extend(
            RejectedRow(row=r.row + offset, field=r.field, value=r.value, reason=r.reason)
            for r in table.rejected
        )
        offset += len(raw)
        print(f"  [{i}/{len(files)}] {f.name}: {len(raw):,} rows → {len(table):,} loaded")

    df = pd.concat(frames, ignore_index=True) if len(frames) > 1 else frames[0]
    print(f"  Total: {len(df):,} rows from {len(files)} file(s)")
    return TrackTable(df, rejected=tuple(rejected))

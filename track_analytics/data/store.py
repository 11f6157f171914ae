"""
TrackStore — holds the cleaned track table for the CLI and API.

Loaded once at startup, queried on every request. A reload builds a new
table and swaps it in; the table being queried is never modified.
"""
from __future__ import annotations

from pathlib import Path

import pandas as pd

from track_analytics.config import INBOX_FOLDER, STRICT_LOAD
from track_analytics.data.cleaner import clean
from track_analytics.data.loader import load_all_csvs, load_csv
from track_analytics.data.schemas import TrackTable, empty_track_frame


class TrackStore:
    """In-memory cleaned track table plus load statistics."""

    def __init__(self) -> None:
        self.table: TrackTable = TrackTable(empty_track_frame(), cleaned=True)
        self._raw_count = 0
        self._loaded = False

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self, inbox: Path = INBOX_FOLDER, strict: bool = STRICT_LOAD) -> "TrackStore":
        """Load all track CSVs from inbox and clean them."""
        print("Loading track data...")
        return self._install(load_all_csvs(inbox, strict=strict))

    def load_file(self, path: Path, strict: bool = STRICT_LOAD) -> "TrackStore":
        """Load a single CSV and clean it."""
        print(f"Loading track data from {path}...")
        return self._install(load_csv(Path(path), strict=strict))

    def _install(self, raw: TrackTable) -> "TrackStore":
        if raw.is_empty:
            print("  No track rows found — starting with empty dataset")
        cleaned = clean(raw)
        dropped = len(raw) - len(cleaned)
        if dropped:
            print(f"  Dropped {dropped:,} track(s) with non-positive duration")
        self._raw_count = len(raw)
        self.table = cleaned
        self._loaded = True
        return self

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def df(self) -> pd.DataFrame:
        return self.table.df

    # ------------------------------------------------------------------
    # Counts
    # ------------------------------------------------------------------

    def row_count(self) -> int:
        return len(self.table)

    def dropped_count(self) -> int:
        return self._raw_count - len(self.table)

    def rejected_count(self) -> int:
        return len(self.table.rejected)

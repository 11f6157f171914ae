"""
Engine — load, clean, and evaluate catalog queries against the cleaned table.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor

from track_analytics.analytics.catalog import CATALOG, QueryEntry, entries, get_entry
from track_analytics.analytics.common import to_records
from track_analytics.config import STRICT_LOAD
from track_analytics.data.cleaner import clean
from track_analytics.data.loader import load_rows
from track_analytics.data.schemas import TrackTable


class Engine:
    """Runs named queries. Holds no table state of its own."""

    def __init__(self, catalog: dict[str, QueryEntry] | None = None) -> None:
        self.catalog = CATALOG if catalog is None else catalog

    def prepare(self, rows: Iterable[Mapping], strict: bool = STRICT_LOAD) -> TrackTable:
        """Load raw rows and clean them once."""
        return clean(load_rows(rows, strict=strict))

    def names(self) -> list[str]:
        return list(self.catalog)

    def entries(self, tier: str | None = None) -> list[QueryEntry]:
        return entries(tier, self.catalog)

    def entry(self, name: str) -> QueryEntry:
        return get_entry(name, self.catalog)

    def run(self, name: str, table: TrackTable) -> list[dict]:
        """Evaluate one catalog entry and return its rows.

        Raises UnknownQueryError for an unregistered name. A table that has
        not been cleaned yet is cleaned first.
        """
        entry = self.entry(name)
        if not table.cleaned:
            table = clean(table)
        return to_records(entry.func(table.df))

    def run_many(
        self,
        table: TrackTable,
        names: list[str] | None = None,
        max_workers: int | None = None,
    ) -> dict[str, list[dict]]:
        """Evaluate several entries; results keep the requested order.

        With max_workers > 1 the queries run on a thread pool. They share the
        table read-only, so no locking is involved. The first error raised by
        any query propagates.
        """
        names = self.names() if names is None else list(names)
        for name in names:
            self.entry(name)
        if not table.cleaned:
            table = clean(table)

        if not max_workers or max_workers <= 1:
            return {name: self.run(name, table) for name in names}

        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            futures = {name: pool.submit(self.run, name, table) for name in names}
            return {name: futures[name].result() for name in names}

"""
Query Report — catalog results as JSON, CSV, or a styled Excel workbook.
"""
from __future__ import annotations

import json
from pathlib import Path

import pandas as pd

from track_analytics.analytics.catalog import QueryEntry
from track_analytics.analytics.common import sanitize_for_json
from track_analytics.analytics.overview import dataset_overview
from track_analytics.data.schemas import TrackTable
from track_analytics.engine import Engine
from track_analytics.errors import EmptyInputError
from track_analytics.excel import TIER_TAB_COLORS, ExcelWriter

EXPORT_FORMATS = (".csv", ".json", ".xlsx")


def _selected(engine: Engine, names: list[str] | None, tier: str | None) -> list[QueryEntry]:
    if names:
        return [engine.entry(n) for n in names]
    return engine.entries(tier)


def generate_json(
    table: TrackTable,
    names: list[str] | None = None,
    tier: str | None = None,
    engine: Engine | None = None,
) -> dict:
    """All selected query results plus the dataset overview.

    A query that cannot be evaluated on this table (EmptyInputError) is
    reported with an ``error`` entry instead of rows.
    """
    engine = engine or Engine()
    results = {}
    for entry in _selected(engine, names, tier):
        try:
            rows = engine.run(entry.name, table)
            results[entry.name] = {**entry.describe(), "count": len(rows), "rows": rows}
        except EmptyInputError as exc:
            results[entry.name] = {**entry.describe(), "count": 0, "rows": [], "error": str(exc)}
    return sanitize_for_json({
        "overview": dataset_overview(table.df),
        "queries": results,
    })


def generate_excel(
    table: TrackTable,
    output_path: str | Path,
    names: list[str] | None = None,
    tier: str | None = None,
    engine: Engine | None = None,
) -> Path:
    """Summary sheet with overview KPIs, then one sheet per query."""
    engine = engine or Engine()
    data = generate_json(table, names, tier, engine)
    ov = data["overview"]
    ew = ExcelWriter()

    ws = ew.add_sheet("Summary")
    ew.write_title(ws, "TRACK ANALYTICS",
                   f"Spotify & YouTube track metadata  |  Generated {pd.Timestamp.now():%B %d, %Y}")
    row = ew.write_section(ws, 5, "DATASET")
    row = ew.write_kpi_row(ws, row, [
        (ov["total_tracks"], "TRACKS", "number"),
        (ov["distinct_artists"], "ARTISTS", "number"),
        (ov["distinct_albums"], "ALBUMS", "number"),
        (ov["distinct_channels"], "CHANNELS", "number"),
    ])
    row = ew.write_section(ws, row, "QUERIES")
    summary = [
        {"name": q["name"], "tier": q["tier"], "description": q["description"],
         "count": q["count"], "note": q.get("error", "")}
        for q in data["queries"].values()
    ]
    ew.write_table(ws, row, [
        ("name", "text", "Query"),
        ("tier", "text", "Tier"),
        ("description", "text", "Description"),
        ("count", "number", "Rows"),
        ("note", "text", "Note"),
    ], summary, freeze=False)

    for entry in _selected(engine, names, tier):
        ws_q = ew.add_sheet(entry.name, tab_color=TIER_TAB_COLORS.get(entry.tier))
        ew.write_table(ws_q, 1, entry.columns, data["queries"][entry.name]["rows"])

    return ew.save(output_path)


def export_rows(entry: QueryEntry, rows: list[dict], output_path: str | Path) -> Path:
    """Write one query's rows to .csv, .json, or .xlsx (chosen by suffix)."""
    path = Path(output_path)
    suffix = path.suffix.lower()
    if suffix not in EXPORT_FORMATS:
        raise ValueError(f"Unsupported export format '{suffix}'. Use one of: {', '.join(EXPORT_FORMATS)}")
    path.parent.mkdir(parents=True, exist_ok=True)

    if suffix == ".csv":
        pd.DataFrame(rows, columns=entry.column_names).to_csv(path, index=False)
    elif suffix == ".json":
        with open(path, "w") as f:
            json.dump(sanitize_for_json({"query": entry.name, "rows": rows}), f, indent=2, default=str)
    else:
        ew = ExcelWriter()
        ws = ew.add_sheet(entry.name, tab_color=TIER_TAB_COLORS.get(entry.tier))
        ew.write_table(ws, 1, entry.columns, rows)
        ew.save(path)
    return path

#!/usr/bin/env python3
"""
Track Analytics CLI — run catalog queries, print the dataset overview,
build the Excel report, or start the API server.

USAGE:
  python -m track_analytics.cli queries                         # List all queries
  python -m track_analytics.cli queries --tier advanced         # One tier only

  python -m track_analytics.cli run tracks_per_artist           # Run against the inbox
  python -m track_analytics.cli run singles --csv data.csv      # Run against one file
  python -m track_analytics.cli run top_energy_tracks --output top.xlsx

  python -m track_analytics.cli overview --csv data.csv         # Exploratory counts

  python -m track_analytics.cli report                          # All queries → Excel
  python -m track_analytics.cli report --tier medium --output medium.xlsx

  python -m track_analytics.cli serve --port 8000               # Start API server
"""
from __future__ import annotations

import argparse
import os
import sys
from datetime import datetime
from pathlib import Path

import pandas as pd

from track_analytics.analytics.catalog import TIERS
from track_analytics.analytics.overview import dataset_overview
from track_analytics.config import REPORTS_FOLDER, STRICT_LOAD
from track_analytics.data.store import TrackStore
from track_analytics.engine import Engine
from track_analytics.errors import TrackAnalyticsError


def _load_store(args) -> TrackStore:
    strict = STRICT_LOAD and not getattr(args, "lenient", False)
    csv_path = getattr(args, "csv", None)
    if csv_path:
        return TrackStore().load_file(Path(csv_path), strict=strict)
    return TrackStore().load(strict=strict)


def cmd_queries(args):
    """List catalog entries grouped by tier."""
    engine = Engine()
    tiers = [args.tier] if args.tier else list(TIERS)
    for tier in tiers:
        print(f"\n{tier.upper()}")
        for entry in engine.entries(tier):
            print(f"  {entry.name:<30}{entry.description}")
    print()


def cmd_run(args):
    """Run one catalog entry and print or export its rows."""
    engine = Engine()
    entry = engine.entry(args.name)
    store = _load_store(args)
    rows = engine.run(entry.name, store.table)

    if args.output:
        from track_analytics.reports.query_report import export_rows
        out = export_rows(entry, rows, args.output)
        print(f"\n  {len(rows):,} row(s) written to {out}\n")
        return

    shown = rows[:args.limit] if args.limit else rows
    print(f"\n{entry.name} — {entry.description}  ({len(rows):,} rows)\n")
    if shown:
        frame = pd.DataFrame(shown, columns=entry.column_names)
        print(frame.to_string(index=False, na_rep=""))
    else:
        print("  (no rows)")
    if len(shown) < len(rows):
        print(f"\n  ... {len(rows) - len(shown):,} more row(s)")
    print()


def cmd_overview(args):
    """Print the dataset overview."""
    store = _load_store(args)
    ov = dataset_overview(store.df)
    print("\n" + "=" * 70)
    print("  TRACK ANALYTICS — DATASET OVERVIEW")
    print("=" * 70)
    print(f"  Tracks:            {ov['total_tracks']:,}")
    print(f"  Distinct artists:  {ov['distinct_artists']:,}")
    print(f"  Distinct albums:   {ov['distinct_albums']:,}")
    print(f"  Distinct channels: {ov['distinct_channels']:,}")
    print(f"  Album types:       {', '.join(ov['album_types']) or '-'}")
    print(f"  Platforms:         {', '.join(ov['platforms']) or '-'}")
    print(f"  Duration (min):    {ov['min_duration_min']} to {ov['max_duration_min']}")
    print(f"  Dropped on clean:  {store.dropped_count():,}")
    print(f"  Rejected on load:  {store.rejected_count():,}")
    print("=" * 70 + "\n")


def cmd_report(args):
    """Generate the Excel workbook of all (or one tier of) catalog queries."""
    from track_analytics.reports.query_report import generate_excel

    print("\n" + "=" * 70)
    print("  TRACK ANALYTICS — QUERY REPORT")
    print("=" * 70)
    print(f"  Started: {datetime.now():%Y-%m-%d %H:%M:%S}")

    store = _load_store(args)
    if args.output:
        out = Path(args.output)
    else:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        out = REPORTS_FOLDER / f"Track_Query_Report_{timestamp}.xlsx"

    path = generate_excel(store.table, out, tier=args.tier)
    print(f"\n  Report saved to: {path}")
    print("=" * 70 + "\n")


def cmd_serve(args):
    """Start the API server."""
    import uvicorn
    print(f"\nStarting Track Analytics API on port {args.port}...")
    uvicorn.run("track_analytics.main:app", host="0.0.0.0", port=args.port, reload=args.reload,
                timeout_keep_alive=65)


def _add_source_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--csv", help="Load this CSV instead of scanning the inbox")
    p.add_argument("--lenient", action="store_true", help="Skip rows that fail type checks instead of aborting")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Track Analytics — Spotify & YouTube track metadata queries",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command")

    queries_parser = subparsers.add_parser("queries", help="List catalog queries")
    queries_parser.add_argument("--tier", choices=TIERS, help="Only this tier")
    queries_parser.set_defaults(func=cmd_queries)

    run_parser = subparsers.add_parser("run", help="Run one query")
    run_parser.add_argument("name", help="Query name (see 'queries')")
    run_parser.add_argument("--limit", type=int, help="Print at most N rows")
    run_parser.add_argument("--output", help="Write rows to .csv, .json or .xlsx")
    _add_source_args(run_parser)
    run_parser.set_defaults(func=cmd_run)

    overview_parser = subparsers.add_parser("overview", help="Dataset overview")
    _add_source_args(overview_parser)
    overview_parser.set_defaults(func=cmd_overview)

    report_parser = subparsers.add_parser("report", help="Excel report of query results")
    report_parser.add_argument("--tier", choices=TIERS, help="Only this tier")
    report_parser.add_argument("--output", help="Workbook path (default: reports folder)")
    _add_source_args(report_parser)
    report_parser.set_defaults(func=cmd_report)

    serve_parser = subparsers.add_parser("serve", help="Start API server")
    serve_parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8000")), help="Port (default 8000)")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    serve_parser.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 0

    try:
        args.func(args)
    except (TrackAnalyticsError, ValueError, OSError) as exc:
        print(f"  Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

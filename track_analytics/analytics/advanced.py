"""
Advanced-tier queries — per-artist dense ranking, comparison against a
global average, per-album ranges, ratio filters, and running totals.
"""
from __future__ import annotations

import numpy as np
import pandas as pd

from track_analytics.analytics.common import dense_rank, empty_result, greater_than, sort_desc
from track_analytics.config import ENERGY_LIVENESS_RATIO, RANK_LIMIT
from track_analytics.errors import EmptyInputError


def top_tracks_per_artist(df: pd.DataFrame, limit: int = RANK_LIMIT) -> pd.DataFrame:
    """Each artist's most viewed tracks by dense rank, keeping ranks 1..limit.

    Views are summed per (artist, track) first, so repeated rows for the
    same track count once.
    """
    columns = ["artist", "track", "total_views", "rank"]
    if df.empty:
        return empty_result(columns)
    g = df.groupby(["artist", "track"], dropna=False, sort=False)["views"].sum().reset_index(name="total_views")
    ranked = dense_rank(g, ["artist"], "total_views", tiebreak=["track"])
    return ranked[ranked["rank"] <= limit].reset_index(drop=True)[columns]


def above_average_liveness(df: pd.DataFrame) -> pd.DataFrame:
    """Tracks whose liveness is strictly above the table-wide average."""
    liveness = df["liveness"].dropna()
    if liveness.empty:
        raise EmptyInputError("above_average_liveness", "no liveness values to average")
    average = liveness.mean()
    hits = df[greater_than(df["liveness"], average)]
    return hits[["track", "artist", "liveness"]].reset_index(drop=True)


def album_energy_range(df: pd.DataFrame) -> pd.DataFrame:
    columns = ["album", "highest_energy", "lowest_energy", "energy_diff"]
    if df.empty:
        return empty_result(columns)
    g = df.groupby("album", dropna=False, sort=False)["energy"].agg(
        highest_energy="max",
        lowest_energy="min",
    ).reset_index()
    g["energy_diff"] = g["highest_energy"] - g["lowest_energy"]
    return sort_desc(g, "energy_diff", ["album"])[columns]


def high_energy_liveness_ratio(df: pd.DataFrame, threshold: float = ENERGY_LIVENESS_RATIO) -> pd.DataFrame:
    """Tracks whose energy / liveness exceeds threshold.

    Rows with zero or missing liveness have no ratio and are skipped.
    """
    columns = ["track", "artist", "energy_to_liveness"]
    live = df[greater_than(df["liveness"], 0)]
    if live.empty:
        return empty_result(columns)
    ratio = live["energy"] / live["liveness"]
    hits = live.assign(energy_to_liveness=ratio)[greater_than(ratio, threshold)]
    ordered = hits.sort_values("energy_to_liveness", ascending=False, kind="mergesort")
    return ordered[columns].reset_index(drop=True)


def cumulative_likes_by_views(df: pd.DataFrame) -> pd.DataFrame:
    """Running total of likes with tracks ordered by views ascending.

    Tracks tied on views are peers: each gets the running total through the
    end of its tie group. Missing likes add nothing to the total.
    """
    columns = ["track", "views", "likes", "cumulative_likes"]
    if df.empty:
        return empty_result(columns)
    ordered = df[["track", "views", "likes"]].sort_values(
        "views", kind="mergesort", na_position="last"
    ).reset_index(drop=True)

    running = ordered["likes"].fillna(0).astype("int64").cumsum()
    # Peers share the last running value of their group; missing views form one group
    peer_key = ordered["views"].fillna(np.inf)
    cumulative = running.groupby(peer_key, sort=False).transform("last")
    return ordered.assign(cumulative_likes=cumulative.astype("int64"))[columns]

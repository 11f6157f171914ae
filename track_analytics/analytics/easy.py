"""
Easy-tier queries — filters, distinct pairs, a licensed total, per-artist counts.
"""
from __future__ import annotations

import pandas as pd

from track_analytics.analytics.common import empty_result, greater_than, is_true, sort_desc
from track_analytics.config import BILLION_STREAMS, SINGLE_ALBUM_TYPE


def billion_streams(df: pd.DataFrame) -> pd.DataFrame:
    """Tracks with more than one billion streams, in table order."""
    return df[greater_than(df["stream"], BILLION_STREAMS)].reset_index(drop=True)


def albums_by_artist(df: pd.DataFrame) -> pd.DataFrame:
    """Every distinct (album, artist) pair, sorted by album then artist."""
    pairs = df[["album", "artist"]].drop_duplicates()
    return pairs.sort_values(["album", "artist"], kind="mergesort", na_position="last").reset_index(drop=True)


def licensed_comments_total(df: pd.DataFrame) -> pd.DataFrame:
    """Total comments across licensed tracks, as a single row."""
    if df.empty:
        return empty_result(["total_comments"])
    total = df.loc[is_true(df["licensed"]), "comments"].sum()
    return pd.DataFrame({"total_comments": [int(total)]})


def singles(df: pd.DataFrame) -> pd.DataFrame:
    """Tracks released as singles, in table order."""
    return df[df["album_type"] == SINGLE_ALBUM_TYPE].reset_index(drop=True)


def tracks_per_artist(df: pd.DataFrame) -> pd.DataFrame:
    """Number of tracks per artist, most prolific first."""
    if df.empty:
        return empty_result(["artist", "total_tracks"])
    counts = df.groupby("artist", dropna=False, sort=False).size().reset_index(name="total_tracks")
    return sort_desc(counts, "total_tracks", ["artist"])

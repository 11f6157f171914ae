"""
Medium-tier queries — grouped averages and sums, top-N cuts, and the
Spotify versus YouTube stream split.
"""
from __future__ import annotations

import pandas as pd

from track_analytics.analytics.common import empty_result, is_true, sort_desc, top_n
from track_analytics.config import SPOTIFY, TOP_N, YOUTUBE


def avg_danceability_by_album(df: pd.DataFrame) -> pd.DataFrame:
    if df.empty:
        return empty_result(["album", "avg_danceability"])
    g = df.groupby("album", dropna=False, sort=False)["danceability"].mean().reset_index(name="avg_danceability")
    return sort_desc(g, "avg_danceability", ["album"])


def top_energy_tracks(df: pd.DataFrame, n: int = TOP_N) -> pd.DataFrame:
    """Highest average energy per track name, at most n rows."""
    if df.empty:
        return empty_result(["track", "avg_energy"])
    g = df.groupby("track", dropna=False, sort=False)["energy"].mean().reset_index(name="avg_energy")
    return top_n(g, "avg_energy", ["track"], n)


def top_official_video_tracks(df: pd.DataFrame, n: int = TOP_N) -> pd.DataFrame:
    """Official-video tracks with the most views, with their total likes."""
    videos = df[is_true(df["official_video"])]
    if videos.empty:
        return empty_result(["track", "total_views", "total_likes"])
    g = videos.groupby("track", dropna=False, sort=False).agg(
        total_views=("views", "sum"),
        total_likes=("likes", "sum"),
    ).reset_index()
    return top_n(g, "total_views", ["track"], n)


def views_by_album_track(df: pd.DataFrame) -> pd.DataFrame:
    if df.empty:
        return empty_result(["album", "track", "total_views"])
    g = df.groupby(["album", "track"], dropna=False, sort=False)["views"].sum().reset_index(name="total_views")
    return sort_desc(g, "total_views", ["album", "track"])


def spotify_over_youtube(df: pd.DataFrame) -> pd.DataFrame:
    """Tracks streamed more on Spotify than on YouTube.

    Per track, streams are summed separately for rows most played on each
    platform, defaulting to 0. Tracks with no YouTube streams at all are
    left out, even when their Spotify total is positive.
    """
    columns = ["track", "streamed_on_youtube", "streamed_on_spotify"]
    if df.empty:
        return empty_result(columns)

    platform = df["most_played_on"]
    split = pd.DataFrame({
        "track": df["track"],
        "streamed_on_youtube": df["stream"].where(platform == YOUTUBE),
        "streamed_on_spotify": df["stream"].where(platform == SPOTIFY),
    })
    # sum() skips missing values, so a track with no matching rows totals 0
    totals = split.groupby("track", dropna=False, sort=False).sum().reset_index()

    keep = (totals["streamed_on_spotify"] > totals["streamed_on_youtube"]) & (totals["streamed_on_youtube"] != 0)
    result = totals[keep.fillna(False).astype(bool)]
    return sort_desc(result, "streamed_on_spotify", ["track"])[columns]

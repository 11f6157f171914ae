"""
Query catalog — every named analytical query, its tier, and its output columns.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import pandas as pd

from track_analytics.analytics import advanced, easy, medium
from track_analytics.data.schemas import FIELD_KINDS, TRACK_COLUMNS, FieldKind
from track_analytics.errors import UnknownQueryError


ColSpec = tuple[str, str, str]  # (key, col_type, label)

TIERS = ("easy", "medium", "advanced")

_KIND_COL_TYPES = {
    FieldKind.TEXT: "text",
    FieldKind.FLOAT: "float",
    FieldKind.INTEGER: "number",
    FieldKind.BOOLEAN: "text",
}


def _label(key: str) -> str:
    return key.replace("_", " ").title()


def _cols(*specs: tuple[str, str]) -> list[ColSpec]:
    return [(key, col_type, _label(key)) for key, col_type in specs]


TRACK_COLS: list[ColSpec] = _cols(*[(c, _KIND_COL_TYPES[FIELD_KINDS[c]]) for c in TRACK_COLUMNS])


@dataclass(frozen=True)
class QueryEntry:
    name: str
    tier: str
    description: str
    func: Callable[[pd.DataFrame], pd.DataFrame]
    columns: list[ColSpec]

    @property
    def column_names(self) -> list[str]:
        return [key for key, _, _ in self.columns]

    def describe(self) -> dict:
        return {
            "name": self.name,
            "tier": self.tier,
            "description": self.description,
            "columns": self.column_names,
        }


_ENTRIES = [
    # -- easy --------------------------------------------------------------
    QueryEntry(
        "billion_streams", "easy",
        "Tracks with more than 1 billion streams",
        easy.billion_streams, TRACK_COLS,
    ),
    QueryEntry(
        "albums_by_artist", "easy",
        "All albums with their artists, sorted by album",
        easy.albums_by_artist, _cols(("album", "text"), ("artist", "text")),
    ),
    QueryEntry(
        "licensed_comments_total", "easy",
        "Total comments on licensed tracks",
        easy.licensed_comments_total, _cols(("total_comments", "number")),
    ),
    QueryEntry(
        "singles", "easy",
        "Tracks whose album type is single",
        easy.singles, TRACK_COLS,
    ),
    QueryEntry(
        "tracks_per_artist", "easy",
        "Number of tracks per artist, most first",
        easy.tracks_per_artist, _cols(("artist", "text"), ("total_tracks", "number")),
    ),
    # -- medium ------------------------------------------------------------
    QueryEntry(
        "avg_danceability_by_album", "medium",
        "Average danceability per album, highest first",
        medium.avg_danceability_by_album, _cols(("album", "text"), ("avg_danceability", "float")),
    ),
    QueryEntry(
        "top_energy_tracks", "medium",
        "Top 5 tracks by average energy",
        medium.top_energy_tracks, _cols(("track", "text"), ("avg_energy", "float")),
    ),
    QueryEntry(
        "top_official_video_tracks", "medium",
        "Top 5 official-video tracks by views, with total likes",
        medium.top_official_video_tracks,
        _cols(("track", "text"), ("total_views", "number"), ("total_likes", "number")),
    ),
    QueryEntry(
        "views_by_album_track", "medium",
        "Total views per album and track, most first",
        medium.views_by_album_track,
        _cols(("album", "text"), ("track", "text"), ("total_views", "number")),
    ),
    QueryEntry(
        "spotify_over_youtube", "medium",
        "Tracks streamed more on Spotify than on YouTube",
        medium.spotify_over_youtube,
        _cols(("track", "text"), ("streamed_on_youtube", "number"), ("streamed_on_spotify", "number")),
    ),
    # -- advanced ----------------------------------------------------------
    QueryEntry(
        "top_tracks_per_artist", "advanced",
        "Each artist's top 3 tracks by views (dense rank)",
        advanced.top_tracks_per_artist,
        _cols(("artist", "text"), ("track", "text"), ("total_views", "number"), ("rank", "number")),
    ),
    QueryEntry(
        "above_average_liveness", "advanced",
        "Tracks with liveness above the overall average",
        advanced.above_average_liveness,
        _cols(("track", "text"), ("artist", "text"), ("liveness", "float")),
    ),
    QueryEntry(
        "album_energy_range", "advanced",
        "Difference between highest and lowest energy per album",
        advanced.album_energy_range,
        _cols(("album", "text"), ("highest_energy", "float"), ("lowest_energy", "float"), ("energy_diff", "float")),
    ),
    QueryEntry(
        "high_energy_liveness_ratio", "advanced",
        "Tracks whose energy-to-liveness ratio exceeds 1.2",
        advanced.high_energy_liveness_ratio,
        _cols(("track", "text"), ("artist", "text"), ("energy_to_liveness", "float")),
    ),
    QueryEntry(
        "cumulative_likes_by_views", "advanced",
        "Running total of likes, tracks ordered by views",
        advanced.cumulative_likes_by_views,
        _cols(("track", "text"), ("views", "number"), ("likes", "number"), ("cumulative_likes", "number")),
    ),
]

CATALOG: dict[str, QueryEntry] = {e.name: e for e in _ENTRIES}


def get_entry(name: str, catalog: dict[str, QueryEntry] = CATALOG) -> QueryEntry:
    entry = catalog.get(name)
    if entry is None:
        raise UnknownQueryError(name)
    return entry


def entries(tier: str | None = None, catalog: dict[str, QueryEntry] = CATALOG) -> list[QueryEntry]:
    """Catalog entries in registration order, optionally for one tier."""
    return [e for e in catalog.values() if tier is None or e.tier == tier]

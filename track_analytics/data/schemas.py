"""
Track record schema and the immutable table value passed to queries.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

import pandas as pd


class FieldKind(str, Enum):
    TEXT = "text"
    FLOAT = "float"
    INTEGER = "integer"
    BOOLEAN = "boolean"


TEXT_FIELDS = [
    "artist", "track", "album", "album_type", "title", "channel", "most_played_on",
]
FLOAT_FIELDS = [
    "danceability", "energy", "loudness", "speechiness", "acousticness",
    "instrumentalness", "liveness", "valence", "tempo", "duration_min",
    "views", "energy_liveness",
]
INTEGER_FIELDS = ["likes", "comments", "stream"]
BOOLEAN_FIELDS = ["licensed", "official_video"]

# Column order of the track table (matches the source dataset layout)
TRACK_COLUMNS = [
    "artist", "track", "album", "album_type",
    "danceability", "energy", "loudness", "speechiness", "acousticness",
    "instrumentalness", "liveness", "valence", "tempo", "duration_min",
    "title", "channel", "views", "likes", "comments",
    "licensed", "official_video", "stream", "energy_liveness", "most_played_on",
]

FIELD_KINDS: dict[str, FieldKind] = {
    **{f: FieldKind.TEXT for f in TEXT_FIELDS},
    **{f: FieldKind.FLOAT for f in FLOAT_FIELDS},
    **{f: FieldKind.INTEGER for f in INTEGER_FIELDS},
    **{f: FieldKind.BOOLEAN for f in BOOLEAN_FIELDS},
}

# pandas dtype per kind — nullable where the source data has blanks
DTYPES = {
    FieldKind.TEXT: "object",
    FieldKind.FLOAT: "float64",
    FieldKind.INTEGER: "Int64",
    FieldKind.BOOLEAN: "boolean",
}

REQUIRED_FIELDS = {"duration_min"}


def empty_track_frame() -> pd.DataFrame:
    """A zero-row frame with every schema column at its declared dtype."""
    return pd.DataFrame({
        col: pd.Series(dtype=DTYPES[FIELD_KINDS[col]]) for col in TRACK_COLUMNS
    })


@dataclass(frozen=True)
class RejectedRow:
    """A source row skipped during a lenient load."""
    row: int
    field: str
    value: object
    reason: str


@dataclass(frozen=True, eq=False)
class TrackTable:
    """The track table.

    Built once by the loader, cleaned once, then only read. Query functions
    receive ``df`` and must never modify it.
    """
    df: pd.DataFrame
    cleaned: bool = False
    rejected: tuple[RejectedRow, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.df)

    @property
    def is_empty(self) -> bool:
        return self.df.empty

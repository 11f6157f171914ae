import pandas as pd
import pytest

from track_analytics.data.cleaner import clean
from track_analytics.data.loader import load_rows


BASE_ROW = {
    "artist": "Gorillaz",
    "track": "Feel Good Inc.",
    "album": "Demon Days",
    "album_type": "album",
    "danceability": "0.818",
    "energy": "0.705",
    "loudness": "-6.679",
    "speechiness": "0.177",
    "acousticness": "0.00836",
    "instrumentalness": "0.00233",
    "liveness": "0.613",
    "valence": "0.772",
    "tempo": "138.559",
    "duration_min": "3.7",
    "title": "Gorillaz - Feel Good Inc. (Official Video)",
    "channel": "Gorillaz",
    "views": "693555221",
    "likes": "6220896",
    "comments": "169907",
    "licensed": "True",
    "official_video": "True",
    "stream": "1040234854",
    "energy_liveness": "1.15",
    "most_played_on": "Spotify",
}


def make_row(**fields) -> dict:
    """A valid raw row with the given fields overridden."""
    row = dict(BASE_ROW)
    row.update(fields)
    return row


def cleaned_frame(*rows) -> pd.DataFrame:
    return clean(load_rows(rows)).df


def write_csv(path, rows) -> None:
    pd.DataFrame(rows).to_csv(path, index=False)


@pytest.fixture
def sample_rows():
    return [
        make_row(artist="Gorillaz", track="Feel Good Inc.", album="Demon Days", views="1000", stream="2000000000"),
        make_row(artist="Gorillaz", track="DARE", album="Demon Days", album_type="single", views="500",
                 energy="0.9", liveness="0.2"),
        make_row(artist="Daft Punk", track="One More Time", album="Discovery", views="800", licensed="False",
                 most_played_on="Youtube", stream="300"),
        make_row(artist="Daft Punk", track="Broken", album="Discovery", duration_min="0"),
    ]

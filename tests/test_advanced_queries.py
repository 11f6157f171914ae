import pandas as pd
import pytest

from conftest import cleaned_frame, make_row
from track_analytics.analytics import advanced
from track_analytics.analytics.common import dense_rank, to_records
from track_analytics.errors import EmptyInputError


def test_dense_rank_ties_share_rank_without_gaps():
    df = pd.DataFrame({
        "artist": ["A", "A", "A", "A"],
        "track": ["t1", "t2", "t3", "t4"],
        "total_views": [300.0, 300.0, 200.0, 100.0],
    })
    ranked = dense_rank(df, ["artist"], "total_views", tiebreak=["track"])
    assert ranked["rank"].tolist() == [1, 1, 2, 3]


def test_dense_rank_restarts_per_partition():
    df = pd.DataFrame({
        "artist": ["B", "A", "B", "A"],
        "total_views": [5.0, 7.0, 9.0, 7.0],
    })
    ranked = dense_rank(df, ["artist"], "total_views")
    assert list(zip(ranked["artist"], ranked["total_views"], ranked["rank"])) == [
        ("A", 7.0, 1), ("A", 7.0, 1), ("B", 9.0, 1), ("B", 5.0, 2),
    ]


def test_top_tracks_per_artist_keeps_first_three_distinct_ranks():
    df = cleaned_frame(
        make_row(artist="A", track="t1", views="300"),
        make_row(artist="A", track="t2", views="300"),
        make_row(artist="A", track="t3", views="200"),
        make_row(artist="A", track="t4", views="100"),
        make_row(artist="A", track="t5", views="50"),
        make_row(artist="B", track="only", views="1"),
    )
    rows = to_records(advanced.top_tracks_per_artist(df))
    assert [(r["artist"], r["track"], r["rank"]) for r in rows] == [
        ("A", "t1", 1), ("A", "t2", 1), ("A", "t3", 2), ("A", "t4", 3),
        ("B", "only", 1),
    ]


def test_top_tracks_per_artist_sums_repeated_tracks_first():
    df = cleaned_frame(
        make_row(artist="A", track="x", views="60"),
        make_row(artist="A", track="x", views="60"),
        make_row(artist="A", track="y", views="100"),
    )
    rows = to_records(advanced.top_tracks_per_artist(df))
    assert rows[0] == {"artist": "A", "track": "x", "total_views": 120.0, "rank": 1}
    assert rows[1]["track"] == "y"
    assert rows[1]["rank"] == 2


def test_above_average_liveness_is_strict():
    df = cleaned_frame(
        make_row(track="low", liveness="0.1"),
        make_row(track="high", liveness="0.9"),
        make_row(track="mid", liveness="0.5"),
    )
    rows = to_records(advanced.above_average_liveness(df))
    assert rows == [{"track": "high", "artist": "Gorillaz", "liveness": 0.9}]


def test_above_average_liveness_on_empty_table_raises():
    with pytest.raises(EmptyInputError):
        advanced.above_average_liveness(cleaned_frame())


def test_above_average_liveness_without_values_raises():
    df = cleaned_frame(make_row(liveness=""), make_row(liveness=""))
    with pytest.raises(EmptyInputError):
        advanced.above_average_liveness(df)


def test_album_energy_range():
    df = cleaned_frame(
        make_row(album="Demon Days", energy="0.2"),
        make_row(album="Demon Days", energy="0.8"),
        make_row(album="Demon Days", energy="0.5"),
        make_row(album="Discovery", energy="0.6"),
        make_row(album="Discovery", energy="0.7"),
    )
    rows = to_records(advanced.album_energy_range(df))
    assert [r["album"] for r in rows] == ["Demon Days", "Discovery"]
    assert rows[0]["energy_diff"] == pytest.approx(0.6)
    assert rows[0]["highest_energy"] == pytest.approx(0.8)
    assert rows[0]["lowest_energy"] == pytest.approx(0.2)
    assert rows[1]["energy_diff"] == pytest.approx(0.1)


def test_high_energy_liveness_ratio():
    df = cleaned_frame(
        make_row(track="ratio-1.8", energy="0.9", liveness="0.5"),
        make_row(track="ratio-1.0", energy="0.5", liveness="0.5"),
        make_row(track="no-liveness", energy="0.9", liveness="0"),
        make_row(track="ratio-4", energy="0.8", liveness="0.2"),
    )
    rows = to_records(advanced.high_energy_liveness_ratio(df))
    assert [r["track"] for r in rows] == ["ratio-4", "ratio-1.8"]
    assert rows[0]["energy_to_liveness"] == pytest.approx(4.0)


def test_cumulative_likes_peers_share_running_total():
    df = cleaned_frame(
        make_row(track="a", views="100", likes="1"),
        make_row(track="d", views="300", likes="2"),
        make_row(track="b", views="200", likes="3"),
        make_row(track="c", views="200", likes="4"),
    )
    rows = to_records(advanced.cumulative_likes_by_views(df))
    assert [r["track"] for r in rows] == ["a", "b", "c", "d"]
    assert [r["cumulative_likes"] for r in rows] == [1, 8, 8, 10]


def test_cumulative_likes_treats_missing_likes_as_zero():
    df = cleaned_frame(
        make_row(track="a", views="1", likes=""),
        make_row(track="b", views="2", likes="5"),
    )
    rows = to_records(advanced.cumulative_likes_by_views(df))
    assert [r["cumulative_likes"] for r in rows] == [0, 5]
    assert rows[0]["likes"] is None


def test_advanced_queries_on_empty_table_return_nothing():
    df = cleaned_frame()
    for query in (advanced.top_tracks_per_artist, advanced.album_energy_range,
                  advanced.high_energy_liveness_ratio, advanced.cumulative_likes_by_views):
        assert to_records(query(df)) == []

from conftest import cleaned_frame, make_row
from track_analytics.analytics import easy
from track_analytics.analytics.common import to_records


def test_billion_streams_is_strictly_greater_and_keeps_order():
    df = cleaned_frame(
        make_row(track="huge", stream="2000000000"),
        make_row(track="small", stream="500000000"),
        make_row(track="unknown", stream=""),
        make_row(track="exactly", stream="1000000000"),
        make_row(track="also-huge", stream="1500000000"),
    )
    result = easy.billion_streams(df)
    assert result["track"].tolist() == ["huge", "also-huge"]
    assert list(result.columns) == list(df.columns)


def test_albums_by_artist_distinct_and_sorted():
    df = cleaned_frame(
        make_row(album="Plastic Beach", artist="Gorillaz"),
        make_row(album="Discovery", artist="Daft Punk"),
        make_row(album="Plastic Beach", artist="Gorillaz"),
        make_row(album="Demon Days", artist="Gorillaz"),
    )
    rows = to_records(easy.albums_by_artist(df))
    assert rows == [
        {"album": "Demon Days", "artist": "Gorillaz"},
        {"album": "Discovery", "artist": "Daft Punk"},
        {"album": "Plastic Beach", "artist": "Gorillaz"},
    ]


def test_licensed_comments_total_ignores_unlicensed_and_missing():
    df = cleaned_frame(
        make_row(licensed="True", comments="10"),
        make_row(licensed="True", comments="20"),
        make_row(licensed="False", comments="100"),
        make_row(licensed="", comments="1000"),
        make_row(licensed="True", comments=""),
    )
    assert to_records(easy.licensed_comments_total(df)) == [{"total_comments": 30}]


def test_licensed_comments_total_without_licensed_tracks_is_zero():
    df = cleaned_frame(make_row(licensed="False", comments="5"))
    assert to_records(easy.licensed_comments_total(df)) == [{"total_comments": 0}]


def test_singles_matches_album_type_exactly():
    df = cleaned_frame(
        make_row(track="s1", album_type="single"),
        make_row(track="a1", album_type="album"),
        make_row(track="c1", album_type="compilation"),
        make_row(track="s2", album_type="single"),
    )
    assert easy.singles(df)["track"].tolist() == ["s1", "s2"]


def test_tracks_per_artist_breaks_ties_by_name():
    df = cleaned_frame(
        make_row(artist="Gorillaz"),
        make_row(artist="Blur"),
        make_row(artist="Gorillaz"),
        make_row(artist="Daft Punk"),
        make_row(artist="Daft Punk"),
        make_row(artist="Gorillaz"),
        make_row(artist="Daft Punk"),
    )
    rows = to_records(easy.tracks_per_artist(df))
    assert rows == [
        {"artist": "Daft Punk", "total_tracks": 3},
        {"artist": "Gorillaz", "total_tracks": 3},
        {"artist": "Blur", "total_tracks": 1},
    ]


def test_easy_queries_on_empty_table_return_nothing():
    df = cleaned_frame()
    for query in (easy.billion_streams, easy.albums_by_artist, easy.licensed_comments_total,
                  easy.singles, easy.tracks_per_artist):
        assert to_records(query(df)) == []

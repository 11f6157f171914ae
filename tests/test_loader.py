import pandas as pd
import pytest

from conftest import make_row, write_csv
from track_analytics.data.loader import discover_csvs, load_all_csvs, load_csv, load_rows
from track_analytics.data.schemas import TRACK_COLUMNS
from track_analytics.errors import ValidationError


def test_load_rows_coerces_declared_types():
    table = load_rows([make_row()])
    df = table.df

    assert list(df.columns) == TRACK_COLUMNS
    assert df["danceability"].dtype == "float64"
    assert str(df["likes"].dtype) == "Int64"
    assert str(df["licensed"].dtype) == "boolean"
    assert df.loc[0, "duration_min"] == pytest.approx(3.7)
    assert df.loc[0, "stream"] == 1040234854
    assert bool(df.loc[0, "official_video"]) is True
    assert df.loc[0, "artist"] == "Gorillaz"
    assert table.cleaned is False


def test_raw_dataset_headers_are_mapped():
    row = {
        "Artist": "Daft Punk",
        "Track": "Digital Love",
        "Duration_min": "4.97",
        "most_playedon": "Youtube",
        "EnergyLiveness": "2.5",
        "Album_type": "album",
    }
    df = load_rows([row]).df

    assert df.loc[0, "artist"] == "Daft Punk"
    assert df.loc[0, "most_played_on"] == "Youtube"
    assert df.loc[0, "energy_liveness"] == pytest.approx(2.5)
    assert df.loc[0, "album_type"] == "album"
    assert pd.isna(df.loc[0, "likes"])
    assert df.loc[0, "album"] is None


def test_duration_derived_from_milliseconds():
    df = load_rows([{"track": "Around the World", "duration_ms": "180000"}]).df
    assert df.loc[0, "duration_min"] == pytest.approx(3.0)


def test_missing_duration_column_is_rejected():
    with pytest.raises(ValidationError) as exc:
        load_rows([{"track": "No Duration"}])
    assert exc.value.field == "duration_min"


def test_strict_load_reports_lowest_bad_row():
    rows = [
        make_row(),
        make_row(energy="loud"),
        make_row(likes="many"),
    ]
    with pytest.raises(ValidationError) as exc:
        load_rows(rows, strict=True)

    assert exc.value.row == 1
    assert exc.value.field == "energy"
    assert exc.value.value == "loud"


def test_first_bad_field_in_schema_order_wins():
    with pytest.raises(ValidationError) as exc:
        load_rows([make_row(likes="x", energy="y")], strict=True)
    assert exc.value.field == "energy"


def test_fractional_integer_is_invalid():
    with pytest.raises(ValidationError) as exc:
        load_rows([make_row(likes="1.5")], strict=True)
    assert exc.value.field == "likes"


def test_large_integers_load_exactly():
    table = load_rows([make_row(stream="9007199254740993", likes="9223372036854775807")])
    assert table.df.at[0, "stream"] == 9007199254740993
    assert table.df.at[0, "likes"] == 9223372036854775807


def test_integer_outside_int64_is_invalid():
    with pytest.raises(ValidationError) as exc:
        load_rows([make_row(likes="9223372036854775808")], strict=True)
    assert exc.value.field == "likes"


def test_whole_float_text_is_a_valid_integer():
    table = load_rows([make_row(views="1200.0", comments="1e3")])
    assert table.df.at[0, "views"] == 1200
    assert table.df.at[0, "comments"] == 1000


def test_unknown_boolean_token_is_invalid():
    with pytest.raises(ValidationError) as exc:
        load_rows([make_row(licensed="maybe")], strict=True)
    assert exc.value.field == "licensed"


def test_blank_duration_is_invalid():
    with pytest.raises(ValidationError) as exc:
        load_rows([make_row(duration_min="")], strict=True)
    assert exc.value.field == "duration_min"
    assert exc.value.reason == "missing required value"


def test_boolean_tokens_and_blanks():
    df = load_rows([
        make_row(licensed="yes"),
        make_row(licensed="0"),
        make_row(licensed=""),
        make_row(licensed=True),
    ]).df

    assert df["licensed"].tolist()[:2] == [True, False]
    assert pd.isna(df.loc[2, "licensed"])
    assert bool(df.loc[3, "licensed"]) is True


def test_blank_numbers_load_as_missing():
    df = load_rows([make_row(likes="", views="", comments=None)]).df
    assert pd.isna(df.loc[0, "likes"])
    assert pd.isna(df.loc[0, "views"])
    assert pd.isna(df.loc[0, "comments"])


def test_thousands_separators_are_accepted():
    df = load_rows([make_row(views="1,234,567")]).df
    assert df.loc[0, "views"] == 1234567.0


def test_lenient_load_skips_and_records_rejections():
    rows = [
        make_row(track="ok-1"),
        make_row(track="bad", tempo="fast"),
        make_row(track="ok-2"),
    ]
    table = load_rows(rows, strict=False)

    assert table.df["track"].tolist() == ["ok-1", "ok-2"]
    assert len(table.rejected) == 1
    rejected = table.rejected[0]
    assert (rejected.row, rejected.field, rejected.value) == (1, "tempo", "fast")


def test_empty_input_gives_empty_table():
    table = load_rows([])
    assert table.is_empty
    assert list(table.df.columns) == TRACK_COLUMNS


def test_load_csv_drops_index_column(tmp_path):
    path = tmp_path / "Spotify_Youtube.csv"
    pd.DataFrame([make_row(), make_row(track="DARE")]).to_csv(path, index=True)

    df = load_csv(path).df
    assert len(df) == 2
    assert df["track"].tolist() == ["Feel Good Inc.", "DARE"]
    assert list(df.columns) == TRACK_COLUMNS


def test_discover_csvs_matches_keywords(tmp_path):
    (tmp_path / "2024").mkdir()
    write_csv(tmp_path / "Spotify_Youtube.csv", [make_row()])
    write_csv(tmp_path / "2024" / "track_extra.csv", [make_row()])
    write_csv(tmp_path / "notes.csv", [make_row()])

    found = discover_csvs(tmp_path)
    assert [p.name for p in found] == ["track_extra.csv", "Spotify_Youtube.csv"]


def test_discover_csvs_missing_inbox(tmp_path):
    assert discover_csvs(tmp_path / "nope") == []


def test_load_all_csvs_concatenates_files(tmp_path):
    write_csv(tmp_path / "spotify_a.csv", [make_row(track="a1"), make_row(track="a2")])
    write_csv(tmp_path / "spotify_b.csv", [make_row(track="b1")])

    table = load_all_csvs(tmp_path)
    assert table.df["track"].tolist() == ["a1", "a2", "b1"]


def test_load_all_csvs_offsets_rejected_rows(tmp_path):
    write_csv(tmp_path / "spotify_a.csv", [make_row(track="a1"), make_row(track="a2")])
    write_csv(tmp_path / "spotify_b.csv", [make_row(track="b1", energy="high")])

    table = load_all_csvs(tmp_path, strict=False)
    assert table.df["track"].tolist() == ["a1", "a2"]
    assert [r.row for r in table.rejected] == [2]


def test_load_all_csvs_strict_error_counts_across_files(tmp_path):
    write_csv(tmp_path / "spotify_a.csv", [make_row(track="a1"), make_row(track="a2")])
    write_csv(tmp_path / "spotify_b.csv", [make_row(track="b1", energy="bad")])

    with pytest.raises(ValidationError) as exc:
        load_all_csvs(tmp_path, strict=True)
    assert exc.value.row == 2
    assert exc.value.field == "energy"
    assert "spotify_b.csv" in str(exc.value)

from __future__ import annotations

import math

import pytest

from conftest import make_raw_feed
from linewatch.domain.algorithms.feed_tables import build_feed_tables, parse_table
from linewatch.domain.exceptions import FeedParseError

pytestmark = pytest.mark.unit


def test_parse_table_handles_quotes_short_and_long_rows() -> None:
    text = (
        "\ufeffa, b ,c\n"
        '1,"x, y",3\n'
        "\n"
        "short,row\n"
        "4,5,6,extra\n"
    )

    headers, rows = parse_table(text)

    assert headers == ["a", "b", "c"]
    assert rows == [
        {"a": "1", "b": "x, y", "c": "3"},
        {"a": "4", "b": "5", "c": "6"},
    ]


def test_parse_table_of_empty_text() -> None:
    assert parse_table("") == ([], [])


def test_build_feed_tables_sorts_shapes_and_stop_times(raw_feed) -> None:
    tables = build_feed_tables(raw_feed)

    s1 = tables.shapes_by_id["S1"]
    assert [p.lon for p in s1] == [17.0, 17.01, 17.02]
    assert [st.stop_id for st in tables.stop_times_by_trip["T2a"]] == ["P1", "P2"]
    assert tables.trips_by_id["T2a"].headsign == "Krzyki, pętla"
    assert tables.trips_by_id["T2b"].headsign is None
    assert tables.trips_by_id["T9"].shape_id is None


def test_non_numeric_coordinates_become_nan() -> None:
    raw = make_raw_feed(
        shapes=(
            "shape_id,shape_pt_lat,shape_pt_lon,shape_pt_sequence\n"
            "S1,abc,17.0,1\n"
            "S1,51.1,17.1,2\n"
        )
    )

    points = build_feed_tables(raw).shapes_by_id["S1"]

    assert math.isnan(points[0].lat)
    assert not points[0].is_finite
    assert points[1].is_finite


def test_non_numeric_sequence_sorts_last() -> None:
    raw = make_raw_feed(
        shapes=(
            "shape_id,shape_pt_lat,shape_pt_lon,shape_pt_sequence\n"
            "S1,51.0,17.0,?\n"
            "S1,51.1,17.1,20\n"
            "S1,51.2,17.2,3\n"
        )
    )

    points = build_feed_tables(raw).shapes_by_id["S1"]

    assert [p.lat for p in points] == [51.2, 51.1, 51.0]


def test_missing_table_is_a_parse_error() -> None:
    raw = make_raw_feed()
    del raw["shapes"]

    with pytest.raises(FeedParseError, match="shapes"):
        build_feed_tables(raw)


def test_missing_required_column_is_a_parse_error() -> None:
    raw = make_raw_feed(routes="route_id,route_long_name\nR1,One\n")

    with pytest.raises(FeedParseError, match="route_short_name"):
        build_feed_tables(raw)

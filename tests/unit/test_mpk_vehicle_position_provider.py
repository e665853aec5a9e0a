from __future__ import annotations

import pytest

from linewatch.adapters.realtime.mpk_vehicle_position_provider import (
    _parse_positions,
)
from linewatch.domain.models import VehicleReport

pytestmark = pytest.mark.unit


def test_parse_positions_maps_x_to_lat_and_y_to_lon() -> None:
    payload = [
        {"name": "33", "type": "tram", "x": 51.11, "y": 17.03, "k": 1},
        {"name": "a", "x": "51.2", "y": "17.1"},
    ]

    assert _parse_positions(payload) == (
        VehicleReport(line="33", lat=51.11, lon=17.03),
        VehicleReport(line="a", lat=51.2, lon=17.1),
    )


def test_parse_positions_skips_malformed_entries() -> None:
    payload = [
        {"name": "", "x": 51.0, "y": 17.0},
        {"name": "5", "x": None, "y": 17.0},
        {"name": "6", "y": 17.0},
        {"name": "7", "x": "nan", "y": 17.0},
        "garbage",
    ]

    assert _parse_positions(payload) == ()
    assert _parse_positions({"error": "x"}) == ()

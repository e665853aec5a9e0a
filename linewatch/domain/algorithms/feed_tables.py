from __future__ import annotations

import csv
import io
import logging
import math
from typing import Mapping

from linewatch.domain.exceptions import FeedParseError
from linewatch.domain.models import (
    FeedRoute,
    FeedStop,
    FeedTables,
    FeedTrip,
    ShapePoint,
    StopTimeRow,
)

logger = logging.getLogger(__name__)

Row = dict[str, str]

# Columns without which a table is unusable.
REQUIRED_COLUMNS: dict[str, tuple[str, ...]] = {
    "routes": ("route_id", "route_short_name"),
    "trips": ("trip_id", "route_id"),
    "shapes": ("shape_id", "shape_pt_lat", "shape_pt_lon", "shape_pt_sequence"),
    "stop_times": ("trip_id", "stop_id", "stop_sequence"),
    "stops": ("stop_id",),
}


def parse_table(text: str) -> tuple[list[str], list[Row]]:
    """Parse one CSV table into (headers, rows).

    Parsing is lenient:
      - empty lines are ignored
      - a row shorter than the header is skipped
      - extra trailing columns are dropped
      - values stay strings (stripped); coercion happens where they are used
    """

    reader = csv.reader(io.StringIO(text))
    headers: list[str] | None = None
    rows: list[Row] = []
    skipped = 0

    while True:
        try:
            record = next(reader)
        except StopIteration:
            break
        except csv.Error:
            skipped += 1
            continue

        if not record or all(not v.strip() for v in record):
            continue

        if headers is None:
            headers = [h.strip().lstrip("\ufeff").strip() for h in record]
            continue

        if len(record) < len(headers):
            skipped += 1
            continue

        rows.append({h: v.strip() for h, v in zip(headers, record)})

    if skipped:
        logger.debug("Skipped %d malformed rows", skipped)

    return headers or [], rows


def to_float(raw: str | None) -> float:
    """Numeric feed value, or NaN when missing/non-numeric."""

    if raw is None:
        return math.nan
    try:
        return float(raw)
    except ValueError:
        return math.nan


def sequence_key(value: float) -> float:
    # Non-numeric sequence numbers sort last, keeping their feed order.
    return math.inf if math.isnan(value) else value


def _require(raw_tables: Mapping[str, str], name: str) -> list[Row]:
    text = raw_tables.get(name)
    if text is None:
        raise FeedParseError(f"Missing required table: {name}.txt")

    headers, rows = parse_table(text)
    missing = [c for c in REQUIRED_COLUMNS[name] if c not in headers]
    if missing:
        raise FeedParseError(
            f"Table {name}.txt lacks required columns: {', '.join(missing)}"
        )
    return rows


def build_feed_tables(raw_tables: Mapping[str, str]) -> FeedTables:
    """Normalize raw CSV texts (keyed by table name) into typed tables."""

    route_rows = _require(raw_tables, "routes")
    trip_rows = _require(raw_tables, "trips")
    shape_rows = _require(raw_tables, "shapes")
    stop_time_rows = _require(raw_tables, "stop_times")
    stop_rows = _require(raw_tables, "stops")

    routes = tuple(
        FeedRoute(route_id=row["route_id"], short_name=row["route_short_name"])
        for row in route_rows
        if row["route_id"]
    )

    trips = tuple(
        FeedTrip(
            trip_id=row["trip_id"],
            route_id=row["route_id"],
            shape_id=row.get("shape_id") or None,
            headsign=row.get("trip_headsign") or None,
        )
        for row in trip_rows
        if row["trip_id"]
    )
    trips_by_id: dict[str, FeedTrip] = {}
    for trip in trips:
        trips_by_id.setdefault(trip.trip_id, trip)

    points_tmp: dict[str, list[ShapePoint]] = {}
    for row in shape_rows:
        shape_id = row["shape_id"]
        if not shape_id:
            continue
        points_tmp.setdefault(shape_id, []).append(
            ShapePoint(
                lat=to_float(row["shape_pt_lat"]),
                lon=to_float(row["shape_pt_lon"]),
                sequence=to_float(row["shape_pt_sequence"]),
            )
        )
    shapes_by_id = {
        shape_id: tuple(sorted(pts, key=lambda p: sequence_key(p.sequence)))
        for shape_id, pts in points_tmp.items()
    }

    stops_by_id: dict[str, FeedStop] = {}
    for row in stop_rows:
        stop_id = row["stop_id"]
        if not stop_id:
            continue
        stops_by_id[stop_id] = FeedStop(
            stop_id=stop_id,
            name=row.get("stop_name", ""),
            lat=to_float(row.get("stop_lat")),
            lon=to_float(row.get("stop_lon")),
        )

    by_trip: dict[str, list[StopTimeRow]] = {}
    by_stop: dict[str, list[StopTimeRow]] = {}
    for row in stop_time_rows:
        trip_id = row["trip_id"]
        stop_id = row["stop_id"]
        if not trip_id or not stop_id:
            continue
        st = StopTimeRow(
            trip_id=trip_id,
            stop_id=stop_id,
            arrival_time=row.get("arrival_time", ""),
            departure_time=row.get("departure_time", ""),
            stop_sequence=to_float(row["stop_sequence"]),
        )
        by_trip.setdefault(trip_id, []).append(st)
        by_stop.setdefault(stop_id, []).append(st)

    stop_times_by_trip = {
        trip_id: tuple(sorted(entries, key=lambda s: sequence_key(s.stop_sequence)))
        for trip_id, entries in by_trip.items()
    }
    stop_times_by_stop = {stop_id: tuple(v) for stop_id, v in by_stop.items()}

    return FeedTables(
        routes=routes,
        trips=trips,
        trips_by_id=trips_by_id,
        shapes_by_id=shapes_by_id,
        stops_by_id=stops_by_id,
        stop_times_by_trip=stop_times_by_trip,
        stop_times_by_stop=stop_times_by_stop,
    )

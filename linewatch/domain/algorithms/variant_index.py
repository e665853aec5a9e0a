from __future__ import annotations

from linewatch.domain.algorithms.feed_tables import to_float
from linewatch.domain.models import (
    FeedTables,
    FeedTrip,
    RouteVariantSet,
    StopVisit,
    Variant,
)

DIRECTION_SEPARATOR = " → "


def line_ids(tables: FeedTables) -> tuple[str, ...]:
    """Distinct non-empty route short names, in feed order."""

    seen: dict[str, None] = {}
    for route in tables.routes:
        if route.short_name:
            seen.setdefault(route.short_name, None)
    return tuple(seen)


def _stop_visits(tables: FeedTables, trip_id: str) -> tuple[StopVisit, ...]:
    visits: list[StopVisit] = []
    for st in tables.stop_times_by_trip.get(trip_id, ()):
        stop = tables.stops_by_id.get(st.stop_id)
        visits.append(
            StopVisit(
                stop_id=st.stop_id,
                stop_name=stop.name if stop else "",
                lat=stop.lat if stop else to_float(None),
                lon=stop.lon if stop else to_float(None),
                arrival_time=st.arrival_time,
                departure_time=st.departure_time,
                sequence=st.stop_sequence,
            )
        )
    return tuple(visits)


def direction_label(stops: tuple[StopVisit, ...]) -> str:
    first = stops[0].stop_name if stops else ""
    last = stops[-1].stop_name if stops else ""
    return f"{first}{DIRECTION_SEPARATOR}{last}"


def build_route_variants(
    tables: FeedTables,
    *,
    short_name: str,
    route_ids: tuple[str, ...],
    trips: list[FeedTrip],
) -> RouteVariantSet | None:
    """Group one line's trips (in feed order) into shape variants.

    Returns None when no trip belongs to the line, so callers can tell
    "unknown line" apart from "known line without geometry".
    """

    if not trips:
        return None

    # dicts keep first-seen order, which is the resolver's tie-break.
    groups: dict[str, list[FeedTrip]] = {}
    for trip in trips:
        if not trip.shape_id:
            continue
        groups.setdefault(trip.shape_id, []).append(trip)

    variants: list[Variant] = []
    for shape_id, group in groups.items():
        points = tables.shapes_by_id.get(shape_id, ())
        if not points:
            continue

        representative = group[0]
        stops = _stop_visits(tables, representative.trip_id)
        direction = direction_label(stops)
        variants.append(
            Variant(
                shape_id=shape_id,
                route_id=representative.route_id,
                direction=direction,
                headsign=representative.headsign or direction,
                trip_count=len(group),
                shape_points=points,
                stops=stops,
            )
        )

    return RouteVariantSet(
        short_name=short_name,
        route_id=route_ids[0],
        route_ids=route_ids,
        variants=tuple(variants),
    )


def build_variant_index(tables: FeedTables) -> dict[str, RouteVariantSet]:
    """Variant sets for every line of the feed, keyed by short name."""

    line_by_route_id: dict[str, str] = {}
    route_ids_by_line: dict[str, list[str]] = {}
    for route in tables.routes:
        if not route.short_name:
            continue
        line_by_route_id.setdefault(route.route_id, route.short_name)
        route_ids_by_line.setdefault(route.short_name, []).append(route.route_id)

    trips_by_line: dict[str, list[FeedTrip]] = {}
    for trip in tables.trips:
        line = line_by_route_id.get(trip.route_id)
        if line is not None:
            trips_by_line.setdefault(line, []).append(trip)

    index: dict[str, RouteVariantSet] = {}
    for short_name in line_ids(tables):
        variant_set = build_route_variants(
            tables,
            short_name=short_name,
            route_ids=tuple(route_ids_by_line[short_name]),
            trips=trips_by_line.get(short_name, []),
        )
        if variant_set is not None:
            index[short_name] = variant_set
    return index

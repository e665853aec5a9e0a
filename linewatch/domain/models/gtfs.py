from __future__ import annotations

import math
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class FeedRoute:
    route_id: str
    short_name: str


@dataclass(frozen=True, slots=True)
class FeedTrip:
    trip_id: str
    route_id: str
    shape_id: str | None = None
    headsign: str | None = None


@dataclass(frozen=True, slots=True)
class ShapePoint:
    """One vertex of a shape polyline.

    Coordinates are NaN when the feed value is not numeric; such points are
    kept for display order but ignored by distance computations.
    """

    lat: float
    lon: float
    sequence: float

    @property
    def is_finite(self) -> bool:
        return math.isfinite(self.lat) and math.isfinite(self.lon)


@dataclass(frozen=True, slots=True)
class FeedStop:
    stop_id: str
    name: str
    lat: float
    lon: float


@dataclass(frozen=True, slots=True)
class StopTimeRow:
    trip_id: str
    stop_id: str
    arrival_time: str
    departure_time: str
    stop_sequence: float


@dataclass(frozen=True, slots=True)
class StopVisit:
    """A stop as visited by one trip (stop_times joined with stops)."""

    stop_id: str
    stop_name: str
    lat: float
    lon: float
    arrival_time: str
    departure_time: str
    sequence: float


@dataclass(frozen=True, slots=True)
class FeedTables:
    """Typed, immutable subset of a GTFS feed used by the variant index.

    Mappings keep feed order (insertion order of first appearance).
    """

    routes: tuple[FeedRoute, ...] = ()
    trips: tuple[FeedTrip, ...] = ()
    trips_by_id: dict[str, FeedTrip] = field(default_factory=dict)
    shapes_by_id: dict[str, tuple[ShapePoint, ...]] = field(default_factory=dict)
    stops_by_id: dict[str, FeedStop] = field(default_factory=dict)
    stop_times_by_trip: dict[str, tuple[StopTimeRow, ...]] = field(
        default_factory=dict
    )
    stop_times_by_stop: dict[str, tuple[StopTimeRow, ...]] = field(
        default_factory=dict
    )


@dataclass(frozen=True, slots=True)
class StopScheduleEntry:
    """One scheduled call at a stop, with the route serving it."""

    route_id: str | None
    trip_id: str
    arrival_time: str
    departure_time: str

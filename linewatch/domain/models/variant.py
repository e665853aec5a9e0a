from __future__ import annotations

from dataclasses import dataclass

from .gtfs import ShapePoint, StopVisit


@dataclass(frozen=True, slots=True)
class Variant:
    """One distinct path (shape) of a route with its stops and direction."""

    shape_id: str
    route_id: str
    direction: str
    headsign: str
    trip_count: int
    shape_points: tuple[ShapePoint, ...] = ()
    stops: tuple[StopVisit, ...] = ()


@dataclass(frozen=True, slots=True)
class RouteVariantSet:
    """All variants of one line, in shape-id first-seen order."""

    short_name: str
    route_id: str
    route_ids: tuple[str, ...]
    variants: tuple[Variant, ...] = ()

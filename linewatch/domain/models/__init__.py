from .category import ALL_BUSES, ALL_TRAMS, LINE_BUCKETS, LineCategory
from .geo import GeoPoint
from .gtfs import (
    FeedRoute,
    FeedStop,
    FeedTables,
    FeedTrip,
    ShapePoint,
    StopScheduleEntry,
    StopTimeRow,
    StopVisit,
)
from .realtime import VehicleReport
from .snapshot import FeedSnapshot
from .variant import RouteVariantSet, Variant

__all__ = [
    "ALL_BUSES",
    "ALL_TRAMS",
    "LINE_BUCKETS",
    "FeedRoute",
    "FeedSnapshot",
    "FeedStop",
    "FeedTables",
    "FeedTrip",
    "GeoPoint",
    "LineCategory",
    "RouteVariantSet",
    "ShapePoint",
    "StopScheduleEntry",
    "StopTimeRow",
    "StopVisit",
    "Variant",
    "VehicleReport",
]

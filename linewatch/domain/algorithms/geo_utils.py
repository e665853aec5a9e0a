from __future__ import annotations

import math
from typing import Iterable

from linewatch.domain.models import GeoPoint, ShapePoint

EARTH_RADIUS_KM = 6371.0


def haversine_distance_km(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance in kilometers."""

    return _haversine_km(a.lat, a.lon, b.lat, b.lon)


def _haversine_km(lat_a: float, lon_a: float, lat_b: float, lon_b: float) -> float:
    lat1 = math.radians(lat_a)
    lon1 = math.radians(lon_a)
    lat2 = math.radians(lat_b)
    lon2 = math.radians(lon_b)

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    s = (
        math.sin(dlat / 2.0) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2.0) ** 2
    )
    # Clamp rounding noise for antipodal points.
    return 2.0 * EARTH_RADIUS_KM * math.asin(math.sqrt(min(1.0, s)))


def min_distance_km(position: GeoPoint, points: Iterable[ShapePoint]) -> float:
    """Smallest distance from position to any finite point; inf if none."""

    best = math.inf
    for p in points:
        if not p.is_finite:
            continue
        d = _haversine_km(position.lat, position.lon, p.lat, p.lon)
        if d < best:
            best = d
    return best

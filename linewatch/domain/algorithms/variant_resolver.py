from __future__ import annotations

import math

from linewatch.domain.algorithms.geo_utils import min_distance_km
from linewatch.domain.models import GeoPoint, RouteVariantSet, Variant


def resolve_variant(
    variant_set: RouteVariantSet, position: GeoPoint | None = None
) -> Variant | None:
    """Pick the variant of a line matching a vehicle position.

    Without a position the first variant in encounter order is returned; it
    is a deterministic fallback, not a geometric best. With a position the
    variant whose closest shape point is nearest wins, earlier variants
    winning ties. A variant without a finite shape point never wins; when no
    variant has one, nothing matches.
    """

    variants = variant_set.variants
    if not variants:
        return None
    if position is None:
        return variants[0]

    best: Variant | None = None
    best_km = math.inf
    for variant in variants:
        d = min_distance_km(position, variant.shape_points)
        if d < best_km:
            best_km = d
            best = variant

    return best

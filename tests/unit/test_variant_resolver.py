from __future__ import annotations

import math

import pytest

from linewatch.domain.algorithms.geo_utils import min_distance_km
from linewatch.domain.algorithms.variant_resolver import resolve_variant
from linewatch.domain.models import GeoPoint, RouteVariantSet, ShapePoint, Variant

pytestmark = pytest.mark.unit


def _variant(shape_id: str, *coords: tuple[float, float]) -> Variant:
    return Variant(
        shape_id=shape_id,
        route_id="R1",
        direction="A → B",
        headsign="B",
        trip_count=1,
        shape_points=tuple(
            ShapePoint(lat=lat, lon=lon, sequence=i) for i, (lat, lon) in enumerate(coords)
        ),
    )


def _set(*variants: Variant) -> RouteVariantSet:
    return RouteVariantSet(
        short_name="2", route_id="R1", route_ids=("R1",), variants=variants
    )


PATH_A = _variant("S1", (51.10, 17.00), (51.10, 17.01), (51.10, 17.02))
# Same path shifted ~5 km east.
PATH_B = _variant("S2", (51.10, 17.072), (51.10, 17.082), (51.10, 17.092))


def test_position_near_path_a_selects_s1() -> None:
    chosen = resolve_variant(_set(PATH_B, PATH_A), GeoPoint(lat=51.1002, lon=17.006))
    assert chosen is PATH_A


def test_position_near_path_b_selects_s2() -> None:
    chosen = resolve_variant(_set(PATH_A, PATH_B), GeoPoint(lat=51.0998, lon=17.09))
    assert chosen is PATH_B


def test_without_position_first_variant_is_returned() -> None:
    variant_set = _set(PATH_B, PATH_A)

    assert resolve_variant(variant_set) is PATH_B
    assert resolve_variant(variant_set) is resolve_variant(variant_set)


def test_ties_go_to_the_earlier_variant() -> None:
    twin = _variant("S1-copy", (51.10, 17.00), (51.10, 17.01), (51.10, 17.02))

    chosen = resolve_variant(_set(PATH_A, twin), GeoPoint(lat=51.10, lon=17.01))

    assert chosen is PATH_A


def test_variant_without_finite_points_never_wins() -> None:
    broken = _variant("BROKEN", (math.nan, math.nan))

    chosen = resolve_variant(_set(broken, PATH_B), GeoPoint(lat=51.1, lon=17.0))

    assert chosen is PATH_B


def test_no_variant_with_finite_points_resolves_to_none() -> None:
    broken = _variant("BROKEN", (math.nan, math.nan))
    other = _variant("OTHER", (math.nan, 17.0))
    variant_set = _set(broken, other)

    assert resolve_variant(variant_set, GeoPoint(lat=51.1, lon=17.0)) is None
    assert resolve_variant(variant_set) is broken


def test_empty_variant_set_resolves_to_none() -> None:
    assert resolve_variant(_set()) is None
    assert resolve_variant(_set(), GeoPoint(lat=51.1, lon=17.0)) is None


@pytest.mark.parametrize(
    ("lat", "lon"),
    [(51.1, 17.0), (51.1, 17.05), (51.2, 17.09), (50.9, 16.5), (51.1, 17.04)],
)
def test_selected_variant_is_never_farther_than_the_others(
    lat: float, lon: float
) -> None:
    middle = _variant("S3", (51.15, 17.04), (51.16, 17.05))
    variants = (PATH_A, PATH_B, middle)
    position = GeoPoint(lat=lat, lon=lon)

    chosen = resolve_variant(_set(*variants), position)

    assert chosen is not None
    chosen_d = min_distance_km(position, chosen.shape_points)
    for other in variants:
        assert chosen_d <= min_distance_km(position, other.shape_points)

from __future__ import annotations

import math

from fastapi import APIRouter, Depends, HTTPException, Query

from linewatch.adapters.api.dependencies import get_line_query_service
from linewatch.adapters.api.schemas.shapes import (
    LineStopsSchema,
    ResolvedShapeSchema,
    RouteVariantsSchema,
    ShapePointSchema,
    StopScheduleEntrySchema,
    StopScheduleSchema,
    StopVisitSchema,
    VariantSchema,
)
from linewatch.app.services.line_query_service import LineQueryService
from linewatch.domain.models import ShapePoint, StopVisit

router = APIRouter(tags=["shapes"])


def _finite(value: float) -> float | None:
    # JSON has no NaN; unparseable feed coordinates are sent as null.
    return value if math.isfinite(value) else None


def _points_to_schema(points: tuple[ShapePoint, ...]) -> list[ShapePointSchema]:
    return [ShapePointSchema(lat=_finite(p.lat), lon=_finite(p.lon)) for p in points]


def _stops_to_schema(stops: tuple[StopVisit, ...]) -> list[StopVisitSchema]:
    return [
        StopVisitSchema(
            stop_id=s.stop_id,
            stop_name=s.stop_name,
            stop_lat=_finite(s.lat),
            stop_lon=_finite(s.lon),
            arrival_time=s.arrival_time,
            departure_time=s.departure_time,
        )
        for s in stops
    ]


def _require_line(service: LineQueryService, line: str) -> None:
    if not service.has_line(line):
        raise HTTPException(status_code=404, detail="Line not found")


@router.get("/shapes/{line}/variants", response_model=RouteVariantsSchema)
def list_line_variants(
    line: str,
    service: LineQueryService = Depends(get_line_query_service),
) -> RouteVariantsSchema:
    variant_set = service.list_variants(line)
    if variant_set is None:
        raise HTTPException(status_code=404, detail="Line not found")
    return RouteVariantsSchema(
        route_short_name=variant_set.short_name,
        route_id=variant_set.route_id,
        variants=[
            VariantSchema(
                shape_id=v.shape_id,
                direction=v.direction,
                trip_headsign=v.headsign,
                trip_count=v.trip_count,
                shape_points=_points_to_schema(v.shape_points),
                stops=_stops_to_schema(v.stops),
            )
            for v in variant_set.variants
        ],
    )


@router.get("/shapes/{line}", response_model=ResolvedShapeSchema)
def get_line_shape(
    line: str,
    lat: float | None = Query(default=None),
    lon: float | None = Query(default=None),
    service: LineQueryService = Depends(get_line_query_service),
) -> ResolvedShapeSchema:
    _require_line(service, line)
    variant = service.resolve(line, lat, lon)
    if variant is None:
        raise HTTPException(status_code=404, detail="Shape not found for this line")
    return ResolvedShapeSchema(
        shape_id=variant.shape_id,
        direction=variant.direction,
        shape_points=_points_to_schema(variant.shape_points),
        stops=_stops_to_schema(variant.stops),
    )


@router.get("/stops/{line}", response_model=LineStopsSchema)
def get_line_stops(
    line: str,
    service: LineQueryService = Depends(get_line_query_service),
) -> LineStopsSchema:
    _require_line(service, line)
    stops = service.line_stops(line)
    if stops is None:
        raise HTTPException(status_code=404, detail="Stops not found for this line")
    return LineStopsSchema(line=line, stops=_stops_to_schema(stops))


@router.get("/stop/{stop_id}", response_model=StopScheduleSchema)
def get_stop_schedule(
    stop_id: str,
    service: LineQueryService = Depends(get_line_query_service),
) -> StopScheduleSchema:
    schedule = service.stop_schedule(stop_id)
    if not schedule:
        raise HTTPException(
            status_code=404, detail="Stop not found or no schedule available"
        )
    return StopScheduleSchema(
        stop_id=stop_id,
        schedule=[
            StopScheduleEntrySchema(
                route_id=e.route_id,
                trip_id=e.trip_id,
                arrival_time=e.arrival_time,
                departure_time=e.departure_time,
            )
            for e in schedule
        ],
    )

from __future__ import annotations

from pydantic import BaseModel


class ShapePointSchema(BaseModel):
    lat: float | None = None
    lon: float | None = None


class StopVisitSchema(BaseModel):
    stop_id: str
    stop_name: str
    stop_lat: float | None = None
    stop_lon: float | None = None
    arrival_time: str
    departure_time: str


class ResolvedShapeSchema(BaseModel):
    shape_id: str
    direction: str
    shape_points: list[ShapePointSchema]
    stops: list[StopVisitSchema]


class VariantSchema(BaseModel):
    shape_id: str
    direction: str
    trip_headsign: str
    trip_count: int
    shape_points: list[ShapePointSchema]
    stops: list[StopVisitSchema]


class RouteVariantsSchema(BaseModel):
    route_short_name: str
    route_id: str
    variants: list[VariantSchema]


class LineStopsSchema(BaseModel):
    line: str
    stops: list[StopVisitSchema]


class StopScheduleEntrySchema(BaseModel):
    route_id: str | None = None
    trip_id: str
    arrival_time: str
    departure_time: str


class StopScheduleSchema(BaseModel):
    stop_id: str
    schedule: list[StopScheduleEntrySchema]

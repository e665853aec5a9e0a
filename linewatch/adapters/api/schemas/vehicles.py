from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class VehicleSchema(BaseModel):
    line: str
    lat: float
    lon: float
    type: str


class LocationsSchema(BaseModel):
    locations: list[VehicleSchema]
    last_updated: datetime | None = None

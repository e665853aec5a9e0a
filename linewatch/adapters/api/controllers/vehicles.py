from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from linewatch.adapters.api.dependencies import get_vehicle_tracking_service
from linewatch.adapters.api.schemas.vehicles import LocationsSchema, VehicleSchema
from linewatch.app.services.vehicle_tracking_service import VehicleTrackingService

router = APIRouter(tags=["vehicles"])


@router.get("/locations", response_model=LocationsSchema)
def list_locations(
    line: str | None = Query(default=None),
    service: VehicleTrackingService = Depends(get_vehicle_tracking_service),
) -> LocationsSchema:
    vehicles = service.vehicles_for_line(line) if line else service.vehicles
    return LocationsSchema(
        locations=[
            VehicleSchema(line=v.line, lat=v.lat, lon=v.lon, type=v.category.value)
            for v in vehicles
        ],
        last_updated=service.last_updated,
    )

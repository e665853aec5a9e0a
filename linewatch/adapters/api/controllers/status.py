from __future__ import annotations

from fastapi import APIRouter, Depends

from linewatch.adapters.api.dependencies import (
    get_feed_loader,
    get_line_query_service,
    get_resolution_cache,
    get_vehicle_tracking_service,
)
from linewatch.adapters.api.schemas.status import (
    FeedStatusSchema,
    HealthSchema,
    StatusSchema,
)
from linewatch.app.services.feed_loader import FeedLoader, FeedState
from linewatch.app.services.line_query_service import LineQueryService
from linewatch.app.services.resolution_cache import ResolutionCache
from linewatch.app.services.vehicle_tracking_service import VehicleTrackingService
from linewatch.domain.models import ALL_BUSES, ALL_TRAMS

router = APIRouter(tags=["status"])


@router.get("/health", response_model=HealthSchema)
def health(
    loader: FeedLoader = Depends(get_feed_loader),
    lines: LineQueryService = Depends(get_line_query_service),
    tracking: VehicleTrackingService = Depends(get_vehicle_tracking_service),
) -> HealthSchema:
    return HealthSchema(
        status="ok",
        gtfs_initialized=loader.state is not FeedState.NOT_INITIALIZED,
        total_lines=len(lines.line_ids()),
        locations_count=len(tracking.vehicles),
        locations_last_updated=tracking.last_updated,
    )


@router.get("/status", response_model=StatusSchema)
def status(
    loader: FeedLoader = Depends(get_feed_loader),
    lines: LineQueryService = Depends(get_line_query_service),
    cache: ResolutionCache = Depends(get_resolution_cache),
    tracking: VehicleTrackingService = Depends(get_vehicle_tracking_service),
) -> StatusSchema:
    snapshot = loader.snapshot
    buckets = lines.categorized_lines()
    error = loader.last_error
    return StatusSchema(
        feed=FeedStatusSchema(
            state=loader.state.value,
            generation=snapshot.generation if snapshot else None,
            loaded_at=snapshot.loaded_at if snapshot else None,
            last_attempt_at=loader.last_attempt_at,
            last_error=str(error) if error else None,
            lines=len(lines.line_ids()),
            trams=len(buckets[ALL_TRAMS]),
            buses=len(buckets[ALL_BUSES]),
        ),
        cached_shapes=len(cache),
        vehicles_tracked=len(tracking.vehicles),
    )

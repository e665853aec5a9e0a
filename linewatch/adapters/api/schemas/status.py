from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class HealthSchema(BaseModel):
    status: str
    gtfs_initialized: bool
    total_lines: int
    locations_count: int
    locations_last_updated: datetime | None = None


class FeedStatusSchema(BaseModel):
    state: str
    generation: int | None = None
    loaded_at: datetime | None = None
    last_attempt_at: datetime | None = None
    last_error: str | None = None
    lines: int
    trams: int
    buses: int


class StatusSchema(BaseModel):
    feed: FeedStatusSchema
    cached_shapes: int
    vehicles_tracked: int

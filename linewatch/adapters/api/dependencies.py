from __future__ import annotations

from functools import lru_cache

from linewatch.adapters.config import AppConfig
from linewatch.adapters.feed import HttpZipFeedSource, LocalFeedSource
from linewatch.adapters.realtime.mpk_vehicle_position_provider import (
    MpkVehiclePositionProvider,
)
from linewatch.adapters.scheduling.feed_refresh_scheduler import FeedRefreshScheduler
from linewatch.adapters.scheduling.vehicle_poll_scheduler import VehiclePollScheduler
from linewatch.app.ports.output import IFeedSource, IVehiclePositionProvider
from linewatch.app.services.feed_loader import FeedLoader
from linewatch.app.services.line_query_service import LineQueryService
from linewatch.app.services.resolution_cache import ResolutionCache
from linewatch.app.services.vehicle_tracking_service import VehicleTrackingService

# Feed state, cache and tracked vehicles are process-wide: every provider
# below returns the same instance for the lifetime of the process.


@lru_cache(maxsize=None)
def get_config() -> AppConfig:
    return AppConfig.from_env()


def _feed_source(config: AppConfig) -> IFeedSource:
    if config.feed_path:
        return LocalFeedSource(path=config.feed_path)
    if not config.feed_url:
        raise RuntimeError("No feed configured (LINEWATCH_FEED_URL/PATH)")
    return HttpZipFeedSource(url=config.feed_url, timeout_s=config.feed_timeout_s)


@lru_cache(maxsize=None)
def get_resolution_cache() -> ResolutionCache:
    return ResolutionCache()


@lru_cache(maxsize=None)
def get_feed_loader() -> FeedLoader:
    loader = FeedLoader(source=_feed_source(get_config()))
    loader.add_listener(get_resolution_cache().invalidate)
    return loader


@lru_cache(maxsize=None)
def get_line_query_service() -> LineQueryService:
    return LineQueryService(
        feed_loader=get_feed_loader(), cache=get_resolution_cache()
    )


@lru_cache(maxsize=None)
def get_vehicle_tracking_service() -> VehicleTrackingService:
    config = get_config()
    provider: IVehiclePositionProvider | None = None
    if config.vehicle_positions_url:
        provider = MpkVehiclePositionProvider(
            url=config.vehicle_positions_url, timeout_s=config.vehicle_timeout_s
        )
    return VehicleTrackingService(
        line_queries=get_line_query_service(), provider=provider
    )


def build_schedulers() -> tuple[FeedRefreshScheduler, VehiclePollScheduler]:
    config = get_config()
    refresh = FeedRefreshScheduler(
        get_feed_loader(),
        times=config.refresh_times,
        tz=config.refresh_timezone,
        interval_s=config.refresh_interval_s,
    )
    poll = VehiclePollScheduler(
        get_vehicle_tracking_service(), interval_s=config.vehicle_poll_interval_s
    )
    return refresh, poll

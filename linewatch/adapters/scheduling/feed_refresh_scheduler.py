"""Background refresh of the static feed.

Runs one refresh at startup, then refreshes at fixed local wall-clock times
and/or on a fixed interval. Each refresh runs in a worker thread so request
handling keeps serving the current snapshot meanwhile.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

from linewatch.app.services.feed_loader import FeedLoader, RefreshStatus

logger = logging.getLogger(__name__)


def seconds_until_next_run(
    now: datetime,
    *,
    times: tuple[time, ...],
    interval_s: float | None = None,
) -> float | None:
    """Delay until the next scheduled refresh, or None if nothing is scheduled.

    `now` must be timezone-aware, in the zone the wall-clock times refer to.
    """

    candidates: list[float] = []
    for t in times:
        run_at = now.replace(hour=t.hour, minute=t.minute, second=0, microsecond=0)
        if run_at <= now:
            run_at += timedelta(days=1)
        delta = run_at.astimezone(timezone.utc) - now.astimezone(timezone.utc)
        candidates.append(delta.total_seconds())
    if interval_s:
        candidates.append(float(interval_s))
    return min(candidates) if candidates else None


class FeedRefreshScheduler:
    """Drives FeedLoader.refresh() on a schedule."""

    def __init__(
        self,
        loader: FeedLoader,
        *,
        times: tuple[time, ...] = (time(8, 0), time(16, 0)),
        tz: str = "Europe/Warsaw",
        interval_s: float | None = None,
    ) -> None:
        self.loader = loader
        self.times = times
        self.tz = ZoneInfo(tz)
        self.interval_s = interval_s
        self._task: asyncio.Task | None = None
        self._refresh_count = 0
        self._error_count = 0

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def status(self) -> dict:
        return {
            "running": self.is_running,
            "refresh_count": self._refresh_count,
            "error_count": self._error_count,
            "times": [t.strftime("%H:%M") for t in self.times],
            "timezone": str(self.tz),
            "interval_seconds": self.interval_s,
        }

    def start(self) -> None:
        if self.is_running:
            logger.warning("Feed refresh scheduler already running")
            return
        self._task = asyncio.create_task(self._loop())

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    async def run_once(self) -> None:
        try:
            outcome = await asyncio.to_thread(self.loader.refresh)
        except Exception:
            self._error_count += 1
            logger.exception("Unexpected error during feed refresh")
            return

        if outcome.status is RefreshStatus.LOADED:
            self._refresh_count += 1
        elif outcome.status is RefreshStatus.FAILED:
            self._error_count += 1

    async def _loop(self) -> None:
        await self.run_once()
        while True:
            delay = seconds_until_next_run(
                datetime.now(self.tz), times=self.times, interval_s=self.interval_s
            )
            if delay is None:
                logger.info("No feed refresh schedule configured")
                return
            logger.info("Next feed refresh in %.0fs", delay)
            await asyncio.sleep(delay)
            await self.run_once()

from __future__ import annotations

import asyncio
import logging

from linewatch.app.services.vehicle_tracking_service import VehicleTrackingService

logger = logging.getLogger(__name__)


class VehiclePollScheduler:
    """Polls live vehicle positions on a fixed short interval."""

    def __init__(
        self,
        tracking: VehicleTrackingService,
        *,
        interval_s: float = 10.0,
        initial_delay_s: float = 10.0,
    ) -> None:
        self.tracking = tracking
        self.interval_s = interval_s
        self.initial_delay_s = initial_delay_s
        self._task: asyncio.Task | None = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.is_running:
            return
        self._task = asyncio.create_task(self._loop())
        logger.info("Vehicle poller started (interval: %ss)", self.interval_s)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    async def _loop(self) -> None:
        await asyncio.sleep(self.initial_delay_s)
        while True:
            await self.tracking.poll()
            await asyncio.sleep(self.interval_s)

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone

from linewatch.app.ports.output import IVehiclePositionProvider
from linewatch.app.services.line_query_service import LineQueryService
from linewatch.domain.models import ALL_BUSES, ALL_TRAMS, VehicleReport

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class VehicleTrackingService:
    """Keeps the latest live vehicle positions for all catalogued lines."""

    line_queries: LineQueryService
    provider: IVehiclePositionProvider | None = None

    _vehicles: tuple[VehicleReport, ...] = field(default=(), init=False)
    _last_updated: datetime | None = field(default=None, init=False)

    @property
    def vehicles(self) -> tuple[VehicleReport, ...]:
        return self._vehicles

    @property
    def last_updated(self) -> datetime | None:
        return self._last_updated

    def vehicles_for_line(self, line: str) -> tuple[VehicleReport, ...]:
        return tuple(v for v in self._vehicles if v.line == line)

    async def poll(self) -> tuple[VehicleReport, ...]:
        """Fetch fresh positions; on failure keep the previous list."""

        if self.provider is None:
            return self._vehicles

        lines = self.line_queries.categorized_lines()
        trams = lines[ALL_TRAMS]
        buses = lines[ALL_BUSES]
        if not trams and not buses:
            return self._vehicles

        try:
            reports = await self.provider.list_vehicles(trams=trams, buses=buses)
        except Exception:
            logger.exception("Error fetching vehicle positions")
            return self._vehicles

        self._vehicles = tuple(
            replace(r, category=self.line_queries.classify(r.line)) for r in reports
        )
        self._last_updated = datetime.now(timezone.utc)
        return self._vehicles

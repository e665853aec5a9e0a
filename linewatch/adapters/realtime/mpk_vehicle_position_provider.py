from __future__ import annotations

import asyncio
import math
import time
from dataclasses import dataclass, field
from typing import Any, Sequence

import httpx

from linewatch.app.ports.output import IVehiclePositionProvider
from linewatch.domain.models import VehicleReport


@dataclass(slots=True)
class MpkVehiclePositionProvider(IVehiclePositionProvider):
    """Fetches live vehicle positions from the MPK Wrocław position endpoint.

    The endpoint takes a form listing the requested lines and answers with a
    JSON list of `{"name": line, "x": lat, "y": lon, ...}` objects.

    Notes:
      - Responses are cached in-process for `cache_ttl_s` seconds.
      - HTTP errors propagate; callers decide whether to keep stale data.
    """

    url: str
    timeout_s: float = 10.0
    cache_ttl_s: float = 5.0

    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False, repr=False)
    _cached_at_monotonic: float = field(default=0.0, init=False)
    _cached_key: tuple[tuple[str, ...], tuple[str, ...]] | None = field(
        default=None, init=False
    )
    _cached_vehicles: tuple[VehicleReport, ...] = field(default=(), init=False)

    async def list_vehicles(
        self, *, trams: Sequence[str], buses: Sequence[str]
    ) -> tuple[VehicleReport, ...]:
        key = (tuple(trams), tuple(buses))

        async with self._lock:
            now_mono = time.monotonic()
            if (
                self._cached_key == key
                and (now_mono - self._cached_at_monotonic) < self.cache_ttl_s
            ):
                return self._cached_vehicles

            form = {"busList[bus][]": list(buses), "busList[tram][]": list(trams)}
            async with httpx.AsyncClient(timeout=self.timeout_s) as client:
                resp = await client.post(self.url, data=form)
                resp.raise_for_status()
                payload = resp.json()

            vehicles = _parse_positions(payload)

            self._cached_at_monotonic = time.monotonic()
            self._cached_key = key
            self._cached_vehicles = vehicles
            return vehicles


def _parse_positions(payload: Any) -> tuple[VehicleReport, ...]:
    if not isinstance(payload, list):
        return ()

    out: list[VehicleReport] = []
    for item in payload:
        if not isinstance(item, dict):
            continue
        line = str(item.get("name") or "").strip()
        try:
            lat = float(item["x"])
            lon = float(item["y"])
        except (KeyError, TypeError, ValueError):
            continue
        if not line or not (math.isfinite(lat) and math.isfinite(lon)):
            continue
        out.append(VehicleReport(line=line, lat=lat, lon=lon))

    return tuple(out)

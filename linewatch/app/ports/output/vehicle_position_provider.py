from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from linewatch.domain.models import VehicleReport


class IVehiclePositionProvider(ABC):
    """Port for obtaining live vehicle positions for a set of lines."""

    @abstractmethod
    async def list_vehicles(
        self, *, trams: Sequence[str], buses: Sequence[str]
    ) -> tuple[VehicleReport, ...]:
        raise NotImplementedError

from __future__ import annotations

from dataclasses import dataclass

from .category import LineCategory


@dataclass(frozen=True, slots=True)
class VehicleReport:
    line: str
    lat: float
    lon: float
    category: LineCategory = LineCategory.UNKNOWN

from __future__ import annotations

from enum import Enum


class LineCategory(str, Enum):
    TRAM = "tram"
    TRAM_SPECIAL = "tramSpecial"
    TRAM_TEMPORARY = "tramTemporary"
    BUS = "bus"
    BUS_NIGHT = "busNight"
    BUS_SUBURBAN = "busSuburban"
    BUS_TEMPORARY = "busTemporary"
    BUS_ZONE = "busZone"
    BUS_EXPRESS = "busExpress"
    BUS_SPECIAL = "busSpecial"
    UNKNOWN = "unknown"

    @property
    def is_tram(self) -> bool:
        return self in _TRAM_FAMILY

    @property
    def is_bus(self) -> bool:
        return self in _BUS_FAMILY


_TRAM_FAMILY = frozenset(
    {LineCategory.TRAM, LineCategory.TRAM_SPECIAL, LineCategory.TRAM_TEMPORARY}
)
_BUS_FAMILY = frozenset(
    {
        LineCategory.BUS,
        LineCategory.BUS_NIGHT,
        LineCategory.BUS_SUBURBAN,
        LineCategory.BUS_TEMPORARY,
        LineCategory.BUS_ZONE,
        LineCategory.BUS_EXPRESS,
        LineCategory.BUS_SPECIAL,
    }
)

ALL_TRAMS = "allTrams"
ALL_BUSES = "allBuses"

# Bucket names exposed by the line catalog, in display order.
LINE_BUCKETS: tuple[str, ...] = (
    LineCategory.TRAM.value,
    LineCategory.TRAM_SPECIAL.value,
    LineCategory.TRAM_TEMPORARY.value,
    ALL_TRAMS,
    LineCategory.BUS.value,
    LineCategory.BUS_NIGHT.value,
    LineCategory.BUS_SUBURBAN.value,
    LineCategory.BUS_TEMPORARY.value,
    LineCategory.BUS_ZONE.value,
    LineCategory.BUS_EXPRESS.value,
    LineCategory.BUS_SPECIAL.value,
    ALL_BUSES,
    LineCategory.UNKNOWN.value,
)

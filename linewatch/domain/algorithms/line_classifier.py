from __future__ import annotations

import re
from typing import Iterable

from linewatch.domain.models import ALL_BUSES, ALL_TRAMS, LINE_BUCKETS, LineCategory

EXPRESS_LINES = frozenset({"A", "C", "D", "K", "N"})

_DIGITS = re.compile(r"[0-9]+")

# Half-open numeric ranges checked in order; anything else numeric is a bus.
_NUMERIC_RANGES: tuple[tuple[int, int, LineCategory], ...] = (
    (0, 40, LineCategory.TRAM),
    (70, 100, LineCategory.TRAM_TEMPORARY),
    (200, 300, LineCategory.BUS_NIGHT),
    (600, 700, LineCategory.BUS_SUBURBAN),
    (700, 800, LineCategory.BUS_TEMPORARY),
    (900, 1000, LineCategory.BUS_ZONE),
)


def classify(line: str) -> LineCategory:
    """Map a raw line identifier to its vehicle category.

    First matching rule wins:
      - "T..." is a tram
      - express allow-list (case-insensitive) is an express bus
      - all-digit identifiers are bucketed by numeric range
      - "B..." is a special bus
      - anything else is unknown
    """

    if line.startswith("T"):
        return LineCategory.TRAM
    if line.upper() in EXPRESS_LINES:
        return LineCategory.BUS_EXPRESS
    if _DIGITS.fullmatch(line):
        digits = line.lstrip("0") or "0"
        if len(digits) > 4:
            # Longer than any numeric range.
            return LineCategory.BUS
        number = int(digits)
        for low, high, category in _NUMERIC_RANGES:
            if low <= number < high:
                return category
        return LineCategory.BUS
    if line.startswith("B"):
        return LineCategory.BUS_SPECIAL
    return LineCategory.UNKNOWN


def categorize_lines(lines: Iterable[str]) -> dict[str, list[str]]:
    buckets: dict[str, list[str]] = {name: [] for name in LINE_BUCKETS}
    for line in lines:
        category = classify(line)
        buckets[category.value].append(line)
        if category.is_tram:
            buckets[ALL_TRAMS].append(line)
        elif category.is_bus:
            buckets[ALL_BUSES].append(line)
    return buckets

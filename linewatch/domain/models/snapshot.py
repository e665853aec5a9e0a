from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .gtfs import FeedTables
from .variant import RouteVariantSet


@dataclass(frozen=True, slots=True)
class FeedSnapshot:
    """One complete load of the feed plus everything derived from it.

    Snapshots are never mutated: a refresh builds a new one and swaps it in.
    """

    generation: int
    loaded_at: datetime
    tables: FeedTables
    variants_by_line: dict[str, RouteVariantSet]
    line_ids: tuple[str, ...]
    categorized_lines: dict[str, tuple[str, ...]]

    def has_line(self, line: str) -> bool:
        return line in self.variants_by_line

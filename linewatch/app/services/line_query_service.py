from __future__ import annotations

from dataclasses import dataclass

from linewatch.app.services.feed_loader import FeedLoader
from linewatch.app.services.resolution_cache import ResolutionCache
from linewatch.domain.algorithms.line_classifier import classify
from linewatch.domain.models import (
    LINE_BUCKETS,
    FeedSnapshot,
    GeoPoint,
    LineCategory,
    RouteVariantSet,
    StopScheduleEntry,
    StopVisit,
    Variant,
)


@dataclass(slots=True)
class LineQueryService:
    """Read-side queries over the current feed snapshot.

    Every method reads the snapshot reference once, so a concurrent refresh
    is seen either entirely or not at all. `None` means "not found".
    """

    feed_loader: FeedLoader
    cache: ResolutionCache

    def _snapshot(self) -> FeedSnapshot | None:
        return self.feed_loader.snapshot

    def classify(self, line: str) -> LineCategory:
        return classify(line)

    def categorized_lines(self) -> dict[str, tuple[str, ...]]:
        snapshot = self._snapshot()
        if snapshot is None:
            return {name: () for name in LINE_BUCKETS}
        return dict(snapshot.categorized_lines)

    def line_ids(self) -> tuple[str, ...]:
        snapshot = self._snapshot()
        return snapshot.line_ids if snapshot is not None else ()

    def has_line(self, line: str) -> bool:
        snapshot = self._snapshot()
        return snapshot is not None and snapshot.has_line(line)

    def resolve(
        self, line: str, lat: float | None = None, lon: float | None = None
    ) -> Variant | None:
        """Best variant for a line, optionally near a vehicle position.

        Invalid coordinates resolve as if no position was given.
        """

        snapshot = self._snapshot()
        if snapshot is None:
            return None
        return self.cache.get_or_resolve(
            snapshot, line, GeoPoint.optional(lat, lon)
        )

    def list_variants(self, line: str) -> RouteVariantSet | None:
        snapshot = self._snapshot()
        if snapshot is None:
            return None
        return snapshot.variants_by_line.get(line)

    def line_stops(self, line: str) -> tuple[StopVisit, ...] | None:
        variant = self.resolve(line)
        return variant.stops if variant is not None else None

    def stop_schedule(self, stop_id: str) -> tuple[StopScheduleEntry, ...]:
        snapshot = self._snapshot()
        if snapshot is None or stop_id not in snapshot.tables.stops_by_id:
            return ()

        tables = snapshot.tables
        out: list[StopScheduleEntry] = []
        for st in tables.stop_times_by_stop.get(stop_id, ()):
            trip = tables.trips_by_id.get(st.trip_id)
            out.append(
                StopScheduleEntry(
                    route_id=trip.route_id if trip else None,
                    trip_id=st.trip_id,
                    arrival_time=st.arrival_time,
                    departure_time=st.departure_time,
                )
            )
        return tuple(out)

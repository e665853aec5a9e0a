from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Mapping

from linewatch.app.ports.output import IFeedSource
from linewatch.domain.algorithms.feed_tables import build_feed_tables
from linewatch.domain.algorithms.line_classifier import categorize_lines
from linewatch.domain.algorithms.variant_index import build_variant_index, line_ids
from linewatch.domain.exceptions import FeedError, FeedFetchError
from linewatch.domain.models import FeedSnapshot

logger = logging.getLogger(__name__)

RefreshListener = Callable[[FeedSnapshot], None]


class FeedState(str, Enum):
    NOT_INITIALIZED = "not_initialized"
    READY = "ready"
    DEGRADED = "degraded"


class RefreshStatus(str, Enum):
    LOADED = "loaded"
    FAILED = "failed"
    IN_PROGRESS = "in_progress"


@dataclass(frozen=True, slots=True)
class RefreshOutcome:
    status: RefreshStatus
    snapshot: FeedSnapshot | None = None
    error: FeedError | None = None

    @property
    def ok(self) -> bool:
        return self.status is RefreshStatus.LOADED


def build_snapshot(raw_tables: Mapping[str, str], *, generation: int) -> FeedSnapshot:
    """Build a complete snapshot (tables + variant index + line catalog)."""

    tables = build_feed_tables(raw_tables)
    lines = line_ids(tables)
    return FeedSnapshot(
        generation=generation,
        loaded_at=datetime.now(timezone.utc),
        tables=tables,
        variants_by_line=build_variant_index(tables),
        line_ids=lines,
        categorized_lines={
            name: tuple(bucket) for name, bucket in categorize_lines(lines).items()
        },
    )


@dataclass(slots=True)
class FeedLoader:
    """Owns the current feed snapshot and replaces it on refresh.

    - Readers take `snapshot` once per request and never block.
    - A refresh builds the new snapshot off to the side, publishes it with a
      single reference assignment, then notifies listeners (cache
      invalidation).
    - A failed refresh keeps serving the previous snapshot.
    - Overlapping refresh calls are coalesced: the second one returns
      immediately with status IN_PROGRESS.
    """

    source: IFeedSource
    listeners: list[RefreshListener] = field(default_factory=list)

    _snapshot: FeedSnapshot | None = field(default=None, init=False)
    _last_error: FeedError | None = field(default=None, init=False)
    _last_attempt_at: datetime | None = field(default=None, init=False)
    _generation: int = field(default=0, init=False)
    _refresh_lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False
    )

    @property
    def snapshot(self) -> FeedSnapshot | None:
        return self._snapshot

    @property
    def state(self) -> FeedState:
        if self._snapshot is None:
            return FeedState.NOT_INITIALIZED
        if self._last_error is not None:
            return FeedState.DEGRADED
        return FeedState.READY

    @property
    def last_error(self) -> FeedError | None:
        return self._last_error

    @property
    def last_attempt_at(self) -> datetime | None:
        return self._last_attempt_at

    def add_listener(self, listener: RefreshListener) -> None:
        self.listeners.append(listener)

    def refresh(self) -> RefreshOutcome:
        if not self._refresh_lock.acquire(blocking=False):
            logger.info("Feed refresh already in progress, skipping")
            return RefreshOutcome(
                status=RefreshStatus.IN_PROGRESS, snapshot=self._snapshot
            )
        try:
            return self._refresh_locked()
        finally:
            self._refresh_lock.release()

    def _refresh_locked(self) -> RefreshOutcome:
        self._last_attempt_at = datetime.now(timezone.utc)
        logger.info("Refreshing static feed")

        try:
            raw_tables = self.source.fetch_tables()
            snapshot = build_snapshot(raw_tables, generation=self._generation + 1)
        except FeedError as exc:
            return self._refresh_failed(exc)
        except Exception as exc:
            logger.exception("Unexpected error while loading the feed")
            return self._refresh_failed(
                FeedFetchError(f"Feed refresh failed: {exc!r}")
            )

        self._generation = snapshot.generation
        self._snapshot = snapshot
        self._last_error = None

        # Listeners run strictly after publication.
        for listener in self.listeners:
            listener(snapshot)

        logger.info(
            "Feed snapshot #%d published: %d lines, %d trips, %d shapes",
            snapshot.generation,
            len(snapshot.line_ids),
            len(snapshot.tables.trips),
            len(snapshot.tables.shapes_by_id),
        )
        return RefreshOutcome(status=RefreshStatus.LOADED, snapshot=snapshot)

    def _refresh_failed(self, error: FeedError) -> RefreshOutcome:
        self._last_error = error
        if self._snapshot is None:
            logger.error("Feed refresh failed, no snapshot loaded yet: %s", error)
        else:
            logger.warning(
                "Feed refresh failed, serving snapshot #%d: %s",
                self._snapshot.generation,
                error,
            )
        return RefreshOutcome(
            status=RefreshStatus.FAILED, snapshot=self._snapshot, error=error
        )

from __future__ import annotations

import threading
from dataclasses import dataclass, field

from linewatch.domain.algorithms.variant_resolver import resolve_variant
from linewatch.domain.models import FeedSnapshot, GeoPoint, Variant

CacheKey = tuple[str, ...]

# Four decimal places is roughly 11 m of latitude.
POSITION_PRECISION = 4


def cache_key(line: str, position: GeoPoint | None) -> CacheKey:
    if position is None:
        return (line,)
    return (
        line,
        f"{position.lat:.{POSITION_PRECISION}f}",
        f"{position.lon:.{POSITION_PRECISION}f}",
    )


@dataclass(slots=True)
class ResolutionCache:
    """Memoizes resolved variants for the current feed generation.

    The whole cache is dropped on every published snapshot. Entries are only
    stored when the snapshot they were computed from is the generation the
    cache currently serves.
    """

    # (generation, entries) swapped as one reference.
    _state: tuple[int, dict[CacheKey, Variant]] = field(
        default_factory=lambda: (0, {}), init=False
    )
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False
    )

    @property
    def generation(self) -> int:
        return self._state[0]

    def __len__(self) -> int:
        return len(self._state[1])

    def invalidate(self, snapshot: FeedSnapshot) -> None:
        with self._lock:
            self._state = (snapshot.generation, {})

    def get_or_resolve(
        self, snapshot: FeedSnapshot, line: str, position: GeoPoint | None = None
    ) -> Variant | None:
        variant_set = snapshot.variants_by_line.get(line)
        if variant_set is None:
            return None

        key = cache_key(line, position)
        generation, entries = self._state
        if generation == snapshot.generation:
            cached = entries.get(key)
            if cached is not None:
                return cached

        variant = resolve_variant(variant_set, position)
        if variant is None:
            return None

        with self._lock:
            generation, entries = self._state
            if generation == snapshot.generation:
                # Keep the first stored answer so repeated hits are identical.
                variant = entries.setdefault(key, variant)
        return variant

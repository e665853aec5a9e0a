from __future__ import annotations

from abc import ABC, abstractmethod


class IFeedSource(ABC):
    """Port yielding the raw text of every table in the static feed."""

    @abstractmethod
    def fetch_tables(self) -> dict[str, str]:
        """Return CSV text keyed by table name (file name without '.txt').

        Raises FeedFetchError when the feed cannot be obtained.
        """

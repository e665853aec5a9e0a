from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from linewatch.adapters.feed.zip_tables import read_zip_tables
from linewatch.app.ports.output import IFeedSource
from linewatch.domain.exceptions import FeedFetchError


@dataclass(slots=True)
class LocalFeedSource(IFeedSource):
    """Loads the static feed from a local directory of .txt files or a zip."""

    path: str | Path

    def fetch_tables(self) -> dict[str, str]:
        base = Path(self.path)
        if base.is_file():
            return read_zip_tables(base)
        if not base.is_dir():
            raise FeedFetchError(f"Feed path not found: {base}")

        tables: dict[str, str] = {}
        try:
            for member in sorted(base.glob("*.txt")):
                tables[member.stem] = member.read_text(
                    encoding="utf-8-sig", errors="replace"
                )
        except OSError as exc:
            raise FeedFetchError(f"Unreadable feed directory {base}: {exc}") from exc
        return tables

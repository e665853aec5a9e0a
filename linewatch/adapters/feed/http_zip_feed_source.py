from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field

import httpx

from linewatch.adapters.feed.zip_tables import read_zip_tables
from linewatch.app.ports.output import IFeedSource
from linewatch.domain.exceptions import FeedFetchError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class HttpZipFeedSource(IFeedSource):
    """Downloads the static feed as a zip archive over HTTP.

    `timeout_s` bounds each network phase (connect, read between chunks) and
    also the whole download, so a slowly trickling body is cut off as well.
    Timeouts, non-2xx answers and transport errors surface as FeedFetchError.
    """

    url: str
    timeout_s: float = 60.0
    transport: httpx.BaseTransport | None = field(default=None, repr=False)

    def fetch_tables(self) -> dict[str, str]:
        logger.debug("Downloading feed archive from %s", self.url)
        deadline = time.monotonic() + self.timeout_s
        chunks: list[bytes] = []
        try:
            with httpx.Client(
                timeout=self.timeout_s,
                follow_redirects=True,
                transport=self.transport,
            ) as client:
                with client.stream("GET", self.url) as resp:
                    resp.raise_for_status()
                    for chunk in resp.iter_bytes():
                        if time.monotonic() > deadline:
                            raise FeedFetchError(
                                f"Feed download exceeded {self.timeout_s:g}s"
                            )
                        chunks.append(chunk)
        except httpx.HTTPError as exc:
            raise FeedFetchError(f"Feed download failed: {exc}") from exc

        return read_zip_tables(b"".join(chunks))

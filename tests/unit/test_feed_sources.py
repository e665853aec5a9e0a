from __future__ import annotations

import time

import httpx
import pytest

from conftest import corrupt_member_data, make_raw_feed, write_feed_zip
from linewatch.adapters.feed import HttpZipFeedSource, LocalFeedSource
from linewatch.adapters.feed.zip_tables import read_zip_tables
from linewatch.domain.exceptions import FeedFetchError

pytestmark = pytest.mark.unit

FEED_URL = "https://feeds.example.test/OtwartyWroclaw_rozklad_jazdy_GTFS.zip"


def _zip_bytes(tmp_path) -> bytes:
    archive = tmp_path / "feed.zip"
    write_feed_zip(archive, make_raw_feed())
    return archive.read_bytes()


def test_read_zip_tables_keys_members_by_stem(tmp_path) -> None:
    archive = tmp_path / "feed.zip"
    write_feed_zip(archive, make_raw_feed(), prefix="gtfs/")

    tables = read_zip_tables(archive.read_bytes())

    assert set(tables) == {"routes", "trips", "shapes", "stops", "stop_times"}
    assert "Krzyki, pętla" in tables["trips"]


def test_read_zip_tables_rejects_non_zip_payload() -> None:
    with pytest.raises(FeedFetchError):
        read_zip_tables(b"<html>maintenance</html>")


def test_read_zip_tables_rejects_corrupted_member_data(tmp_path) -> None:
    archive = tmp_path / "feed.zip"
    write_feed_zip(archive, make_raw_feed())
    corrupt_member_data(archive, "stop_times.txt")

    with pytest.raises(FeedFetchError):
        read_zip_tables(archive)


def test_local_source_reads_directory(tmp_path) -> None:
    for name, text in make_raw_feed().items():
        (tmp_path / f"{name}.txt").write_text(text, encoding="utf-8")

    tables = LocalFeedSource(path=tmp_path).fetch_tables()

    assert tables["routes"].startswith("route_id,")


def test_local_source_reads_zip_file(tmp_path) -> None:
    archive = tmp_path / "feed.zip"
    write_feed_zip(archive, make_raw_feed())

    tables = LocalFeedSource(path=str(archive)).fetch_tables()

    assert "S1" in tables["shapes"]


def test_local_source_missing_path_is_a_fetch_error(tmp_path) -> None:
    with pytest.raises(FeedFetchError):
        LocalFeedSource(path=tmp_path / "nope").fetch_tables()


def test_http_source_downloads_and_unpacks_archive(tmp_path) -> None:
    payload = _zip_bytes(tmp_path)
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, content=payload)

    source = HttpZipFeedSource(url=FEED_URL, transport=httpx.MockTransport(handler))

    tables = source.fetch_tables()

    assert seen == [FEED_URL]
    assert set(tables) == {"routes", "trips", "shapes", "stops", "stop_times"}


def test_http_source_timeout_is_a_fetch_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    source = HttpZipFeedSource(url=FEED_URL, transport=httpx.MockTransport(handler))

    with pytest.raises(FeedFetchError, match="timed out"):
        source.fetch_tables()


def test_http_source_non_2xx_is_a_fetch_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="maintenance")

    source = HttpZipFeedSource(url=FEED_URL, transport=httpx.MockTransport(handler))

    with pytest.raises(FeedFetchError, match="503"):
        source.fetch_tables()


def test_http_source_cuts_off_slow_download(tmp_path) -> None:
    payload = _zip_bytes(tmp_path)

    def trickle():
        for start in range(0, len(payload), 64):
            time.sleep(0.02)
            yield payload[start : start + 64]

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=trickle())

    source = HttpZipFeedSource(
        url=FEED_URL, timeout_s=0.05, transport=httpx.MockTransport(handler)
    )

    with pytest.raises(FeedFetchError, match="exceeded"):
        source.fetch_tables()

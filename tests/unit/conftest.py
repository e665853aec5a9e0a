from __future__ import annotations

import zipfile
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from linewatch.app.services.feed_loader import FeedLoader
from linewatch.app.services.line_query_service import LineQueryService
from linewatch.app.services.resolution_cache import ResolutionCache

# Line "2" runs on shape S1 (two trips, along lon 17.00-17.02) and S2 (one
# trip, ~5 km further east). "T1" has a single-point shape, "909" has trips
# without shapes and "3" has no trips at all.
ROUTES_TXT = """route_id,agency_id,route_short_name,route_long_name
R2,1,2,Two
RT,1,T1,Tram one
R9,1,909,Zone
R3,1,3,Three
"""

TRIPS_TXT = """route_id,service_id,trip_id,trip_headsign,shape_id
R2,6,T2a,"Krzyki, pętla",S1
R2,6,T2b,,S1
R2,6,T2c,,S2
RT,6,TT1,Tram depot,ST
R9,6,T9,,
"""

SHAPES_TXT = """shape_id,shape_pt_lat,shape_pt_lon,shape_pt_sequence
S1,51.1000,17.0200,3
S1,51.1000,17.0000,1
S1,51.1000,17.0100,2
S2,51.1000,17.0720,1
S2,51.1000,17.0820,2
S2,51.1000,17.0920,3
ST,51.1100,17.0300,1
"""

STOPS_TXT = """stop_id,stop_code,stop_name,stop_lat,stop_lon
P1,11,Plac Grunwaldzki,51.1000,17.0000
P2,12,Rynek,51.1000,17.0200
P3,13,Biskupin,51.1000,17.0920
"""

STOP_TIMES_TXT = """trip_id,arrival_time,departure_time,stop_id,stop_sequence
T2a,08:10:00,08:10:00,P2,2
T2a,08:00:00,08:00:00,P1,1
T2b,09:00:00,09:00:00,P1,1
T2b,09:10:00,09:10:00,P2,2
T2c,10:00:00,10:00:00,P2,1
T2c,10:15:00,10:16:00,P3,2
TT1,07:00:00,07:00:00,P1,1
"""


def make_raw_feed(**overrides: str) -> dict[str, str]:
    tables = {
        "routes": ROUTES_TXT,
        "trips": TRIPS_TXT,
        "shapes": SHAPES_TXT,
        "stops": STOPS_TXT,
        "stop_times": STOP_TIMES_TXT,
    }
    tables.update(overrides)
    return tables


def write_feed_zip(path: Path, tables: dict[str, str], prefix: str = "") -> None:
    with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for name, text in tables.items():
            zf.writestr(f"{prefix}{name}.txt", text.encode("utf-8"))
        zf.writestr(f"{prefix}README.md", "not a table")


def corrupt_member_data(path: Path, member: str) -> None:
    """Flip bytes inside one member's compressed data, keeping the headers."""

    with zipfile.ZipFile(path) as zf:
        info = zf.getinfo(member)
    data = bytearray(path.read_bytes())
    header = info.header_offset
    name_len = int.from_bytes(data[header + 26 : header + 28], "little")
    extra_len = int.from_bytes(data[header + 28 : header + 30], "little")
    start = header + 30 + name_len + extra_len
    end = start + info.compress_size
    data[start:end] = bytes(b ^ 0xFF for b in data[start:end])
    path.write_bytes(bytes(data))


@dataclass(slots=True)
class FakeFeedSource:
    tables: dict[str, str]
    error: Exception | None = None
    calls: list[int] = field(default_factory=list)

    def fetch_tables(self) -> dict[str, str]:
        self.calls.append(1)
        if self.error is not None:
            raise self.error
        return dict(self.tables)


@pytest.fixture
def raw_feed() -> dict[str, str]:
    return make_raw_feed()


@pytest.fixture
def feed_source(raw_feed: dict[str, str]) -> FakeFeedSource:
    return FakeFeedSource(tables=raw_feed)


@pytest.fixture
def resolution_cache() -> ResolutionCache:
    return ResolutionCache()


@pytest.fixture
def feed_loader(
    feed_source: FakeFeedSource, resolution_cache: ResolutionCache
) -> FeedLoader:
    loader = FeedLoader(source=feed_source)
    loader.add_listener(resolution_cache.invalidate)
    return loader


@pytest.fixture
def line_queries(
    feed_loader: FeedLoader, resolution_cache: ResolutionCache
) -> LineQueryService:
    assert feed_loader.refresh().ok
    return LineQueryService(feed_loader=feed_loader, cache=resolution_cache)

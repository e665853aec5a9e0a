from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import time

DEFAULT_FEED_URL = (
    "https://www.wroclaw.pl/open-data/87b09b32-f076-4475-8ec9-6020ed1f9ac0/"
    "OtwartyWroclaw_rozklad_jazdy_GTFS.zip"
)
DEFAULT_VEHICLE_POSITIONS_URL = "https://mpk.wroc.pl/bus_position"


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float | None) -> float | None:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    return float(raw)


def _env_str(name: str, default: str | None = None) -> str | None:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip() or None


def parse_times(raw: str) -> tuple[time, ...]:
    """Parse 'HH:MM,HH:MM' into sorted wall-clock times."""

    out: list[time] = []
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        hh, _, mm = part.partition(":")
        out.append(time(hour=int(hh), minute=int(mm or 0)))
    return tuple(sorted(out))


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Runtime configuration, read from LINEWATCH_* environment variables."""

    feed_url: str | None
    feed_path: str | None
    feed_timeout_s: float
    refresh_times: tuple[time, ...]
    refresh_timezone: str
    refresh_interval_s: float | None
    vehicle_positions_url: str | None
    vehicle_poll_interval_s: float
    vehicle_timeout_s: float
    schedulers_enabled: bool
    reveal_errors: bool

    @staticmethod
    def from_env() -> "AppConfig":
        return AppConfig(
            feed_url=_env_str("LINEWATCH_FEED_URL", DEFAULT_FEED_URL),
            feed_path=_env_str("LINEWATCH_FEED_PATH"),
            feed_timeout_s=_env_float("LINEWATCH_FEED_TIMEOUT_S", 60.0) or 60.0,
            refresh_times=parse_times(
                os.getenv("LINEWATCH_REFRESH_TIMES", "08:00,16:00")
            ),
            refresh_timezone=os.getenv("LINEWATCH_REFRESH_TIMEZONE", "Europe/Warsaw"),
            refresh_interval_s=_env_float("LINEWATCH_REFRESH_INTERVAL_S", None),
            vehicle_positions_url=_env_str(
                "LINEWATCH_VEHICLE_POSITIONS_URL", DEFAULT_VEHICLE_POSITIONS_URL
            ),
            vehicle_poll_interval_s=(
                _env_float("LINEWATCH_VEHICLE_POLL_INTERVAL_S", 10.0) or 10.0
            ),
            vehicle_timeout_s=_env_float("LINEWATCH_VEHICLE_TIMEOUT_S", 10.0) or 10.0,
            schedulers_enabled=_env_bool("LINEWATCH_SCHEDULERS", True),
            reveal_errors=_env_bool("LINEWATCH_REVEAL_ERRORS", False),
        )

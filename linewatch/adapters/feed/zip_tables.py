from __future__ import annotations

import io
import zipfile
import zlib
from pathlib import Path, PurePosixPath

from linewatch.domain.exceptions import FeedFetchError


def read_zip_tables(archive: bytes | Path) -> dict[str, str]:
    """Extract every '.txt' member of a feed archive as text.

    Members are keyed by file stem ('stop_times.txt' -> 'stop_times').
    """

    source = io.BytesIO(archive) if isinstance(archive, bytes) else archive
    tables: dict[str, str] = {}
    try:
        with zipfile.ZipFile(source) as zf:
            for info in zf.infolist():
                if info.is_dir() or not info.filename.endswith(".txt"):
                    continue
                name = PurePosixPath(info.filename).stem
                tables[name] = zf.read(info).decode("utf-8-sig", errors="replace")
    except (
        zipfile.BadZipFile,
        zlib.error,
        OSError,
        EOFError,
        RuntimeError,
        NotImplementedError,
    ) as exc:
        raise FeedFetchError(f"Unreadable feed archive: {exc}") from exc
    return tables

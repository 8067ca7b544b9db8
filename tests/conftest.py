"""
Shared fixtures for popindex tests.
"""

import os
import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from popindex_core.adapters.sqlite_db import SqliteDB
from popindex_core.domain.models import FileRecord


def utc_timestamp(date_text: str) -> int:
    """Epoch seconds for UTC midnight of a YYYY-MM-DD date."""
    dt = datetime.strptime(date_text, "%Y-%m-%d").replace(tzinfo=timezone.utc)
    return int(dt.timestamp())


@pytest.fixture
def db(tmp_path):
    """A fresh SQLite store in a temp directory."""
    store = SqliteDB(tmp_path / "index.db")
    yield store
    store.close()


@pytest.fixture
def make_record():
    """Factory for FileRecords with sensible defaults."""
    def _make(path, size=0, last_modified=0, is_dir=False, extension="auto"):
        name = Path(path).name
        if extension == "auto":
            suffix = Path(name).suffix.lower().lstrip(".")
            extension = suffix or None
        return FileRecord(
            path=path,
            name=name,
            extension=extension,
            size=size,
            last_modified=last_modified,
            is_dir=is_dir,
        )
    return _make


@pytest.fixture
def write_file():
    """Create a file with a given size and UTC modification date."""
    def _write(path: Path, size: int = 0, modified: str = None) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"x" * size)
        if modified:
            ts = utc_timestamp(modified)
            os.utime(path, (ts, ts))
        return path
    return _write


@pytest.fixture
def utc_ts():
    """The utc_timestamp helper, as a fixture."""
    return utc_timestamp

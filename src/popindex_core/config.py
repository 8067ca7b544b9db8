"""
Configuration for popindex.

Values come from explicit arguments or from POPINDEX_* environment
variables. The store location is never hardcoded in the services.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional


DEFAULT_DB_NAME = "index_entries.db"
DEFAULT_BATCH_SIZE = 10_000
DEFAULT_QUEUE_SIZE = 10_000
DEFAULT_LIMIT = 1000

_TRUE_VALUES = {"1", "true", "yes", "on"}


def default_db_path(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Get the default index location (POPINDEX_DB, else the user app data dir)."""
    environ = os.environ if environ is None else environ
    if environ.get("POPINDEX_DB"):
        return Path(environ["POPINDEX_DB"]).expanduser()
    if environ.get("APPDATA"):
        return Path(environ["APPDATA"]) / "PopIndex" / DEFAULT_DB_NAME
    return Path.home() / ".popindex" / DEFAULT_DB_NAME


def _positive_int(environ: Mapping[str, str], key: str, default: int) -> int:
    raw = environ.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}")
    if value < 1:
        raise ValueError(f"{key} must be >= 1, got {value}")
    return value


@dataclass
class PopIndexConfig:
    """Settings shared by the store, the crawler and the search service."""
    db_path: Path = field(default_factory=default_db_path)
    batch_size: int = DEFAULT_BATCH_SIZE      # Records per committed batch
    queue_size: int = DEFAULT_QUEUE_SIZE      # Bound of the walk -> write queue
    default_limit: int = DEFAULT_LIMIT        # Safety cap when no limit is given
    follow_symlinks: bool = False
    fast_writes: bool = True                  # synchronous=OFF, journal in memory

    def __post_init__(self):
        self.db_path = Path(self.db_path).expanduser()
        for name in ("batch_size", "queue_size", "default_limit"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be >= 1, got {getattr(self, name)}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "PopIndexConfig":
        """
        Build a config from POPINDEX_* environment variables.

        Args:
            environ: Mapping to read instead of os.environ
            **overrides: Explicit values that win over the environment

        Returns:
            The resulting PopIndexConfig
        """
        environ = os.environ if environ is None else environ
        values = {
            "db_path": default_db_path(environ),
            "batch_size": _positive_int(environ, "POPINDEX_BATCH_SIZE", DEFAULT_BATCH_SIZE),
            "queue_size": _positive_int(environ, "POPINDEX_QUEUE_SIZE", DEFAULT_QUEUE_SIZE),
            "default_limit": _positive_int(environ, "POPINDEX_DEFAULT_LIMIT", DEFAULT_LIMIT),
            "follow_symlinks": environ.get("POPINDEX_FOLLOW_SYMLINKS", "").strip().lower() in _TRUE_VALUES,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

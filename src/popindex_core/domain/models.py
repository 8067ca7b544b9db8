"""
Domain models (DTOs) for popindex.

These are pure data classes with no database or filesystem dependencies.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Union

from .enums import EntryKind, SortKey


def valid_text(text: str) -> str:
    """Replace undecodable path bytes (lone surrogates) so the text is valid UTF-8."""
    try:
        raw = text.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        # Unpaired surrogates that did not come from undecodable bytes
        raw = text.encode("utf-8", "surrogatepass")
    return raw.decode("utf-8", "replace")


@dataclass
class FileRecord:
    """A file or directory in the index."""
    path: str                    # Absolute path, unique key
    name: str                    # Final path component
    extension: Optional[str]     # Lowercase, no dot; None if no suffix
    size: int                    # Bytes (metadata size for directories)
    last_modified: int           # Seconds since epoch, 0 if unknown
    is_dir: bool

    @property
    def kind(self) -> EntryKind:
        return EntryKind.DIR if self.is_dir else EntryKind.FILE

    @property
    def modified_at(self) -> datetime:
        return datetime.fromtimestamp(self.last_modified, tz=timezone.utc)


@dataclass
class SearchCriteria:
    """
    Optional search criteria, AND-combined.

    Size and date are raw expressions ("<1KB", "2024-01-01"); they are
    parsed by the query engine and dropped when malformed.
    """
    name: Optional[str] = None               # Substring of the name
    regex: Optional[str] = None              # Post-filter on the name
    extension: Optional[str] = None
    path: Optional[str] = None               # Path prefix
    kind: Optional[Union[EntryKind, str]] = None
    size: Optional[str] = None               # ">10MB", "<500KB", "1024"
    modified_after: Optional[str] = None     # "YYYY-MM-DD", inclusive
    sort: Optional[Union[SortKey, str]] = None
    reverse: bool = False
    limit: Optional[int] = None
    case_sensitive: bool = False

    def __post_init__(self):
        if self.kind is not None:
            self.kind = EntryKind(self.kind)
        if self.sort is not None:
            self.sort = SortKey(self.sort)
        if self.limit is not None and self.limit < 0:
            raise ValueError(f"limit must be >= 0, got {self.limit}")


@dataclass
class ScanProgress:
    """Progress information for a scan."""
    root: str
    entries_found: int = 0
    dirs_found: int = 0
    errors: int = 0              # Entries or directories that could not be read
    batches_written: int = 0
    current_path: str = ""
    is_complete: bool = False
    elapsed_seconds: float = 0.0


@dataclass
class SearchSummary:
    """Totals over a result list."""
    total: int = 0
    files: int = 0
    dirs: int = 0
    total_size: int = 0

"""
Filesystem port interface.

Defines the contract for filesystem metadata access.
All implementations MUST be read-only.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator, Optional


@dataclass
class DirEntry:
    """Metadata for one filesystem entry."""
    name: str
    path: str
    is_dir: bool
    is_symlink: bool
    size_bytes: int
    mtime: int                   # Seconds since epoch, truncated


# Called with (path, error) for every entry the walker has to skip
WalkErrorHandler = Callable[[str, OSError], None]


class FSPort(ABC):
    """
    Abstract interface for filesystem metadata access.

    IMPORTANT: All implementations MUST be read-only.
    No write, delete, move, or rename operations allowed.
    """

    @abstractmethod
    def stat(self, path: Path) -> DirEntry:
        """Get metadata for a single entry (raises OSError if unreadable)."""
        pass

    @abstractmethod
    def walk(self, root: Path, on_error: Optional[WalkErrorHandler] = None) -> Iterator[DirEntry]:
        """
        Iterate over the root and every entry below it.

        Unreadable entries are skipped and reported to on_error; the walk
        itself never raises for a single bad entry. Order is unspecified.

        Args:
            root: Directory (or file) to start from
            on_error: Optional callback for skipped entries

        Yields:
            DirEntry for the root first, then every descendant
        """
        pass

    # SAFETY: These methods must NOT exist in implementations
    # write, delete, move, rename, chmod, etc.

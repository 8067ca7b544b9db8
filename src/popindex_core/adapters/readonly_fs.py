"""
Read-Only Filesystem Adapter.

SAFETY: This is the ONLY way popindex touches the filesystem being indexed.
All operations are strictly read-only (metadata only, no file contents).

Symlinks are not followed unless follow_symlinks=True. When they are
followed, directories are tracked by (st_dev, st_ino) so link cycles are
descended at most once.
"""

import logging
import os
import stat as stat_mod
from pathlib import Path
from typing import Iterator, Optional, Set, Tuple

from ..ports.fs_port import FSPort, DirEntry, WalkErrorHandler

logger = logging.getLogger(__name__)


class ReadOnlyFS(FSPort):
    """
    Read-only filesystem implementation on os.scandir / os.stat.

    SAFETY GUARANTEES:
    - No write operations
    - No delete operations
    - No move/rename operations
    - No content reads
    """

    def __init__(self, follow_symlinks: bool = False):
        """
        Initialize the read-only filesystem.

        Args:
            follow_symlinks: Stat through links and descend into linked
                             directories (cycle-guarded)
        """
        self.follow_symlinks = follow_symlinks

    @staticmethod
    def _to_entry(name: str, path: str, st: os.stat_result, is_symlink: bool) -> DirEntry:
        return DirEntry(
            name=name,
            path=path,
            is_dir=stat_mod.S_ISDIR(st.st_mode),
            is_symlink=is_symlink,
            size_bytes=st.st_size,
            mtime=int(st.st_mtime),
        )

    @staticmethod
    def _report(on_error: Optional[WalkErrorHandler], path: str, error: OSError):
        logger.debug("Skipping unreadable entry %s: %s", path, error)
        if on_error:
            on_error(path, error)

    def stat(self, path: Path) -> DirEntry:
        """Get file/directory metadata."""
        p = Path(path)
        st = os.stat(p, follow_symlinks=self.follow_symlinks)
        return self._to_entry(p.name, str(p), st, is_symlink=p.is_symlink())

    def walk(self, root: Path, on_error: Optional[WalkErrorHandler] = None) -> Iterator[DirEntry]:
        """Iterate over the root and all descendants, depth-first."""
        try:
            top = self.stat(root)
        except OSError as e:
            self._report(on_error, str(root), e)
            return

        yield top
        if not top.is_dir:
            return

        visited: Set[Tuple[int, int]] = set()
        if self.follow_symlinks:
            st = os.stat(top.path)
            visited.add((st.st_dev, st.st_ino))

        pending = [top.path]
        while pending:
            dir_path = pending.pop()
            try:
                with os.scandir(dir_path) as it:
                    children = list(it)
            except OSError as e:
                self._report(on_error, dir_path, e)
                continue

            for child in children:
                try:
                    st = child.stat(follow_symlinks=self.follow_symlinks)
                    entry = self._to_entry(child.name, child.path, st, child.is_symlink())
                except OSError as e:
                    self._report(on_error, child.path, e)
                    continue

                yield entry

                if not entry.is_dir:
                    continue
                if self.follow_symlinks:
                    key = (st.st_dev, st.st_ino)
                    if key in visited:
                        continue
                    visited.add(key)
                pending.append(entry.path)

    # =========================================================================
    # SAFETY: The following methods are intentionally NOT implemented.
    # =========================================================================

    def _forbidden(self, operation: str):
        raise NotImplementedError(
            f"Operation '{operation}' is forbidden. "
            f"ReadOnlyFS is strictly read-only by design."
        )

    def write(self, *args, **kwargs):
        self._forbidden("write")

    def delete(self, *args, **kwargs):
        self._forbidden("delete")

    def rename(self, *args, **kwargs):
        self._forbidden("rename")

    def mkdir(self, *args, **kwargs):
        self._forbidden("mkdir")

"""
Adapters for popindex.

Implementations of the port interfaces.
"""

from .readonly_fs import ReadOnlyFS
from .sqlite_db import SqliteDB

__all__ = ["ReadOnlyFS", "SqliteDB"]

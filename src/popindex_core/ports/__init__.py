"""
Ports (interfaces) for popindex.

These define the contracts that adapters must implement.
This enables dependency injection and testing with fakes.
"""

from .fs_port import FSPort, DirEntry
from .db_port import DBPort

__all__ = ["FSPort", "DirEntry", "DBPort"]

"""
Exception hierarchy for popindex.

All core modules raise subclasses of PopIndexError, never bare Exception.
"""

__all__ = [
    "PopIndexError",
    "StoreError",
    "StoreInitError",
    "StoreWriteError",
    "StoreQueryError",
    "QueryError",
    "InvalidPatternError",
]


class PopIndexError(Exception):
    """Root exception for all popindex errors."""


# ── Store ─────────────────────────────────────────────────────────────────────

class StoreError(PopIndexError):
    """Raised on SQLite / store I/O errors."""


class StoreInitError(StoreError):
    """Raised when the index file cannot be created, opened or initialized."""


class StoreWriteError(StoreError):
    """Raised when a batch write or a clear fails to commit."""


class StoreQueryError(StoreError):
    """Raised when a query plan fails to execute against the store."""


# ── Query ─────────────────────────────────────────────────────────────────────

class QueryError(PopIndexError):
    """Raised when search criteria cannot be turned into a query."""


class InvalidPatternError(QueryError):
    """Raised when the name regular expression does not compile."""

    def __init__(self, pattern: str, reason: str):
        super().__init__(f"Invalid regular expression {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason

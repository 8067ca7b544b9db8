"""
Database port interface.

Defines the contract for the record store.
"""

from abc import ABC, abstractmethod
from typing import List, Sequence

from ..domain.models import FileRecord
from ..domain.query import QueryPlan


class DBPort(ABC):
    """
    Abstract interface for the record store.

    Records are keyed by path. Writes happen in batches, each batch being
    one atomic unit.
    """

    # === Writes ===

    @abstractmethod
    def upsert_batch(self, records: Sequence[FileRecord]) -> None:
        """Insert or replace all records as a single atomic unit."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove every record (idempotent, does not reclaim disk space)."""
        pass

    # === Reads ===

    @abstractmethod
    def query(self, plan: QueryPlan) -> List[FileRecord]:
        """Execute a predicate/sort/limit plan and return ordered records."""
        pass

    @abstractmethod
    def count(self) -> int:
        """Count stored records."""
        pass

    # === Maintenance ===

    @abstractmethod
    def vacuum(self) -> None:
        """Reclaim unused disk space."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Close database connection."""
        pass

"""
Predicate plan for the store.

Each criterion the store can evaluate is one tagged, immutable predicate
carrying its own value and operator. Adapters translate these into their
query language; nothing here is ever interpolated into SQL.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .enums import Comparison, EntryKind, SortKey


@dataclass(frozen=True)
class NameContains:
    text: str
    case_sensitive: bool = False


@dataclass(frozen=True)
class ExtensionEquals:
    extension: str               # Already normalized (lowercase, no dot)


@dataclass(frozen=True)
class PathPrefix:
    prefix: str


@dataclass(frozen=True)
class KindIs:
    kind: EntryKind


@dataclass(frozen=True)
class SizeCompare:
    op: Comparison
    size: int


@dataclass(frozen=True)
class ModifiedSince:
    timestamp: int               # Inclusive lower bound, seconds since epoch


Predicate = Union[NameContains, ExtensionEquals, PathPrefix, KindIs, SizeCompare, ModifiedSince]


@dataclass(frozen=True)
class QueryPlan:
    """AND-combined predicates, sort and cap sent to the store."""
    predicates: Tuple[Predicate, ...] = ()
    sort: Optional[SortKey] = None   # None = storage order
    descending: bool = False
    limit: int = 1000

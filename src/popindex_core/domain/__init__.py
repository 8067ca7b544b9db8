"""
Domain models for popindex.

Contains DTOs, enums, and the predicate plan used throughout the library.
"""

from .models import (
    FileRecord,
    SearchCriteria,
    ScanProgress,
    SearchSummary,
)
from .enums import (
    EntryKind,
    SortKey,
    Comparison,
)
from .query import (
    NameContains,
    ExtensionEquals,
    PathPrefix,
    KindIs,
    SizeCompare,
    ModifiedSince,
    Predicate,
    QueryPlan,
)

__all__ = [
    # Models
    "FileRecord",
    "SearchCriteria",
    "ScanProgress",
    "SearchSummary",
    # Enums
    "EntryKind",
    "SortKey",
    "Comparison",
    # Query plan
    "NameContains",
    "ExtensionEquals",
    "PathPrefix",
    "KindIs",
    "SizeCompare",
    "ModifiedSince",
    "Predicate",
    "QueryPlan",
]

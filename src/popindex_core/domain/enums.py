"""
Enumerations for the popindex domain.
"""

from enum import Enum


class EntryKind(str, Enum):
    """Kind of filesystem entry."""
    FILE = "file"
    DIR = "dir"


class SortKey(str, Enum):
    """Sort keys accepted by a search (values match the CLI spelling)."""
    NAME = "name"
    SIZE = "size"
    MODIFIED = "lmd"
    EXTENSION = "ext"


class Comparison(str, Enum):
    """Comparison operators for numeric predicates."""
    GT = ">"
    LT = "<"
    EQ = "="

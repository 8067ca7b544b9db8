"""
popindex core - Headless library for filesystem indexing.

Builds a persistent SQLite index of every file and directory under a root
and answers attribute searches (name, extension, path, kind, size, date)
without walking the tree again. It has no UI dependencies.

Safety: the indexed filesystem is only ever read, never modified.
"""

__version__ = "0.1.0"

# Lazy imports to avoid loading everything at once
def __getattr__(name):
    if name == "PopIndex":
        from .api import PopIndex
        return PopIndex
    elif name == "PopIndexConfig":
        from .config import PopIndexConfig
        return PopIndexConfig
    elif name == "SearchCriteria":
        from .domain.models import SearchCriteria
        return SearchCriteria
    elif name == "ReadOnlyFS":
        from .adapters.readonly_fs import ReadOnlyFS
        return ReadOnlyFS
    elif name == "SqliteDB":
        from .adapters.sqlite_db import SqliteDB
        return SqliteDB
    elif name == "CrawlerService":
        from .services.crawler import CrawlerService
        return CrawlerService
    elif name == "SearchService":
        from .services.search import SearchService
        return SearchService
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

__all__ = [
    "__version__",
    "PopIndex",
    "PopIndexConfig",
    "SearchCriteria",
    "ReadOnlyFS",
    "SqliteDB",
    "CrawlerService",
    "SearchService",
]

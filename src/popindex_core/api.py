"""
PopIndex facade.

Wires the read-only filesystem, the SQLite store and the two services
together behind the three operations callers need: index, clear, search.

Usage::

    with PopIndex(PopIndexConfig(db_path="~/.popindex/index.db")) as pop:
        pop.index("/data", reindex=True)
        for record in pop.search(extension="csv", size=">10MB", sort="size"):
            print(record.path)
"""

import logging
from typing import Callable, List, Optional

from .config import PopIndexConfig
from .adapters.readonly_fs import ReadOnlyFS
from .adapters.sqlite_db import SqliteDB
from .domain.models import FileRecord, ScanProgress, SearchCriteria, SearchSummary
from .services.crawler import CrawlerService
from .services.search import SearchService

logger = logging.getLogger(__name__)


class PopIndex:
    """
    Entry point to the file index.

    Opening the index creates the store file and schema if needed
    (StoreInitError on failure). One instance is meant for one process;
    do not search while an index() call is writing.
    """

    def __init__(self, config: Optional[PopIndexConfig] = None):
        self.config = config or PopIndexConfig.from_env()
        self.db = SqliteDB(self.config.db_path, fast_writes=self.config.fast_writes)
        self.fs = ReadOnlyFS(follow_symlinks=self.config.follow_symlinks)
        self.crawler = CrawlerService(
            self.fs, self.db,
            batch_size=self.config.batch_size,
            queue_size=self.config.queue_size,
        )
        self.searcher = SearchService(self.db, default_limit=self.config.default_limit)

    def __enter__(self) -> "PopIndex":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def index(
        self,
        root: str,
        reindex: bool = False,
        progress_callback: Optional[Callable[[ScanProgress], None]] = None,
    ) -> ScanProgress:
        """
        Scan root into the index.

        Args:
            root: Directory to index
            reindex: Clear the whole index before scanning
            progress_callback: Called with ScanProgress after each batch

        Raises:
            StoreWriteError: If clearing or a batch commit fails
        """
        if reindex:
            logger.info("Clearing index before rescan")
            self.db.clear()
        return self.crawler.scan(root, progress_callback=progress_callback)

    def clear_index(self) -> None:
        """Remove every record (StoreWriteError on failure)."""
        self.db.clear()

    def search(self, criteria: Optional[SearchCriteria] = None, **fields) -> List[FileRecord]:
        """
        Search the index.

        Pass a SearchCriteria, or its fields as keyword arguments
        (search(extension="txt", size=">1MB")).
        """
        if criteria is not None and fields:
            raise TypeError("Pass either a SearchCriteria or keyword fields, not both")
        if criteria is None:
            criteria = SearchCriteria(**fields)
        return self.searcher.search(criteria)

    def summarize(self, records: List[FileRecord]) -> SearchSummary:
        return self.searcher.summarize(records)

    def count(self) -> int:
        return self.searcher.count()

    def vacuum(self) -> None:
        """Compact the index file (clear() alone does not shrink it)."""
        self.db.vacuum()

    def close(self) -> None:
        self.db.close()

"""
Search Service - Query the file index.

Pushes every criterion the store understands into one query, then
applies the name regex to the returned rows.

The result cap is applied by the store BEFORE the regex post-filter.
A regex search therefore only sees the first `limit` rows of the pushed
down query: it can return fewer rows than exist overall, even when more
matching entries lie beyond the window. Raise the limit to widen it.
"""

import logging
from typing import Iterable, List, Optional

from ..config import DEFAULT_LIMIT
from ..ports.db_port import DBPort
from ..domain.models import FileRecord, SearchCriteria, SearchSummary
from .criteria import build_plan, compile_name_pattern

logger = logging.getLogger(__name__)


class SearchService:
    """
    Service for searching the file index.

    Supports:
    - Name substring, extension, path prefix, kind, size and date filters (store)
    - Name regular expression (post-filter)
    - Sorting, reversing and capping
    """

    def __init__(self, db: DBPort, default_limit: int = DEFAULT_LIMIT):
        """
        Initialize the search service.

        Args:
            db: Database adapter
            default_limit: Cap used when the criteria carry no limit
        """
        self.db = db
        self.default_limit = default_limit

    def search(self, criteria: Optional[SearchCriteria] = None) -> List[FileRecord]:
        """
        Search for entries.

        Args:
            criteria: AND-combined criteria (None = everything, capped)

        Returns:
            Matching records in the requested order

        Raises:
            InvalidPatternError: If criteria.regex does not compile
            StoreQueryError: If the store query fails
        """
        criteria = criteria or SearchCriteria()

        # Compile before touching the store so a bad pattern fails fast
        pattern = compile_name_pattern(criteria.regex, criteria.case_sensitive)
        plan = build_plan(criteria, self.default_limit)

        records = self.db.query(plan)
        if pattern is None:
            return records

        matched = [r for r in records if pattern.search(r.name)]
        logger.debug("Regex %r kept %d of %d rows", criteria.regex, len(matched), len(records))
        return matched

    def count(self) -> int:
        """Number of records in the index."""
        return self.db.count()

    @staticmethod
    def summarize(records: Iterable[FileRecord]) -> SearchSummary:
        """Totals for a result list (files, dirs, bytes)."""
        summary = SearchSummary()
        for record in records:
            summary.total += 1
            if record.is_dir:
                summary.dirs += 1
            else:
                summary.files += 1
            summary.total_size += record.size
        return summary

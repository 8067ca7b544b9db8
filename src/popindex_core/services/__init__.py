"""
Services for popindex.

Business logic for crawling and searching.
"""

from .crawler import CrawlerService
from .search import SearchService

__all__ = [
    "CrawlerService",
    "SearchService",
]

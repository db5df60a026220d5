"""Free-text search and paginated listing across journal entries."""

import math
from dataclasses import dataclass

import structlog

from .errors import InvalidQueryError
from .models import JournalEntry

logger = structlog.get_logger()


@dataclass
class Pagination:
    current_page: int
    total_pages: int
    total_docs: int
    has_next_page: bool
    has_prev_page: bool

    @classmethod
    def build(cls, page: int, limit: int, total_docs: int) -> "Pagination":
        """Derive page metadata from (page, limit, total_docs) alone."""
        _check_page(page, limit)
        return cls(
            current_page=page,
            total_pages=math.ceil(total_docs / limit),
            total_docs=total_docs,
            has_next_page=page * limit < total_docs,
            has_prev_page=page > 1,
        )


@dataclass
class SearchResult:
    entries: list[JournalEntry]
    pagination: Pagination


def _check_page(page: int, limit: int) -> None:
    if page < 1:
        raise InvalidQueryError(f"Page must be a positive integer, got {page}")
    if limit < 1:
        raise InvalidQueryError(f"Limit must be a positive integer, got {limit}")


class JournalSearch:
    """Search and listing over an owner-scoped entry repository."""

    def __init__(self, storage):
        self.storage = storage

    def search(self, owner: str, query: str | None, page: int = 1, limit: int = 10) -> SearchResult:
        """Case-insensitive substring search over content and tags, newest first.

        Raises:
            InvalidQueryError: if query is missing/blank or page/limit invalid
        """
        if query is None or not query.strip():
            raise InvalidQueryError("Search query is required")
        query = query.strip()
        _check_page(page, limit)

        total = self.storage.count_matches(owner, query)
        entries = self.storage.search_by_owner(owner, query, skip=(page - 1) * limit, limit=limit)
        logger.debug("journal.search", owner=owner, total=total, page=page)
        return SearchResult(entries=entries, pagination=Pagination.build(page, limit, total))

    def list_entries(
        self, owner: str, page: int = 1, limit: int = 10, newest_first: bool = True
    ) -> SearchResult:
        """All of an owner's entries, one page at a time."""
        _check_page(page, limit)

        total = self.storage.count_by_owner(owner)
        entries = self.storage.list_by_owner(
            owner, skip=(page - 1) * limit, limit=limit, newest_first=newest_first
        )
        return SearchResult(entries=entries, pagination=Pagination.build(page, limit, total))

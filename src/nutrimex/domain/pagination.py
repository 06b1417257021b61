"""Pagination cursor for incremental result loading."""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import TypeVar

T = TypeVar("T")


class FetchState(StrEnum):
    """Lifecycle of a page controller fetch."""

    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


@dataclass
class PaginationCursor:
    """Tracks the current page and whether another page is likely.

    The service never reports a total, so ``has_more`` is inferred from the
    size of the last page. With ``lookahead`` enabled one extra record is
    requested per page and its presence proves that a next page exists.
    """

    page_size: int = 20
    lookahead: bool = False
    page: int = 1
    has_more: bool = True
    total_pages: int = 1

    @property
    def fetch_limit(self) -> int:
        """Number of records to request for one page."""
        return self.page_size + 1 if self.lookahead else self.page_size

    def offset_for(self, page: int) -> int:
        """Return the record offset of a 1-based page."""
        return (page - 1) * self.page_size

    def record_page(self, page: int, results: Sequence[T]) -> list[T]:
        """Advance to ``page`` and return the records to display."""
        if self.lookahead:
            self.has_more = len(results) > self.page_size
        else:
            self.has_more = len(results) == self.page_size
        self.page = page
        self.total_pages = page + 1 if self.has_more else page
        return list(results[: self.page_size])

    def collapse(self) -> None:
        """Reduce pagination to a single, final page."""
        self.page = 1
        self.total_pages = 1
        self.has_more = False

    def reset(self) -> None:
        """Return to the first page before a new query."""
        self.page = 1
        self.total_pages = 1
        self.has_more = True

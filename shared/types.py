"""
Common type definitions used throughout the application.

This module centralizes TypedDict definitions and other shared types
to ensure consistency and avoid duplication.
"""

from __future__ import annotations
from typing import TypedDict, Generic, List, Optional, TypeVar, Callable
from dataclasses import dataclass


T = TypeVar("T")
U = TypeVar("U")


# =================== PAGINATION TYPES ===================

@dataclass
class Page(Generic[T]):
    """One page of a query result plus the totals needed to navigate it."""
    items: List[T]
    page: int
    size: int
    total_elements: int

    @property
    def total_pages(self) -> int:
        if self.size <= 0:
            return 0
        return (self.total_elements + self.size - 1) // self.size

    @property
    def is_first(self) -> bool:
        return self.page == 0

    @property
    def is_last(self) -> bool:
        return self.page >= self.total_pages - 1

    def map(self, func: Callable[[T], U]) -> "Page[U]":
        """Return a page with the same totals and transformed items."""
        return Page(
            items=[func(item) for item in self.items],
            page=self.page,
            size=self.size,
            total_elements=self.total_elements,
        )


class PageEnvelope(TypedDict):
    """Pagination metadata shared by every list response."""
    page: int
    size: int
    totalPage: int
    totalElement: int
    firstPage: bool
    lastPage: bool


def page_envelope(page: Page) -> PageEnvelope:
    return {
        "page": page.page,
        "size": page.size,
        "totalPage": page.total_pages,
        "totalElement": page.total_elements,
        "firstPage": page.is_first,
        "lastPage": page.is_last,
    }


# =================== QUERY ROW TYPES ===================

@dataclass
class RecipientNameRow:
    """One (note id, recipient username) row from batch name resolution."""
    handover_note_id: int
    username: Optional[str]


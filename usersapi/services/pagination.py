"""Page arithmetic and navigation metadata."""

from __future__ import annotations

import math
from typing import Callable, Generic, Iterator, List, Optional, Sequence, TypeVar

from ..core import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from ..schemas import PaginationHeader

T = TypeVar("T")


class PageList(Generic[T]):
    """One page of an ordered collection plus the totals needed to navigate it."""

    def __init__(self, items: Sequence[T], current_page: int, page_size: int, total_count: int):
        self.items: List[T] = list(items)
        self.current_page = current_page
        self.page_size = page_size
        self.total_count = total_count

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.page_size)

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __repr__(self) -> str:
        return (
            f"PageList(page={self.current_page}/{self.total_pages}, "
            f"size={self.page_size}, total={self.total_count})"
        )


def clamp_page_number(page_number: Optional[int]) -> int:
    if page_number is None:
        return 1
    return max(1, page_number)


def clamp_page_size(page_size: Optional[int], max_page_size: int = MAX_PAGE_SIZE) -> int:
    if page_size is None:
        return DEFAULT_PAGE_SIZE
    return min(max(1, page_size), max_page_size)


def build_pagination_header(
    page: PageList,
    link_for: Callable[[int, int], str],
) -> PaginationHeader:
    """Describe ``page`` for clients.

    ``link_for(page_number, page_size)`` renders a link to another page; it is
    only called for pages that exist on either side of the current one.
    """

    previous_link = None
    next_link = None
    if page.has_previous:
        previous_link = link_for(page.current_page - 1, page.page_size)
    if page.has_next:
        next_link = link_for(page.current_page + 1, page.page_size)

    return PaginationHeader(
        previous_page_link=previous_link,
        next_page_link=next_link,
        total_count=page.total_count,
        page_size=page.page_size,
        current_page=page.current_page,
        total_pages=page.total_pages,
    )


__all__ = [
    "PageList",
    "build_pagination_header",
    "clamp_page_number",
    "clamp_page_size",
]

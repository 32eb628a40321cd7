"""Pagination metadata sent in the ``X-Pagination`` header."""

from __future__ import annotations

from typing import Optional

from .users import CamelModel


class PaginationHeader(CamelModel):
    previous_page_link: Optional[str] = None
    next_page_link: Optional[str] = None
    total_count: int
    page_size: int
    current_page: int
    total_pages: int


__all__ = ["PaginationHeader"]

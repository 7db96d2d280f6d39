"""
Page/limit pagination shared by the campaign listing and its stores.
"""
from typing import TypeVar, Generic, List
from pydantic import BaseModel

T = TypeVar("T")


class PaginatedResponse(BaseModel, Generic[T]):
    """One page of a listing plus the numbers a client needs to walk it."""
    items: List[T]
    total: int
    page: int
    limit: int
    pages: int
    has_next: bool
    has_prev: bool

    class Config:
        from_attributes = True


def page_offset(page: int, limit: int) -> int:
    """Rows to skip for a 1-indexed page."""
    return max(page - 1, 0) * limit


def create_paginated_response(items: List[T], total: int, page: int, limit: int) -> dict:
    """
    Wrap a page of items with its pagination metadata.

    Args:
        items: Items on the requested page
        total: Row count across all pages
        page: 1-indexed page number
        limit: Page size

    Returns:
        Dict matching PaginatedResponse
    """
    pages = -(-total // limit) if limit > 0 else 0
    return {
        "items": items,
        "total": total,
        "page": page,
        "limit": limit,
        "pages": pages,
        "has_next": page < pages,
        "has_prev": page > 1,
    }

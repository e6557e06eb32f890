"""Pagination helpers shared by the list use cases"""

import math
from typing import Tuple
from pydantic import BaseModel, Field

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


class PaginationDTO(BaseModel):
    """Page metadata returned alongside list results"""

    current_page: int = Field(..., description="1-based page number")
    total_pages: int = Field(..., description="Number of pages for the current filters")
    total_count: int = Field(..., description="Number of matching rows")
    limit: int = Field(..., description="Page size")
    has_next_page: bool = Field(..., description="Whether a later page exists")
    has_previous_page: bool = Field(..., description="Whether an earlier page exists")

    @classmethod
    def build(cls, page: int, limit: int, total_count: int) -> "PaginationDTO":
        total_pages = math.ceil(total_count / limit) if limit else 0
        return cls(
            current_page=page,
            total_pages=total_pages,
            total_count=total_count,
            limit=limit,
            has_next_page=page < total_pages,
            has_previous_page=page > 1,
        )


def normalize_paging(
    page: int,
    limit: int,
    max_page_size: int = MAX_PAGE_SIZE,
) -> Tuple[int, int, int]:
    """
    Clamp page/limit to valid values

    Returns:
        Tuple of (page, limit, offset)
    """
    page = max(page or 1, 1)
    limit = min(max(limit or DEFAULT_PAGE_SIZE, 1), max_page_size)
    return page, limit, (page - 1) * limit

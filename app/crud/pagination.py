"""Paging request normalisation and paging metadata."""

import math
from dataclasses import dataclass
from typing import Any, Optional

from app.crud.descriptor import ASC, DESC

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


def parse_positive_int(value: Any, default: int) -> int:
    """``value`` as a positive int, or ``default`` when missing, non-numeric or not positive."""
    if value is None or value == "":
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


@dataclass(frozen=True)
class PageRequest:
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    sort_by: Optional[str] = None
    sort_order: str = ASC

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @classmethod
    def normalize(
        cls,
        page: Any = None,
        limit: Any = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
        default_limit: int = DEFAULT_LIMIT,
        max_limit: Optional[int] = None,
    ) -> "PageRequest":
        size = parse_positive_int(limit, default_limit)
        if max_limit is not None:
            size = min(size, max_limit)
        order = DESC if (sort_order or "").lower() == DESC else ASC
        return cls(
            page=parse_positive_int(page, DEFAULT_PAGE),
            limit=size,
            sort_by=sort_by or None,
            sort_order=order,
        )


@dataclass(frozen=True)
class PageMeta:
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool

    @classmethod
    def build(cls, request: PageRequest, total: int) -> "PageMeta":
        total_pages = math.ceil(total / request.limit) if request.limit else 0
        return cls(
            page=request.page,
            limit=request.limit,
            total=total,
            total_pages=total_pages,
            has_next=request.page < total_pages,
            has_prev=request.page > 1,
        )

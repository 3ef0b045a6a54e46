"""
PATH: common/pagination.py

PAGE / LIMIT PAGINATION

The storefront and admin console page lists with ?page=&limit= and expect:
    {"page", "limit", "total", "totalPages", "hasNextPage", "hasPreviousPage"}

Rules:
- page and limit are clamped to >= 1 (junk falls back to the default)
- limit is capped at max_limit
- totalPages = ceil(total / limit); 0 when there is nothing to show
- a page past the end yields an empty slice, never an error
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from django.db.models import QuerySet

DEFAULT_MAX_LIMIT = 100


def parse_positive_int(raw, *, default: int, maximum: Optional[int] = None) -> int:
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        return default

    if value < 1:
        return default
    if maximum is not None and value > maximum:
        return maximum
    return value


def wants_pagination(query_params, *, limit_param: str = "limit") -> bool:
    return "page" in query_params or limit_param in query_params


def page_params(
    query_params,
    *,
    default_limit: int,
    max_limit: int = DEFAULT_MAX_LIMIT,
    limit_param: str = "limit",
) -> tuple[int, int]:
    page = parse_positive_int(query_params.get("page"), default=1)
    limit = parse_positive_int(
        query_params.get(limit_param),
        default=default_limit,
        maximum=max_limit,
    )
    return page, limit


@dataclass(frozen=True)
class PageWindow:
    page: int
    limit: int
    total: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def total_pages(self) -> int:
        if self.total <= 0:
            return 0
        return math.ceil(self.total / self.limit)

    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous_page(self) -> bool:
        return self.page > 1

    def as_dict(self, *, limit_key: str = "limit") -> dict[str, Any]:
        return {
            "page": self.page,
            limit_key: self.limit,
            "total": self.total,
            "totalPages": self.total_pages,
            "hasNextPage": self.has_next_page,
            "hasPreviousPage": self.has_previous_page,
        }


def paginate(items: QuerySet | Sequence, *, page: int, limit: int):
    """
    Slice a queryset (COUNT + LIMIT/OFFSET) or an in-memory list.

    Returns (page_items, PageWindow).
    """
    if isinstance(items, QuerySet):
        total = items.count()
    else:
        total = len(items)

    window = PageWindow(page=page, limit=limit, total=total)
    start = window.offset
    return list(items[start : start + limit]), window

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import TypeVar

from ..domain.common import MAX_ROW_ID
from ..domain.pagination import PageParams, PageResult

T = TypeVar("T")


def total_pages(total: int, limit: int) -> int:
    """Number of pages needed to show ``total`` rows, ``limit`` per page."""

    if limit < 1:
        raise ValueError("limit must be a positive integer")
    return math.ceil(total / limit) if total > 0 else 0


def parse_int(raw: str | None, default: int) -> int:
    """Parse a query-string integer, falling back to ``default`` on junk."""

    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def clamp(value: int, minimum: int, maximum: int | None = None) -> int:
    value = max(minimum, value)
    if maximum is not None:
        value = min(maximum, value)
    return value


def build_page_params(
    raw_page: str | None,
    raw_limit: str | None,
    *,
    default_limit: int,
    max_limit: int,
) -> PageParams:
    """Clamp raw ``page``/``limit`` query values instead of rejecting them."""

    # Keep (page - 1) * limit inside a signed 64-bit OFFSET.
    page = clamp(parse_int(raw_page, 1), 1, MAX_ROW_ID // max_limit)
    limit = clamp(parse_int(raw_limit, default_limit), 1, max_limit)
    return PageParams(page=page, limit=limit)


def build_page(items: Sequence[T], total: int, params: PageParams) -> PageResult[T]:
    return PageResult(
        items=list(items),
        total=total,
        page=params.page,
        total_pages=total_pages(total, params.limit),
    )

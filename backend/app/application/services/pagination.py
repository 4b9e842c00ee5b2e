"""Pagination calculator: pure arithmetic from (page, limit, total) to a PageInfo."""

import math

from app.domain.entities import PageInfo
from app.domain.exceptions import ValidationError

# Largest OFFSET the stores accept (signed 64-bit).
MAX_OFFSET = 2**63 - 1


def _coerce_int(raw: int | str | None) -> int | None:
    if raw is None or isinstance(raw, int):
        return raw
    try:
        return int(raw.strip())
    except ValueError:
        return None


def normalize_page(raw: int | str | None) -> int:
    """Page numbers start at 1; absent, non-numeric or non-positive input becomes 1."""
    page = _coerce_int(raw)
    if page is None:
        return 1
    return max(1, page)


def normalize_limit(raw: int | str | None, default: int, maximum: int | None = None) -> int:
    """Fall back to the surface default for absent or non-positive limits."""
    limit = _coerce_int(raw)
    if limit is None or limit < 1:
        limit = default
    if maximum is not None:
        limit = min(limit, maximum)
    return limit


def clamp_page(page: int, limit: int) -> int:
    """Keep ``page`` within 1 and the last page whose offset the store can address."""
    return min(max(1, page), MAX_OFFSET // limit + 1)


def page_window(page: int, limit: int) -> tuple[int, int]:
    """Return ``(skip, take)`` for the given page."""
    if limit < 1:
        raise ValidationError("limit must be at least 1", field="limit")
    page = clamp_page(page, limit)
    return (page - 1) * limit, limit


def paginate(page: int, limit: int, total_count: int) -> PageInfo:
    """Derive skip/take and navigation flags for one page of ``total_count`` rows."""
    skip, take = page_window(page, limit)
    page = clamp_page(page, limit)
    total_pages = math.ceil(total_count / limit)
    return PageInfo(
        page=page,
        limit=limit,
        total_count=total_count,
        total_pages=total_pages,
        skip=skip,
        take=take,
        has_next=page < total_pages,
        has_prev=page > 1,
    )

from __future__ import annotations

import math
from typing import Any, Callable

from . import settings
from .errors import ValidationError
from .schemas import Page

# fetch(skip, limit) -> (items in the window, total items across all pages)
WindowFetcher = Callable[[int, int], "tuple[list[Any], int]"]


def normalize_window(page: int | None, limit: int | None, default_limit: int | None = None) -> tuple[int, int]:
    """
    Validate page/limit query values and apply defaults.

    Args:
        page: 1-based page number, defaults to 1
        limit: Page size, defaults to ``default_limit`` or the configured default
        default_limit: Per-listing default (reply listings use a narrower one)

    Returns:
        Tuple of (page, limit), limit capped at the configured maximum
    """
    if page is None:
        page = 1
    if limit is None:
        limit = default_limit or settings.DEFAULT_PAGE_LIMIT
    if page < 1:
        raise ValidationError("page must be a positive integer")
    if limit < 1:
        raise ValidationError("limit must be a positive integer")
    return page, min(limit, settings.MAX_PAGE_LIMIT)


def paginate(
    fetch: WindowFetcher,
    page: int | None = None,
    limit: int | None = None,
    default_limit: int | None = None,
) -> Page:
    """
    Run ``fetch`` for one page window and wrap the result with page metadata.

    ``total_items`` comes from the fetcher and is independent of the window,
    so the counts are the same whichever page is requested. Pages past the
    end yield an empty item list rather than an error.
    """
    page, limit = normalize_window(page, limit, default_limit)
    items, total_items = fetch((page - 1) * limit, limit)
    total_pages = math.ceil(total_items / limit) if total_items else 0
    return Page(
        items=items,
        page=page,
        limit=limit,
        total_items=total_items,
        total_pages=total_pages,
        has_next=page < total_pages,
        has_prev=page > 1,
    )

"""Pagination helpers for page-numbered listings."""

from __future__ import annotations

from typing import Any, Awaitable, Callable

from storefront_client.models.customers import Page


async def paginate(
    fetch_page: Callable[[int, int], Awaitable[Page[Any]]],
    size: int = 20,
    start: int = 0,
    max_pages: int | None = None,
) -> list[Any]:
    """Collect items across pages until the backend reports no more.

    Args:
        fetch_page: Coroutine taking (page, size) and returning a Page.
        size: Page size to request.
        start: First page number (the backend counts from 0).
        max_pages: Stop after this many pages even if more exist.

    Returns:
        All items concatenated across pages.
    """
    all_items: list[Any] = []
    page_number = start
    fetched = 0

    while True:
        page = await fetch_page(page_number, size)
        all_items.extend(page.content)
        fetched += 1

        if not page.content or page_number + 1 >= page.total_pages:
            break
        if max_pages is not None and fetched >= max_pages:
            break
        page_number += 1

    return all_items

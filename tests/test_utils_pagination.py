"""Tests for utils/pagination.py: uses a coroutine stub for fetch_page."""
import pytest

from storefront_client.models.customers import Page
from storefront_client.utils.pagination import paginate


def _fetcher(pages):
    calls = []

    async def fetch(page, size):
        calls.append((page, size))
        return pages[page]

    return fetch, calls


@pytest.mark.asyncio
async def test_single_page():
    fetch, calls = _fetcher([Page(content=[1, 2], total_pages=1)])
    assert await paginate(fetch) == [1, 2]
    assert calls == [(0, 20)]


@pytest.mark.asyncio
async def test_multiple_pages():
    fetch, calls = _fetcher([
        Page(content=[1], total_pages=3),
        Page(content=[2], total_pages=3),
        Page(content=[3], total_pages=3),
    ])
    assert await paginate(fetch, size=1) == [1, 2, 3]
    assert calls == [(0, 1), (1, 1), (2, 1)]


@pytest.mark.asyncio
async def test_stops_on_empty_page():
    fetch, calls = _fetcher([Page(content=[1], total_pages=9), Page(content=[], total_pages=9)])
    assert await paginate(fetch) == [1]
    assert len(calls) == 2


@pytest.mark.asyncio
async def test_max_pages():
    fetch, calls = _fetcher([Page(content=[i], total_pages=5) for i in range(5)])
    assert await paginate(fetch, max_pages=2) == [0, 1]
    assert len(calls) == 2


@pytest.mark.asyncio
async def test_zero_total_pages():
    fetch, _ = _fetcher([Page(content=[], total_pages=0)])
    assert await paginate(fetch) == []

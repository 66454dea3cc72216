#!/usr/bin/env python3
"""Tests for bounded cursor pagination."""

import pytest

from tezsync.core.pagination import MAX_PAGES, fetch_all_pages


class FakePager:
    """Serves pages of {"id": n} items and records the cursors it was asked for."""

    def __init__(self, pages):
        self.pages = pages
        self.cursors = []

    async def __call__(self, cursor):
        self.cursors.append(cursor)
        index = len(self.cursors) - 1
        return self.pages[index] if index < len(self.pages) else []


def _cursor(item):
    return item.get("id")


@pytest.mark.pagination
class TestFetchAllPages:
    """Test fetch_all_pages termination rules."""

    @pytest.mark.asyncio
    async def test_stops_on_empty_page(self):
        pager = FakePager([[{"id": 1}, {"id": 2}], [{"id": 3}]])

        result = await fetch_all_pages(pager, _cursor)

        assert [item["id"] for item in result.items] == [1, 2, 3]
        assert pager.cursors == [None, 2, 3]
        assert result.pages_fetched == 3
        assert not result.truncated

    @pytest.mark.asyncio
    async def test_stops_when_cursor_missing(self):
        pager = FakePager([[{"id": 1}, {"no_id": True}], [{"id": 9}]])

        result = await fetch_all_pages(pager, _cursor)

        assert len(result.items) == 2
        assert pager.cursors == [None]
        assert not result.truncated

    @pytest.mark.asyncio
    async def test_never_ending_indexer_stops_after_exactly_max_pages(self):
        calls = []

        async def endless(cursor):
            calls.append(cursor)
            return [{"id": len(calls)}]

        result = await fetch_all_pages(endless, _cursor)

        assert MAX_PAGES == 20
        assert len(calls) == 20
        assert result.pages_fetched == 20
        assert result.truncated
        assert len(result.items) == 20

    @pytest.mark.asyncio
    async def test_custom_page_budget_and_start_cursor(self):
        pager = FakePager([[{"id": 11}], [{"id": 12}], [{"id": 13}]])

        result = await fetch_all_pages(pager, _cursor, start_cursor=10, max_pages=2)

        assert pager.cursors == [10, 11]
        assert result.truncated

    @pytest.mark.asyncio
    async def test_transport_errors_propagate(self):
        async def failing(cursor):
            raise ConnectionError("indexer down")

        with pytest.raises(ConnectionError):
            await fetch_all_pages(failing, _cursor)

    @pytest.mark.asyncio
    async def test_rejects_non_positive_budget(self):
        with pytest.raises(ValueError):
            await fetch_all_pages(FakePager([]), _cursor, max_pages=0)

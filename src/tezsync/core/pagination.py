#!/usr/bin/env python3
"""
Cursor Pagination

Drives a cursor-paginated indexer endpoint to completion under a fixed page
budget. Pages are fetched strictly one after another because each request
needs the cursor of the previous page.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

# Hard bound against indexers that never return an empty page
MAX_PAGES = 20

T = TypeVar("T")
Cursor = TypeVar("Cursor")


@dataclass
class PageCollection(Generic[T]):
    """
    Items accumulated across pages.

    ``truncated`` is True when the page budget ran out before the indexer
    signalled the end, in which case the items are best-effort only.
    """

    items: list[T] = field(default_factory=list)
    pages_fetched: int = 0
    truncated: bool = False


async def fetch_all_pages(
    fetch_page: Callable[[Cursor | None], Awaitable[list[T]]],
    cursor_of: Callable[[T], Cursor | None],
    *,
    start_cursor: Cursor | None = None,
    max_pages: int = MAX_PAGES,
) -> PageCollection[T]:
    """
    Fetch pages until an empty page, a missing cursor or the page budget.

    Args:
        fetch_page: Coroutine returning the page that follows ``cursor``
                    (None requests the first page)
        cursor_of: Extracts the cursor from an item; None if absent
        start_cursor: Cursor to resume from
        max_pages: Maximum number of requests to issue

    Returns:
        PageCollection with items in fetch order

    Raises:
        ValueError: If max_pages is not positive
        Exception: Whatever fetch_page raises is propagated unchanged
    """
    if max_pages <= 0:
        raise ValueError(f"max_pages must be positive, got {max_pages}")

    collection: PageCollection[T] = PageCollection()
    cursor = start_cursor

    while collection.pages_fetched < max_pages:
        page = await fetch_page(cursor)
        collection.pages_fetched += 1
        if not page:
            return collection

        collection.items.extend(page)
        cursor = cursor_of(page[-1])
        if cursor is None:
            logger.warning(
                f"Pagination cursor missing after {collection.pages_fetched} pages, "
                f"stopping with {len(collection.items)} items"
            )
            return collection

    collection.truncated = True
    logger.warning(
        f"Pagination stopped at the {max_pages} page limit with {len(collection.items)} items; "
        "history may be incomplete"
    )
    return collection

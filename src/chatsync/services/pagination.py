"""Offset pagination over cache entries.

Forward mode serves the conversation list front to back: the cursor is the
offset of the next unread item. Backward mode serves a chat history from the
newest end: the cursor is the exclusive upper bound of the older items still
to reveal, and each page comes back oldest-first.

Page sizes are capped at settings.max_page_size. A zero page size reads an
empty window and always reports the end of the sequence. The first request for a key
materializes oversize_factor times the requested count so several pages can
be served without regenerating; that size is never revisited.
"""

import logging
from typing import Callable, TypeVar

from chatsync.config import Settings
from chatsync.models import Cursor, CursorKind, Page
from chatsync.services.cache_store import CacheEntry, CacheStore
from chatsync.services.ids import generate_id

logger = logging.getLogger(__name__)

T = TypeVar("T")

# (count, generation_id) -> generated items
ItemFactory = Callable[[int, str], list[T]]


def _page_model(item_type: type | None) -> type[Page]:
    return Page[item_type] if item_type is not None else Page


class PaginationEngine:
    """Computes page windows over entries held in a CacheStore."""

    def __init__(self, store: CacheStore, settings: Settings):
        self.store = store
        self.settings = settings

    def _page_size(self, requested: int) -> int:
        if requested < 0:
            raise ValueError(f"page size must be non-negative, got {requested}")
        return min(requested, self.settings.max_page_size)

    def _entry(self, key: str, requested: int, generate: ItemFactory) -> CacheEntry:
        def factory() -> CacheEntry:
            generation_id = generate_id()
            size = requested * self.settings.oversize_factor
            return CacheEntry(key=key, generation_id=generation_id, items=generate(size, generation_id))

        return self.store.get_or_create(key, factory)

    def fetch_forward(
        self,
        key: str,
        page_size: int,
        generate: ItemFactory[T],
        cursor: Cursor | None = None,
        *,
        item_type: type[T] | None = None,
    ) -> Page[T]:
        """Return the page starting at the cursor offset (or the beginning)."""
        size = self._page_size(page_size)
        entry = self._entry(key, page_size, generate)
        total = len(entry.items)

        start = cursor.expect(CursorKind.FORWARD) if cursor is not None else 0
        start = min(start, total)
        end = min(start + size, total)
        has_more = size > 0 and end < total

        logger.debug(f"[mock] {key} forward [{start}:{end}] of {total}")
        return _page_model(item_type)(
            items=entry.items[start:end],
            has_more=has_more,
            next_cursor=Cursor.forward(end) if has_more else None,
        )

    def fetch_backward(
        self,
        key: str,
        page_size: int,
        generate: ItemFactory[T],
        cursor: Cursor | None = None,
        *,
        item_type: type[T] | None = None,
    ) -> Page[T]:
        """Return the page ending just before the cursor offset (or at the newest item)."""
        size = self._page_size(page_size)
        entry = self._entry(key, page_size, generate)
        total = len(entry.items)

        end = cursor.expect(CursorKind.BACKWARD) if cursor is not None else total
        end = min(end, total)
        start = max(end - size, 0)
        has_more = size > 0 and start > 0

        logger.debug(f"[mock] {key} backward [{start}:{end}] of {total}")
        return _page_model(item_type)(
            items=entry.items[start:end],
            has_more=has_more,
            next_cursor=Cursor.backward(start) if has_more else None,
        )

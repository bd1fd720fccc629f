"""Keyed in-memory storage for generated datasets.

Entries are created lazily the first time a key is paged and then serve every
later page under that key. Appends extend an entry in place; nothing shrinks
an entry short of clearing the whole store.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable

logger = logging.getLogger(__name__)


def previews_key(count: int) -> str:
    """Cache key for a conversation list generated for a page size."""
    return f"previews-{count}"


def chat_key(conversation_id: str) -> str:
    """Cache key for one conversation's message history."""
    return f"chat-{conversation_id}"


@dataclass
class CacheEntry:
    """Backing sequence for one pagination key."""

    key: str
    generation_id: str
    items: list[Any] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __len__(self) -> int:
        return len(self.items)


class CacheStore:
    """Owns all cache entries for one simulator session.

    Call clear() to start over with freshly generated data.
    """

    def __init__(self):
        self._entries: dict[str, CacheEntry] = {}

    def get(self, key: str) -> CacheEntry | None:
        """Get an entry without creating it."""
        return self._entries.get(key)

    def get_or_create(self, key: str, factory: Callable[[], CacheEntry]) -> CacheEntry:
        """Return the entry for key, building it with factory on first access."""
        entry = self._entries.get(key)
        if entry is None:
            entry = factory()
            self._entries[key] = entry
            logger.info(f"[mock] Materialized cache entry {key} ({len(entry)} items)")
        return entry

    def append_to(self, key: str, item: Any) -> bool:
        """Append an item to an existing entry.

        Returns False and drops the item when the key was never materialized,
        so a send into an unopened conversation does not create a history.
        """
        entry = self._entries.get(key)
        if entry is None:
            logger.debug(f"[mock] No cache entry {key}, dropping append")
            return False
        entry.items.append(item)
        return True

    def keys(self) -> list[str]:
        return list(self._entries)

    def clear(self) -> None:
        """Wipe every entry."""
        count = len(self._entries)
        self._entries.clear()
        logger.info(f"[mock] Cache cleared ({count} entries)")

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

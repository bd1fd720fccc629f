"""Mock messaging backend.

This module provides the four operations a chat UI talks to: the conversation
list, a conversation's history, sending, and a reset. Every call awaits a
simulated round-trip before touching the cache, so it behaves like a remote
service while keeping all state in process memory.

Each MessageService owns its own CacheStore. Build one per application
session (or per test) and call clear_cache() to start over.
"""

import logging
import random
from functools import partial

from chatsync.config import Settings, settings as default_settings
from chatsync.models import ConversationPreview, Cursor, Message, Page
from chatsync.services.cache_store import CacheStore, chat_key, previews_key
from chatsync.services.dataset import generate_chat_messages, generate_message_previews
from chatsync.services.latency import LatencySimulator
from chatsync.services.mutation import MutationEngine
from chatsync.services.pagination import PaginationEngine

logger = logging.getLogger(__name__)


class MessageService:
    """In-memory stand-in for a messaging API."""

    def __init__(
        self,
        settings: Settings | None = None,
        store: CacheStore | None = None,
        rng: random.Random | None = None,
    ):
        self.settings = settings or default_settings
        self.store = store or CacheStore()
        self._rng = rng or random.Random(self.settings.random_seed)
        self.latency = LatencySimulator(self.settings, self._rng)
        self.pagination = PaginationEngine(self.store, self.settings)
        self.mutation = MutationEngine(self.store)

    def _generate_previews(self, count: int, generation_id: str) -> list[ConversationPreview]:
        return generate_message_previews(
            count,
            generation_id=generation_id,
            rng=self._rng,
            step_minutes=self.settings.preview_step_minutes,
        )

    def _generate_chat(self, conversation_id: str, count: int, generation_id: str) -> list[Message]:
        return generate_chat_messages(
            conversation_id,
            count,
            generation_id=generation_id,
            step_minutes=self.settings.chat_step_minutes,
        )

    async def fetch_message_previews(
        self,
        count: int,
        cursor: Cursor | None = None,
    ) -> Page[ConversationPreview]:
        """Fetch a page of the conversation list, newest conversation first."""
        await self.latency.simulate("previews")
        return self.pagination.fetch_forward(
            previews_key(count),
            count,
            self._generate_previews,
            cursor=cursor,
            item_type=ConversationPreview,
        )

    async def fetch_chat_messages(
        self,
        conversation_id: str,
        count: int,
        cursor: Cursor | None = None,
    ) -> Page[Message]:
        """Fetch a page of history, starting from the newest messages.

        Each page is oldest-first; follow next_cursor to reveal older pages.
        """
        await self.latency.simulate("chat")
        return self.pagination.fetch_backward(
            chat_key(conversation_id),
            count,
            partial(self._generate_chat, conversation_id),
            cursor=cursor,
            item_type=Message,
        )

    async def send_message(self, conversation_id: str, text: str) -> Message:
        """Send a message and return the confirmed record.

        Raises:
            TransientNetworkError: If failure injection is enabled and fires

        """
        await self.latency.simulate("send")
        self.latency.maybe_fail("send", self.settings.send_failure_rate)
        return self.mutation.append_message(conversation_id, text)

    def clear_cache(self) -> None:
        """Drop every generated list and history."""
        self.store.clear()

"""Client-side sync controllers for the conversation list and open chats.

A controller owns the state one UI surface renders: the loaded items, the
cursor for the next page, and the loading flags. It deduplicates pagination
triggers with a single-flight guard and drops results that arrive after the
surface was reset, using an epoch counter bumped on every open/load/close.

Sends are not gated by the pagination guard. They clear the draft right away
and only render the message once the service confirms it; on failure the
draft comes back so the user does not lose it.
"""

import asyncio
import contextlib
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar

from chatsync.models import ConversationPreview, Cursor, Message, Page
from chatsync.services.message_service import MessageService

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 20


class ListOrder(str, Enum):
    """How a chat history is arranged in the rendered list."""

    NEWEST_LAST = "newest_last"  # Chronological, scroll up for older
    NEWEST_FIRST = "newest_first"  # Inverted list, scroll down for older


@dataclass
class SyncState(Generic[T]):
    """What one list surface currently shows."""

    items: list[T] = field(default_factory=list)
    cursor: Cursor | None = None
    has_more: bool = False
    loading: bool = False
    loading_more: bool = False
    in_flight: bool = False  # Single-flight guard for pagination
    epoch: int = 0


class PagedSync(ABC, Generic[T]):
    """Shared first-page / next-page orchestration."""

    def __init__(self, service: MessageService, page_size: int = DEFAULT_PAGE_SIZE):
        self.service = service
        self.page_size = page_size
        self.state: SyncState[T] = SyncState()

    @property
    def items(self) -> list[T]:
        return self.state.items

    def _reset(self, loading: bool = False) -> int:
        """Replace the state with a fresh one under a new epoch."""
        self.state = SyncState(epoch=self.state.epoch + 1, loading=loading)
        return self.state.epoch

    def _is_current(self, epoch: int) -> bool:
        return epoch == self.state.epoch

    def _can_page(self) -> bool:
        return True

    @abstractmethod
    async def _fetch(self, cursor: Cursor | None) -> Page[T]:
        """Fetch one page; no cursor means the first page."""

    def _arrange_first(self, items: list[T], pending: list[T]) -> list[T]:
        return list(items) + pending

    def _merge_next(self, items: list[T]) -> None:
        self.state.items.extend(items)

    async def _load_first(self, epoch: int) -> bool:
        state = self.state
        try:
            page = await self._fetch(None)
            if not self._is_current(epoch):
                logger.info(f"{type(self).__name__}: discarding stale first page (epoch {epoch})")
                return False
            fetched = {item.id for item in page.items}
            # Items confirmed while the first page was loading
            pending = [item for item in state.items if item.id not in fetched]
            state.items = self._arrange_first(page.items, pending)
            state.cursor = page.next_cursor
            state.has_more = page.has_more
            return True
        finally:
            state.loading = False

    async def _load_next(self) -> bool:
        state = self.state
        if state.in_flight or not state.has_more or state.cursor is None or not self._can_page():
            return False

        epoch = state.epoch
        state.in_flight = True
        state.loading_more = True
        try:
            page = await self._fetch(state.cursor)
            if not self._is_current(epoch):
                logger.info(f"{type(self).__name__}: discarding stale page (epoch {epoch})")
                return False
            self._merge_next(page.items)
            state.cursor = page.next_cursor
            state.has_more = page.has_more
            return True
        finally:
            # Flags belong to the state this call started with
            state.loading_more = False
            state.in_flight = False


class PreviewListSync(PagedSync[ConversationPreview]):
    """Conversation list: forward pagination, pages appended at the end."""

    async def _fetch(self, cursor: Cursor | None) -> Page[ConversationPreview]:
        return await self.service.fetch_message_previews(self.page_size, cursor)

    async def load(self, reset_cache: bool = False) -> bool:
        """Load the first page, replacing whatever was shown.

        With reset_cache the service regenerates every dataset first.
        """
        epoch = self._reset(loading=True)
        if reset_cache:
            self.service.clear_cache()
        return await self._load_first(epoch)

    async def load_more(self) -> bool:
        """Append the next page. Returns False when the trigger was ignored."""
        return await self._load_next()

    def mark_read(self, preview_id: str) -> bool:
        for preview in self.state.items:
            if preview.id == preview_id:
                preview.unread_count = 0
                return True
        return False

    def reset(self) -> None:
        self._reset()


class ConversationSync(PagedSync[Message]):
    """History of the currently open conversation.

    Pages are fetched newest first. With ListOrder.NEWEST_LAST older pages go
    in front and sent messages at the end; NEWEST_FIRST mirrors that for
    inverted lists.
    """

    def __init__(
        self,
        service: MessageService,
        order: ListOrder = ListOrder.NEWEST_LAST,
        page_size: int = DEFAULT_PAGE_SIZE,
        serialize_sends: bool | None = None,
    ):
        super().__init__(service, page_size)
        self.order = order
        self.conversation: ConversationPreview | None = None
        self.draft = ""
        if serialize_sends is None:
            serialize_sends = service.settings.serialize_sends
        self._send_guard = asyncio.Lock() if serialize_sends else contextlib.nullcontext()

    def _can_page(self) -> bool:
        return self.conversation is not None

    async def _fetch(self, cursor: Cursor | None) -> Page[Message]:
        return await self.service.fetch_chat_messages(self.conversation.id, self.page_size, cursor)

    def _arrange_first(self, items: list[Message], pending: list[Message]) -> list[Message]:
        if self.order == ListOrder.NEWEST_FIRST:
            return pending + list(reversed(items))
        return list(items) + pending

    def _merge_next(self, items: list[Message]) -> None:
        if self.order == ListOrder.NEWEST_FIRST:
            self.state.items.extend(reversed(items))
        else:
            self.state.items[:0] = items

    def _add_newest(self, message: Message) -> None:
        if self.order == ListOrder.NEWEST_FIRST:
            self.state.items.insert(0, message)
        else:
            self.state.items.append(message)

    async def open(self, conversation: ConversationPreview) -> bool:
        """Switch to a conversation and load its newest page."""
        self.conversation = conversation
        self.draft = ""
        epoch = self._reset(loading=True)
        logger.info(f"Opening conversation {conversation.id}")
        return await self._load_first(epoch)

    async def load_older(self) -> bool:
        """Reveal the next older page. Returns False when the trigger was ignored."""
        return await self._load_next()

    def close(self) -> None:
        """Discard all state; in-flight results will be dropped."""
        self.conversation = None
        self.draft = ""
        self._reset()

    async def send(self, text: str | None = None) -> Message | None:
        """Send text (or the current draft) to the open conversation.

        Sending the draft clears it right away and restores it on failure. Explicit
        text leaves the draft alone.

        Returns the confirmed message, or None if nothing was sent, the send
        failed, or the conversation changed before confirmation.
        """
        typed = self.draft if text is None else text
        body = typed.strip()
        if not body or self.conversation is None:
            return None

        conversation_id = self.conversation.id
        epoch = self.state.epoch
        if text is None:
            self.draft = ""

        try:
            async with self._send_guard:
                message = await self.service.send_message(conversation_id, body)
        except Exception as e:
            logger.warning(f"Send to {conversation_id} failed, restoring draft: {e}")
            if text is None and self._is_current(epoch):
                self.draft = typed
            return None

        if not self._is_current(epoch):
            logger.info(f"Dropping confirmation for {message.id}, conversation {conversation_id} closed")
            return None
        self._add_newest(message)
        return message

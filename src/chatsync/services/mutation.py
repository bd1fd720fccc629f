"""Outgoing message creation."""

import logging
from datetime import datetime, timezone

from chatsync.models import Message
from chatsync.services.cache_store import CacheStore, chat_key
from chatsync.services.dataset import CURRENT_USER_ID
from chatsync.services.ids import generate_id

logger = logging.getLogger(__name__)


class MutationEngine:
    """Appends sent messages to conversation histories."""

    def __init__(self, store: CacheStore):
        self.store = store

    def append_message(self, conversation_id: str, text: str) -> Message:
        """Create an outgoing message and append it to the cached history.

        The timestamp never goes backwards relative to the current last
        message, so history order and timestamp order agree. Returns the
        record even when the history was never paged in and the append is
        dropped.
        """
        key = chat_key(conversation_id)
        timestamp = datetime.now(timezone.utc)

        entry = self.store.get(key)
        if entry is not None and entry.items:
            timestamp = max(timestamp, entry.items[-1].timestamp)

        message = Message(
            id=generate_id(),
            conversation_id=conversation_id,
            sender_id=CURRENT_USER_ID,
            text=text,
            timestamp=timestamp,
            is_outgoing=True,
        )
        appended = self.store.append_to(key, message)
        logger.info(
            f"[mock] Sent message {message.id} to {conversation_id} (cached={appended})"
        )
        return message

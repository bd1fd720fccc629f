"""Backend-free messaging data layer for chat UIs."""

from chatsync.services.message_service import MessageService
from chatsync.sync import ConversationSync, ListOrder, PreviewListSync

__all__ = [
    "MessageService",
    "ConversationSync",
    "PreviewListSync",
    "ListOrder",
]

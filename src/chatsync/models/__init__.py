"""Shared Pydantic models for chatsync."""

from chatsync.models.conversation import ConversationPreview, Message, User
from chatsync.models.pagination import Cursor, CursorKind, Page

__all__ = [
    # Conversation data
    "User",
    "ConversationPreview",
    "Message",
    # Pagination
    "Cursor",
    "CursorKind",
    "Page",
]

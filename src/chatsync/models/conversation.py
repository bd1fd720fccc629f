"""Conversation, user and message models."""

from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """The other participant of a conversation."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique user ID")
    display_name: str = Field(..., description="Name shown in the list row and header")
    avatar_url: str = Field(..., description="Avatar image reference")


class ConversationPreview(BaseModel):
    """A conversation-list row."""

    id: str = Field(..., description="Conversation ID")
    user: User = Field(..., description="The other participant")
    last_message_text: str = Field(..., description="Snippet of the latest message")
    timestamp: datetime = Field(..., description="Time of the latest message")
    unread_count: int = Field(0, ge=0, description="Messages not yet read")


class Message(BaseModel):
    """A single message in a conversation."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique message ID")
    conversation_id: str = Field(..., description="Parent conversation ID")
    sender_id: str = Field(..., description="Author ID")
    text: str = Field(..., description="Message body")
    timestamp: datetime = Field(..., description="Send time")
    is_outgoing: bool = Field(..., description="Sent by the current user")

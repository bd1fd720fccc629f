"""Exceptions raised by the messaging simulator."""


class ChatSyncError(Exception):
    """Base class for chatsync errors."""


class CursorKindError(ChatSyncError, ValueError):
    """A cursor was handed to the wrong pagination mode."""

    def __init__(self, expected: str, actual: str):
        super().__init__(f"Expected a {expected} cursor, got a {actual} cursor")
        self.expected = expected
        self.actual = actual


class TransientNetworkError(ChatSyncError):
    """Simulated network failure for an outgoing message."""

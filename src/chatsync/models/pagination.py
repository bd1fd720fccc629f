"""Page and cursor models."""

from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from chatsync.errors import CursorKindError

T = TypeVar("T")


class CursorKind(str, Enum):
    """Pagination direction a cursor belongs to."""

    FORWARD = "forward"  # Offset of the next unread item
    BACKWARD = "backward"  # Exclusive upper bound of the remaining older items


class Cursor(BaseModel):
    """Opaque pagination position.

    Returned by the engine inside a Page and handed back unchanged to fetch
    the next page. The string form is the token a UI may log or key on.
    """

    model_config = ConfigDict(frozen=True)

    kind: CursorKind
    offset: int = Field(..., ge=0)

    @classmethod
    def forward(cls, offset: int) -> "Cursor":
        return cls(kind=CursorKind.FORWARD, offset=offset)

    @classmethod
    def backward(cls, offset: int) -> "Cursor":
        return cls(kind=CursorKind.BACKWARD, offset=offset)

    def expect(self, kind: CursorKind) -> int:
        """Return the offset, raising CursorKindError for the wrong direction."""
        if self.kind != kind:
            raise CursorKindError(kind.value, self.kind.value)
        return self.offset

    def __str__(self) -> str:
        return str(self.offset)


class Page(BaseModel, Generic[T]):
    """One window of a paginated dataset."""

    items: list[T] = Field(default_factory=list, description="Items in dataset order")
    has_more: bool = Field(False, description="More items are available")
    next_cursor: Cursor | None = Field(None, description="Cursor for the next page")

    @model_validator(mode="after")
    def _cursor_matches_has_more(self) -> "Page[T]":
        if self.has_more != (self.next_cursor is not None):
            raise ValueError("next_cursor must be set exactly when has_more is true")
        return self

"""Synthetic dataset generation for the conversation list and chat histories."""

import random
from datetime import datetime, timedelta, timezone

from chatsync.models import ConversationPreview, Message, User
from chatsync.services.ids import generate_id

CURRENT_USER_ID = "current-user"
OTHER_USER_ID = "other-user"

NAMES = [
    "Alice Johnson",
    "Bob Smith",
    "Charlie Brown",
    "Diana Prince",
    "Eve Williams",
    "Frank Miller",
    "Grace Lee",
    "Henry Davis",
    "Ivy Chen",
    "Jack Wilson",
    "Kate Turner",
    "Leo Martinez",
]

MESSAGE_SNIPPETS = [
    "Hey, how are you doing?",
    "Did you see the game last night?",
    "Can we meet tomorrow at 3pm?",
    "Thanks for the help earlier!",
    "Let me know when you are free",
    "That sounds great, count me in!",
    "I just finished the project",
    "Have you tried the new restaurant?",
    "Happy birthday! Hope you have a great day",
    "Quick question about the meeting",
    "Just wanted to check in",
    "See you at the office!",
]

CHAT_MESSAGES = [
    "Hello!",
    "Hey there!",
    "How are you doing today?",
    "I am doing great, thanks for asking!",
    "What are you up to this weekend?",
    "Not much, just relaxing. You?",
    "Same here. Maybe catch a movie?",
    "Sounds like a plan!",
    "Which movie were you thinking?",
    "How about that new action film?",
    "Perfect, I heard it is really good",
    "Great, let us plan for Saturday then",
    "Works for me!",
    "See you then!",
    "Can not wait!",
]

AVATAR_POOL_SIZE = 70


def avatar_url(index: int) -> str:
    return f"https://i.pravatar.cc/150?img={(index % AVATAR_POOL_SIZE) + 1}"


def _check_count(count: int) -> None:
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")


def _random_unread_count(rng: random.Random) -> int:
    # Roughly 30% of conversations carry unread messages
    if rng.random() > 0.7:
        return rng.randint(1, 5)
    return 0


def generate_message_previews(
    count: int,
    generation_id: str | None = None,
    rng: random.Random | None = None,
    now: datetime | None = None,
    step_minutes: int = 30,
) -> list[ConversationPreview]:
    """Generate conversation-list rows, newest first.

    Item i is step_minutes older than item i-1, starting at now.
    """
    _check_count(count)
    gen = generation_id or generate_id()
    rng = rng or random.Random()
    now = now or datetime.now(timezone.utc)
    step = timedelta(minutes=step_minutes)

    previews: list[ConversationPreview] = []
    for i in range(count):
        user = User(
            id=f"user-{gen}-{i}",
            display_name=NAMES[i % len(NAMES)],
            avatar_url=avatar_url(i),
        )
        previews.append(
            ConversationPreview(
                id=f"preview-{gen}-{i}",
                user=user,
                last_message_text=rng.choice(MESSAGE_SNIPPETS),
                timestamp=now - i * step,
                unread_count=_random_unread_count(rng),
            )
        )
    return previews


def generate_chat_messages(
    conversation_id: str,
    count: int,
    generation_id: str | None = None,
    now: datetime | None = None,
    step_minutes: int = 2,
) -> list[Message]:
    """Generate a conversation history, oldest first.

    The last message is stamped now and each earlier one step_minutes before
    it. Even indices are outgoing, odd indices come from the other user.
    """
    _check_count(count)
    gen = generation_id or generate_id()
    now = now or datetime.now(timezone.utc)
    step = timedelta(minutes=step_minutes)

    return [
        Message(
            id=f"msg-{gen}-{i}",
            conversation_id=conversation_id,
            sender_id=CURRENT_USER_ID if i % 2 == 0 else OTHER_USER_ID,
            text=CHAT_MESSAGES[i % len(CHAT_MESSAGES)],
            timestamp=now - (count - 1 - i) * step,
            is_outgoing=i % 2 == 0,
        )
        for i in range(count)
    ]

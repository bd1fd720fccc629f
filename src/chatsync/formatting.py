"""Display labels derived from conversation records."""

from datetime import datetime, timezone


def format_relative_time(timestamp: datetime, now: datetime | None = None) -> str:
    """Compact age label for a conversation-list row.

    "Now" under a minute, then minutes, hours and days ("5m", "3h", "2d"),
    and a calendar date once the timestamp is a week old.
    """
    now = now or datetime.now(timezone.utc)
    seconds = (now - timestamp).total_seconds()
    minutes = int(seconds // 60)
    hours = int(seconds // 3600)
    days = int(seconds // 86400)

    if minutes < 1:
        return "Now"
    if minutes < 60:
        return f"{minutes}m"
    if hours < 24:
        return f"{hours}h"
    if days < 7:
        return f"{days}d"
    return f"{timestamp:%b} {timestamp.day}"


def format_clock_time(timestamp: datetime) -> str:
    """Local time-of-day label for a chat bubble, e.g. "3:07 PM"."""
    timestamp = timestamp.astimezone()
    hour = timestamp.hour % 12 or 12
    suffix = "AM" if timestamp.hour < 12 else "PM"
    return f"{hour}:{timestamp.minute:02d} {suffix}"


def unread_badge(count: int) -> str | None:
    if count <= 0:
        return None
    return str(count)

"""Scripted session against the simulated backend.

Loads the conversation list, pages once, opens the first conversation,
reveals older history and sends a message, logging what a UI would render.
"""

import asyncio
import logging

from chatsync.config import Settings, settings
from chatsync.formatting import format_clock_time, format_relative_time, unread_badge
from chatsync.services.message_service import MessageService
from chatsync.sync import ConversationSync, PreviewListSync

logger = logging.getLogger(__name__)


async def main(config: Settings | None = None) -> dict[str, int]:
    """Run the session and return item counts per step."""
    service = MessageService(config or settings)
    previews = PreviewListSync(service)
    chat = ConversationSync(service)

    await previews.load(reset_cache=True)
    await previews.load_more()
    logger.info(f"Conversation list: {len(previews.items)} rows (has_more={previews.state.has_more})")
    for row in previews.items[:3]:
        badge = unread_badge(row.unread_count)
        logger.info(
            f"  {row.user.display_name} [{format_relative_time(row.timestamp)}]"
            f" {row.last_message_text}{f' ({badge})' if badge else ''}"
        )

    first = previews.items[0]
    previews.mark_read(first.id)
    await chat.open(first)
    opened = len(chat.items)
    await chat.load_older()
    logger.info(f"Conversation {first.id}: {opened} messages, {len(chat.items)} after loading older")

    chat.draft = "On my way!"
    sent = await chat.send()
    if sent:
        logger.info(f"Sent at {format_clock_time(sent.timestamp)}: {sent.text}")
    else:
        logger.warning(f"Send failed, draft kept: {chat.draft!r}")

    return {
        "previews": len(previews.items),
        "opened": opened,
        "history": len(chat.items),
    }


def run():
    """Run the demo session."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    asyncio.run(main())


if __name__ == "__main__":
    run()

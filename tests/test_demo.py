"""End-to-end run of the scripted demo session."""

import pytest

from chatsync.config import Settings
from chatsync.demo import main


@pytest.mark.asyncio
async def test_demo_session():
    """Test the demo walks the list, a conversation and a send."""
    result = await main(Settings(latency_scale=0, random_seed=7, send_failure_rate=0.0))

    assert result == {"previews": 40, "opened": 20, "history": 41}

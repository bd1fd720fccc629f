"""Simulated network round-trips.

Every data operation awaits a randomized delay so callers see the same
suspension points a real backend would introduce. Sends can additionally be
configured to fail at a given rate.
"""

import asyncio
import logging
import random
from typing import Literal

from chatsync.config import Settings
from chatsync.errors import TransientNetworkError

logger = logging.getLogger(__name__)

Operation = Literal["previews", "chat", "send"]


class LatencySimulator:
    """Injects randomized asynchronous delay per operation."""

    def __init__(self, settings: Settings, rng: random.Random | None = None):
        self.settings = settings
        self._rng = rng or random.Random(settings.random_seed)

    def window(self, operation: Operation) -> tuple[int, int]:
        """Return the (min, max) delay in milliseconds for an operation."""
        s = self.settings
        if operation == "previews":
            return s.preview_latency_min_ms, s.preview_latency_max_ms
        if operation == "chat":
            return s.chat_latency_min_ms, s.chat_latency_max_ms
        return s.send_latency_min_ms, s.send_latency_max_ms

    def delay_seconds(self, operation: Operation) -> float:
        low, high = self.window(operation)
        return self._rng.uniform(low, high) * self.settings.latency_scale / 1000

    async def simulate(self, operation: Operation) -> None:
        """Suspend for a simulated round-trip.

        With latency disabled this still yields to the event loop once, so
        concurrent callers interleave the way they would over a network.
        """
        if not self.settings.latency_enabled:
            await asyncio.sleep(0)
            return
        delay = self.delay_seconds(operation)
        logger.debug(f"[mock] {operation} round-trip {delay * 1000:.0f}ms")
        await asyncio.sleep(delay)

    def maybe_fail(self, operation: Operation, rate: float) -> None:
        """Raise TransientNetworkError with the given probability."""
        if rate > 0 and self._rng.random() < rate:
            logger.warning(f"[mock] Injected failure for {operation}")
            raise TransientNetworkError(f"Simulated network failure during {operation}")

"""Shared fixtures for chatsync tests."""

import pytest

from chatsync.config import Settings
from chatsync.services.message_service import MessageService


@pytest.fixture
def test_settings() -> Settings:
    """Zero-latency, seeded settings so tests are fast and repeatable."""
    return Settings(latency_scale=0, random_seed=1234, send_failure_rate=0.0, serialize_sends=False)


@pytest.fixture
def service(test_settings: Settings) -> MessageService:
    """A fresh simulator with its own cache store."""
    return MessageService(test_settings)

"""Tests for the simulated messaging backend."""

import pytest

from chatsync.config import Settings
from chatsync.errors import TransientNetworkError
from chatsync.models import ConversationPreview, Message, Page
from chatsync.services.cache_store import chat_key
from chatsync.services.latency import LatencySimulator
from chatsync.services.message_service import MessageService


class TestFetchMessagePreviews:
    """Test conversation-list fetching."""

    @pytest.mark.asyncio
    async def test_example_scenario(self, service: MessageService):
        """Test three pages of 20 previews then exhaustion."""
        first = await service.fetch_message_previews(20)
        second = await service.fetch_message_previews(20, first.next_cursor)
        third = await service.fetch_message_previews(20, second.next_cursor)

        assert [len(p.items) for p in (first, second, third)] == [20, 20, 20]
        assert [str(p.next_cursor) for p in (first, second)] == ["20", "40"]
        assert third.has_more is False
        assert third.next_cursor is None
        assert all(isinstance(p, ConversationPreview) for p in first.items)
        assert type(first) is Page[ConversationPreview]

    @pytest.mark.asyncio
    async def test_newest_conversation_first(self, service: MessageService):
        """Test list timestamps strictly decrease."""
        page = await service.fetch_message_previews(10)
        stamps = [p.timestamp for p in page.items]

        assert all(a > b for a, b in zip(stamps, stamps[1:]))

    @pytest.mark.asyncio
    async def test_same_key_serves_same_data(self, service: MessageService):
        """Test repeated calls draw from one backing sequence."""
        first = await service.fetch_message_previews(20)
        again = await service.fetch_message_previews(20)

        assert [p.id for p in first.items] == [p.id for p in again.items]

    @pytest.mark.asyncio
    async def test_count_is_part_of_key(self, service: MessageService):
        """Test different page sizes get separate lists."""
        await service.fetch_message_previews(10)
        await service.fetch_message_previews(20)

        assert sorted(service.store.keys()) == ["previews-10", "previews-20"]


class TestFetchChatMessages:
    """Test history fetching."""

    @pytest.mark.asyncio
    async def test_newest_page_oldest_first(self, service: MessageService):
        """Test the first page holds the newest messages in chronological order."""
        page = await service.fetch_chat_messages("conv-1", 20)
        entry = service.store.get(chat_key("conv-1"))

        assert len(entry) == 60
        assert page.items == entry.items[40:]
        assert all(a.timestamp < b.timestamp for a, b in zip(page.items, page.items[1:]))
        assert all(m.conversation_id == "conv-1" for m in page.items)
        assert type(page) is Page[Message]

    @pytest.mark.asyncio
    async def test_item_ids_stable_across_calls(self, service: MessageService):
        """Test a later walk sees the ids an earlier call returned."""
        first = await service.fetch_chat_messages("conv-1", 20)
        fresh = await service.fetch_chat_messages("conv-1", 20)
        older = await service.fetch_chat_messages("conv-1", 20, fresh.next_cursor)

        assert [m.id for m in first.items] == [m.id for m in fresh.items]
        assert {m.id for m in older.items}.isdisjoint({m.id for m in first.items})

    @pytest.mark.asyncio
    async def test_conversations_are_independent(self, service: MessageService):
        """Test each conversation gets its own history."""
        a = await service.fetch_chat_messages("conv-a", 5)
        b = await service.fetch_chat_messages("conv-b", 5)

        assert {m.id for m in a.items}.isdisjoint({m.id for m in b.items})


class TestSendMessage:
    """Test sending."""

    @pytest.mark.asyncio
    async def test_send_appends_to_loaded_history(self, service: MessageService):
        """Test a sent message becomes the newest cached message."""
        before = await service.fetch_chat_messages("conv-1", 20)

        message = await service.send_message("conv-1", "Hi!")
        after = await service.fetch_chat_messages("conv-1", 20)

        assert isinstance(message, Message)
        assert message.is_outgoing is True
        assert message.sender_id == "current-user"
        assert after.items[-1] == message
        assert message.timestamp >= before.items[-1].timestamp
        assert len(service.store.get(chat_key("conv-1"))) == 61

    @pytest.mark.asyncio
    async def test_send_to_unloaded_history_is_not_cached(self, service: MessageService):
        """Test sending never creates a phantom history."""
        message = await service.send_message("conv-new", "hello")

        assert message.text == "hello"
        assert chat_key("conv-new") not in service.store

    @pytest.mark.asyncio
    async def test_unique_ids(self, service: MessageService):
        """Test every send gets a fresh identifier."""
        await service.fetch_chat_messages("conv-1", 5)
        sent = [await service.send_message("conv-1", f"m{i}") for i in range(5)]

        assert len({m.id for m in sent}) == 5

    @pytest.mark.asyncio
    async def test_failure_injection(self, test_settings: Settings):
        """Test a forced failure raises and leaves the cache untouched."""
        failing = MessageService(test_settings.model_copy(update={"send_failure_rate": 1.0}))
        await failing.fetch_chat_messages("conv-1", 5)

        with pytest.raises(TransientNetworkError):
            await failing.send_message("conv-1", "lost")

        assert len(failing.store.get(chat_key("conv-1"))) == 15


class TestClearCache:
    """Test resetting the simulator."""

    @pytest.mark.asyncio
    async def test_clear_regenerates(self, service: MessageService):
        """Test data is regenerated after a clear."""
        before = await service.fetch_message_previews(20)
        service.clear_cache()

        assert len(service.store) == 0
        after = await service.fetch_message_previews(20)
        assert {p.id for p in before.items}.isdisjoint({p.id for p in after.items})

    def test_services_do_not_share_state(self, test_settings: Settings):
        """Test each service owns its own store."""
        assert MessageService(test_settings).store is not MessageService(test_settings).store


class TestLatencySimulator:
    """Test simulated round-trips."""

    def test_windows_per_operation(self):
        """Test each operation has its own delay window."""
        latency = LatencySimulator(Settings(random_seed=1))

        assert latency.window("previews") == (300, 500)
        assert latency.window("chat") == (200, 500)
        assert latency.window("send") == (100, 200)

    def test_delay_within_window(self):
        """Test delays are drawn from the window and scaled."""
        latency = LatencySimulator(Settings(random_seed=1, latency_scale=0.5))

        for _ in range(50):
            assert 0.05 <= latency.delay_seconds("send") <= 0.1

    @pytest.mark.asyncio
    async def test_disabled_latency_still_yields(self, test_settings: Settings):
        """Test zero scale returns promptly."""
        latency = LatencySimulator(test_settings)

        assert test_settings.latency_enabled is False
        await latency.simulate("chat")

    def test_maybe_fail(self):
        """Test failure rate bounds."""
        latency = LatencySimulator(Settings(random_seed=1))

        latency.maybe_fail("send", 0.0)
        with pytest.raises(TransientNetworkError):
            latency.maybe_fail("send", 1.0)

"""Tests for the event bus."""

from datetime import datetime, timedelta
from unittest.mock import Mock

import pytest

from auto_folder_link.events import EventBus, NoteCreated, NoteMoved, VaultEvent


@pytest.fixture
def event_bus():
    """Create fresh event bus for each test."""
    bus = EventBus()
    yield bus
    bus.clear()


class TestVaultEvent:

    def test_ids_are_unique(self):
        assert VaultEvent().event_id != VaultEvent().event_id

    def test_to_dict(self):
        event = NoteMoved(from_path="B.md", to_path="A/B.md", source_path="A.md")
        data = event.to_dict()
        assert data["event_type"] == "NoteMoved"
        assert data["data"] == {"from_path": "B.md", "to_path": "A/B.md", "source_path": "A.md"}


class TestPublish:

    @pytest.mark.asyncio
    async def test_sync_handler(self, event_bus):
        handler = Mock()
        event_bus.subscribe(NoteCreated, handler)
        event = NoteCreated(path="a.md")

        await event_bus.publish(event)

        handler.assert_called_once_with(event)

    @pytest.mark.asyncio
    async def test_async_handler(self, event_bus):
        received = []

        async def handler(event):
            received.append(event.path)

        event_bus.subscribe(NoteCreated, handler)
        await event_bus.publish(NoteCreated(path="a.md"))

        assert received == ["a.md"]

    @pytest.mark.asyncio
    async def test_parent_type_subscription(self, event_bus):
        received = []

        def handler(event):
            received.append(type(event).__name__)

        event_bus.subscribe(VaultEvent, handler)
        await event_bus.publish(NoteCreated(path="a.md"))

        assert received == ["NoteCreated"]

    @pytest.mark.asyncio
    async def test_failing_handler_does_not_stop_others(self, event_bus):
        received = []

        def broken(event):
            raise RuntimeError("boom")

        def working(event):
            received.append(event)

        event_bus.subscribe(NoteCreated, broken)
        event_bus.subscribe(NoteCreated, working)
        await event_bus.publish(NoteCreated(path="a.md"))

        assert len(received) == 1

    @pytest.mark.asyncio
    async def test_unsubscribe(self, event_bus):
        handler = Mock()
        event_bus.subscribe(NoteCreated, handler)
        event_bus.unsubscribe(NoteCreated, handler)

        await event_bus.publish(NoteCreated(path="a.md"))

        handler.assert_not_called()


class TestEventStore:

    @pytest.mark.asyncio
    async def test_get_events_by_type(self, event_bus):
        await event_bus.publish(NoteCreated(path="a.md"))
        await event_bus.publish(NoteMoved(from_path="a.md", to_path="x/a.md", source_path="x.md"))

        assert len(event_bus.get_events()) == 2
        assert len(event_bus.get_events(NoteMoved)) == 1

    @pytest.mark.asyncio
    async def test_get_events_since(self, event_bus):
        await event_bus.publish(NoteCreated(path="a.md"))
        assert event_bus.get_events(since=datetime.now() + timedelta(seconds=1)) == []

    @pytest.mark.asyncio
    async def test_store_is_bounded(self):
        bus = EventBus(max_events_in_memory=2)
        for i in range(3):
            await bus.publish(NoteCreated(path=f"{i}.md"))
        assert [e.path for e in bus.get_events()] == ["1.md", "2.md"]

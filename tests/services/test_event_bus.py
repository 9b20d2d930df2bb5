"""
Event bus: publishing, subscription, middleware, filtering, priority and
fault tolerance.
"""

import pytest

from models.events import DisconnectEvent, EventType, RotateEvent, SelectEvent, TouchEvent
from services.event_bus import EventBus
from services.middleware import log_middleware


class TestEventBus:

    @pytest.mark.asyncio
    async def test_basic_pub_sub(self, event_bus):
        received = []

        async def handler(event):
            received.append(event)

        event_bus.subscribe(EventType.DEVICE_ROTATE, handler)
        await event_bus.publish(RotateEvent("dial", 0.04, 0.2))

        assert len(received) == 1
        assert received[0].delta == 0.04
        assert received[0].rotation == 0.2

    @pytest.mark.asyncio
    async def test_sync_handlers_supported(self, event_bus):
        received = []
        event_bus.subscribe(EventType.DEVICE_TOUCH, lambda e: received.append(e.device_id))

        await event_bus.publish(TouchEvent("dial"))
        assert received == ["dial"]

    @pytest.mark.asyncio
    async def test_filtering(self, event_bus):
        left_events = []
        right_events = []

        async def left_handler(event):
            left_events.append(event)

        async def right_handler(event):
            right_events.append(event)

        event_bus.subscribe(EventType.DEVICE_SELECT, left_handler, filter_fn=lambda e: e.device_id == "left")
        event_bus.subscribe(EventType.DEVICE_SELECT, right_handler, filter_fn=lambda e: e.device_id == "right")

        await event_bus.publish(SelectEvent("left"))
        await event_bus.publish(SelectEvent("right"))
        await event_bus.publish(SelectEvent("left"))

        assert len(left_events) == 2
        assert len(right_events) == 1

    @pytest.mark.asyncio
    async def test_middleware_blocking(self, event_bus):
        received = []

        def block_right(event):
            if event.device_id == "right":
                return None
            return event

        event_bus.add_middleware(block_right)
        event_bus.subscribe(EventType.DEVICE_SELECT, received.append)

        await event_bus.publish(SelectEvent("left"))
        await event_bus.publish(SelectEvent("right"))

        assert [e.device_id for e in received] == ["left"]
        assert len(event_bus.get_event_history()) == 1

    @pytest.mark.asyncio
    async def test_log_middleware_passes_events_through(self, event_bus):
        received = []
        event_bus.add_middleware(log_middleware)
        event_bus.subscribe(EventType.DEVICE_ROTATE, received.append)
        event_bus.subscribe(EventType.DEVICE_DISCONNECT, received.append)

        await event_bus.publish(RotateEvent("dial", -0.02, 0.5))
        await event_bus.publish(DisconnectEvent("dial"))

        assert len(received) == 2

    @pytest.mark.asyncio
    async def test_priority(self, event_bus):
        execution_order = []

        async def low_priority_handler(event):
            execution_order.append("low")

        async def high_priority_handler(event):
            execution_order.append("high")

        async def medium_priority_handler(event):
            execution_order.append("medium")

        event_bus.subscribe(EventType.DEVICE_TOUCH, low_priority_handler, priority=0)
        event_bus.subscribe(EventType.DEVICE_TOUCH, high_priority_handler, priority=100)
        event_bus.subscribe(EventType.DEVICE_TOUCH, medium_priority_handler, priority=50)

        await event_bus.publish(TouchEvent("dial"))

        assert execution_order == ["high", "medium", "low"]

    @pytest.mark.asyncio
    async def test_failing_handler_does_not_stop_others(self, event_bus):
        received = []

        async def broken(event):
            raise RuntimeError("boom")

        event_bus.subscribe(EventType.DEVICE_SELECT, broken, priority=10)
        event_bus.subscribe(EventType.DEVICE_SELECT, received.append)

        await event_bus.publish(SelectEvent("dial"))
        assert len(received) == 1

    @pytest.mark.asyncio
    async def test_unsubscribe(self, event_bus):
        received = []

        async def handler(event):
            received.append(event)

        event_bus.subscribe(EventType.DEVICE_SELECT, handler)
        assert event_bus.unsubscribe(EventType.DEVICE_SELECT, handler) is True
        assert event_bus.unsubscribe(EventType.DEVICE_SELECT, handler) is False

        await event_bus.publish(SelectEvent("dial"))
        assert received == []

    @pytest.mark.asyncio
    async def test_handler_may_unsubscribe_itself_while_running(self, event_bus):
        calls = []

        def once(event):
            calls.append("once")
            event_bus.unsubscribe(EventType.DEVICE_DISCONNECT, once)

        event_bus.subscribe(EventType.DEVICE_DISCONNECT, once, priority=5)
        event_bus.subscribe(EventType.DEVICE_DISCONNECT, lambda e: calls.append("always"))

        await event_bus.publish(DisconnectEvent("dial"))
        await event_bus.publish(DisconnectEvent("dial"))

        assert calls == ["once", "always", "always"]

    @pytest.mark.asyncio
    async def test_history_is_bounded(self):
        bus = EventBus()
        for _ in range(150):
            await bus.publish(TouchEvent("dial"))

        assert len(bus.get_event_history(limit=500)) == 100
        bus.clear_history()
        assert bus.get_event_history() == []

    def test_event_payload_excludes_metadata(self):
        event = RotateEvent("dial", 0.1, 0.3)
        assert event.to_data() == {"device_id": "dial", "delta": 0.1, "rotation": 0.3}

"""
Event bus: subscription, filtering, middleware, priority and fault tolerance
"""

import pytest

from models.enums import AnimationKind
from models.events import (
    EventSource,
    EventType,
    KeyboardKeyPressEvent,
    KeyboardSource,
    LayerAnimationChangedEvent,
    SurfaceSwitchedEvent,
)
from services.event_bus import EventBus
from services.middleware import log_middleware


@pytest.fixture
def bus():
    return EventBus(history_limit=5)


class TestEventBus:

    @pytest.mark.asyncio
    async def test_basic_pub_sub(self, bus):
        received = []

        async def handler(event):
            received.append(event)

        bus.subscribe(EventType.SURFACE_SWITCHED, handler)
        await bus.publish(SurfaceSwitchedEvent(0, 1, "fade"))

        assert len(received) == 1
        assert received[0].to_index == 1
        assert received[0].source is EventSource.TRANSITION_ENGINE

    @pytest.mark.asyncio
    async def test_sync_handlers_supported(self, bus):
        received = []
        bus.subscribe(EventType.KEYBOARD_KEYPRESS, received.append)

        await bus.publish(KeyboardKeyPressEvent("SPACE"))

        assert [e.key for e in received] == ["SPACE"]

    @pytest.mark.asyncio
    async def test_filtering(self, bus):
        stdin_keys, api_keys = [], []

        bus.subscribe(
            EventType.KEYBOARD_KEYPRESS,
            stdin_keys.append,
            filter_fn=lambda e: e.keyboard == KeyboardSource.STDIN,
        )
        bus.subscribe(
            EventType.KEYBOARD_KEYPRESS,
            api_keys.append,
            filter_fn=lambda e: e.keyboard == KeyboardSource.API,
        )

        await bus.publish(KeyboardKeyPressEvent("A"))
        await bus.publish(KeyboardKeyPressEvent("B", keyboard=KeyboardSource.API))
        await bus.publish(KeyboardKeyPressEvent("C"))

        assert [e.key for e in stdin_keys] == ["A", "C"]
        assert [e.key for e in api_keys] == ["B"]

    @pytest.mark.asyncio
    async def test_middleware_blocks(self, bus):
        received = []

        def block_ctrl(event):
            if "CTRL" in event.modifiers:
                return None
            return event

        bus.add_middleware(block_ctrl)
        bus.subscribe(EventType.KEYBOARD_KEYPRESS, received.append)

        await bus.publish(KeyboardKeyPressEvent("C", ["CTRL"]))
        await bus.publish(KeyboardKeyPressEvent("C"))

        assert len(received) == 1
        assert received[0].modifiers == []
        assert len(bus.get_event_history()) == 1

    @pytest.mark.asyncio
    async def test_log_middleware_passes_through(self, bus):
        received = []
        bus.add_middleware(log_middleware)
        bus.subscribe(EventType.LAYER_ANIMATION_CHANGED, received.append)

        event = LayerAnimationChangedEvent(1, AnimationKind.RANDOM_MOVE, {"speed": 1.0})
        await bus.publish(event)

        assert received == [event]

    @pytest.mark.asyncio
    async def test_priority(self, bus):
        order = []

        async def low(event):
            order.append("low")

        async def high(event):
            order.append("high")

        async def medium(event):
            order.append("medium")

        bus.subscribe(EventType.SURFACE_SWITCHED, low, priority=0)
        bus.subscribe(EventType.SURFACE_SWITCHED, high, priority=100)
        bus.subscribe(EventType.SURFACE_SWITCHED, medium, priority=50)

        await bus.publish(SurfaceSwitchedEvent(0, 1, "glitch"))

        assert order == ["high", "medium", "low"]

    @pytest.mark.asyncio
    async def test_failing_handler_does_not_stop_others(self, bus):
        received = []

        async def broken(event):
            raise RuntimeError("handler crashed")

        bus.subscribe(EventType.SURFACE_SWITCHED, broken, priority=10)
        bus.subscribe(EventType.SURFACE_SWITCHED, received.append)

        await bus.publish(SurfaceSwitchedEvent(2, 3, "slide"))

        assert len(received) == 1

    @pytest.mark.asyncio
    async def test_unsubscribe(self, bus):
        received = []
        bus.subscribe(EventType.SURFACE_SWITCHED, received.append)

        assert bus.unsubscribe(EventType.SURFACE_SWITCHED, received.append)
        assert not bus.unsubscribe(EventType.SURFACE_SWITCHED, received.append)

        await bus.publish(SurfaceSwitchedEvent(0, 1, "fade"))
        assert received == []

    @pytest.mark.asyncio
    async def test_history_is_bounded(self, bus):
        for i in range(8):
            await bus.publish(SurfaceSwitchedEvent(i, i + 1, "fade"))

        history = bus.get_event_history(limit=10)
        assert [e.from_index for e in history] == [3, 4, 5, 6, 7]

        bus.clear_history()
        assert bus.get_event_history() == []

    def test_event_payload(self):
        event = SurfaceSwitchedEvent(0, 2, "fade")
        assert event.to_data() == {"from_index": 0, "to_index": 2, "transition": "fade"}

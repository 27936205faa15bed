"""
Keyboard input: stdin key decoding and key → action dispatch
"""

import pytest

from controllers.keyboard_controller import DEFAULT_KEY_MAP, KeyboardController, normalize_key
from inputs.keyboard.adapters.stdin import StdinKeyboardAdapter
from managers.config_manager import ConfigManager
from models.enums import EffectKind
from models.events import EventType, KeyboardKeyPressEvent, KeyboardSource
from models.schedule import IntervalBounds
from services.service_container import ServiceContainer


@pytest.fixture
def keys(event_bus):
    pressed = []
    event_bus.subscribe(EventType.KEYBOARD_KEYPRESS, lambda e: pressed.append((e.key, e.modifiers)))
    return pressed


@pytest.fixture
def adapter(event_bus):
    return StdinKeyboardAdapter(event_bus)


@pytest.fixture
def services(performance, event_bus, surfaces, clock):
    async def cut(outgoing, incoming, ctx):
        outgoing.hide()
        incoming.show()

    performance.register_transition("cut", cut)
    performance.set_default_transition("cut")
    return ServiceContainer(
        performance=performance,
        event_bus=event_bus,
        surfaces=surfaces,
        clock=clock,
        config_manager=ConfigManager(),
    )


@pytest.fixture
def controller(services):
    return KeyboardController(services)


async def press(event_bus, controller, key, modifiers=None):
    await event_bus.publish(KeyboardKeyPressEvent(key, modifiers))
    await controller.wait_idle()


class TestStdinDecoding:

    @pytest.mark.asyncio
    async def test_plain_keys(self, adapter, keys):
        await adapter.feed("1q \r\t\x7f")

        assert keys == [
            ("1", []),
            ("Q", []),
            ("SPACE", []),
            ("ENTER", []),
            ("TAB", []),
            ("BACKSPACE", []),
        ]

    @pytest.mark.asyncio
    async def test_arrows(self, adapter, keys):
        await adapter.feed("\x1b[A\x1b[B\x1b[C\x1b[D")
        assert [k for k, _ in keys] == ["UP", "DOWN", "RIGHT", "LEFT"]

    @pytest.mark.asyncio
    async def test_modifiers(self, adapter, keys):
        await adapter.feed("\x03Q")
        assert keys == [("C", ["CTRL"]), ("Q", ["SHIFT"])]

    @pytest.mark.asyncio
    async def test_partial_escape_sequence_stays_buffered(self, adapter, keys):
        await adapter.feed("\x1b")
        await adapter.feed("[")
        assert keys == []

        await adapter.feed("A")
        assert keys == [("UP", [])]

    @pytest.mark.asyncio
    async def test_escape_followed_by_key(self, adapter, keys):
        await adapter.feed("\x1bx")
        assert keys == [("ESCAPE", []), ("X", [])]

    @pytest.mark.asyncio
    async def test_events_tagged_with_source(self, adapter, event_bus):
        await adapter.feed("m")
        assert event_bus.get_event_history(1)[0].keyboard is KeyboardSource.STDIN


class TestKeyMap:

    @pytest.mark.parametrize("raw, expected", [
        (" ", "SPACE"), ("ArrowUp", "UP"), ("return", "ENTER"), ("esc", "ESCAPE"), ("q", "Q"),
    ])
    def test_normalize(self, raw, expected):
        assert normalize_key(raw) == expected

    def test_defaults(self):
        assert DEFAULT_KEY_MAP["ENTER"].action == "next_surface"
        assert DEFAULT_KEY_MAP["X"].action == "blackout"
        assert DEFAULT_KEY_MAP["C"].action == "whiteout"
        assert DEFAULT_KEY_MAP["H"].action == "toggle_help"
        assert [DEFAULT_KEY_MAP[k].param for k in "1234"] == [0, 1, 2, 3]


class TestKeyboardController:

    @pytest.mark.asyncio
    async def test_number_keys_switch(self, controller, event_bus, performance):
        await press(event_bus, controller, "3")
        assert performance.current_index == 2

    @pytest.mark.asyncio
    async def test_space_and_enter(self, controller, event_bus, performance):
        await press(event_bus, controller, "ENTER")
        assert performance.current_index == 1

        await press(event_bus, controller, "SPACE")
        assert performance.current_index != 1

    @pytest.mark.asyncio
    async def test_effect_keys(self, controller, event_bus, performance):
        await press(event_bus, controller, "X")
        assert performance.effects.state.kind is EffectKind.BLACKOUT

        await press(event_bus, controller, "q")
        assert performance.effects.state.kind is EffectKind.GLITCH

    @pytest.mark.asyncio
    async def test_toggle_text_and_mode(self, controller, event_bus, performance):
        await press(event_bus, controller, "A")
        assert performance.layer_visibility()[0] is True

        await press(event_bus, controller, "M")
        assert performance.auto_advance.enabled

    @pytest.mark.asyncio
    async def test_interval_keys(self, controller, event_bus, performance):
        await press(event_bus, controller, "UP")
        assert performance.auto_advance.bounds == IntervalBounds(1600, 8000)

        await press(event_bus, controller, "DOWN")
        assert performance.auto_advance.bounds == IntervalBounds(1920, 9600)

    @pytest.mark.asyncio
    async def test_ctrl_combinations_ignored(self, controller, event_bus, performance):
        assert controller.handle_key(KeyboardKeyPressEvent("2", ["CTRL"])) is None
        await press(event_bus, controller, "2", ["CTRL"])
        assert performance.current_index == 0

    @pytest.mark.asyncio
    async def test_disabled_controller(self, controller, event_bus, performance):
        controller.disable()
        await press(event_bus, controller, "2")
        assert performance.current_index == 0

        controller.enable()
        await press(event_bus, controller, "2")
        assert performance.current_index == 1

    @pytest.mark.asyncio
    async def test_rejected_action_is_logged_not_raised(self, controller, event_bus, performance):
        performance.surface_configs[3].active = False

        await press(event_bus, controller, "4")

        assert performance.current_index == 0

    @pytest.mark.asyncio
    async def test_help_toggle(self, controller, event_bus):
        await press(event_bus, controller, "H")
        assert controller.help_visible
        assert any("Blackout" in line for line in controller.help_lines())

    @pytest.mark.asyncio
    async def test_custom_mappings(self, services):
        controller = KeyboardController(services, custom_mappings={
            "N": "next_surface",
            "F": {"action": "flash_effect", "description": "Strobe"},
            "Z": "self_destruct",
        })

        assert controller.key_map["N"].action == "next_surface"
        assert controller.key_map["F"].description == "Strobe"
        assert "Z" not in controller.key_map
        assert controller.key_map["SPACE"].action == "random_switch"

    @pytest.mark.asyncio
    async def test_register_unknown_action(self, controller):
        with pytest.raises(ValueError):
            controller.register_key("P", "self_destruct")

    @pytest.mark.asyncio
    async def test_keys_for_action(self, controller):
        assert controller.keys_for_action("toggle_text") == ["A", "S", "D"]
        controller.reset_to_default()
        assert controller.keys_for_action("blackout") == ["X"]

import random

import pytest

from engine.effect_scheduler import EffectScheduler
from models.effect import COLOR_SHIFT_PALETTE
from models.enums import EffectKind
from models.errors import UnknownKindError


@pytest.fixture
def overlay(surfaces):
    return surfaces.add("effect-overlay")


@pytest.fixture
def effects(overlay, clock):
    return EffectScheduler(overlay, clock, rng=random.Random(6))


class TestEffectScheduler:

    def test_starts_neutral(self, effects, overlay):
        assert effects.is_neutral()
        assert overlay.visible
        assert overlay.get_style("className") == "effect-overlay"
        assert overlay.get_style("backgroundColor") is None

    @pytest.mark.asyncio
    async def test_overlay_applied_immediately(self, effects, overlay):
        effects.trigger(EffectKind.FLASH)

        assert effects.state.kind is EffectKind.FLASH
        assert overlay.get_style("className") == "effect-overlay flash-effect"
        effects.cancel_all()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("kind, expected_ms", [
        (EffectKind.FLASH, 200),
        (EffectKind.GLITCH, 500),
        (EffectKind.COLOR_SHIFT, 300),
        (EffectKind.BLACKOUT, 1000),
        (EffectKind.WHITEOUT, 1000),
    ])
    async def test_default_durations(self, effects, clock, kind, expected_ms):
        effects.trigger(kind)

        await clock.advance(expected_ms - 1)
        assert effects.state.kind is kind

        await clock.advance(1)
        assert effects.is_neutral()

    @pytest.mark.asyncio
    async def test_blackout_then_flash_scenario(self, effects, clock, overlay):
        blackout_done = effects.trigger(EffectKind.BLACKOUT, 500)
        assert overlay.get_style("backgroundColor") == "#000000"

        await clock.advance(100)
        effects.trigger(EffectKind.FLASH, 200)

        await clock.advance(50)            # t = 150
        assert effects.state.kind is EffectKind.FLASH
        assert overlay.get_style("backgroundColor") is None

        await clock.advance(200)           # t = 350
        assert effects.is_neutral()
        assert not blackout_done.done()

        await clock.advance(200)           # t = 550, blackout revert is a no-op
        assert effects.is_neutral()
        assert blackout_done.done()

    @pytest.mark.asyncio
    async def test_completion_awaitable(self, effects, clock):
        done = effects.whiteout(800)

        await clock.advance(799)
        assert not done.done()

        await clock.advance(1)
        await done
        assert effects.is_neutral()

    def test_revert_is_idempotent(self, effects):
        assert effects.revert(12345) is False
        assert effects.is_neutral()

    @pytest.mark.asyncio
    async def test_stale_revert_does_not_touch_newer_pulse(self, effects):
        effects.glitch()
        first = effects.active_pulse.token
        effects.color_shift()

        assert effects.revert(first) is False
        assert effects.state.kind is EffectKind.COLOR_SHIFT
        effects.cancel_all()

    @pytest.mark.asyncio
    async def test_color_shift_uses_palette(self, effects, overlay):
        effects.color_shift()
        assert overlay.get_style("backgroundColor") in COLOR_SHIFT_PALETTE
        effects.cancel_all()

    @pytest.mark.asyncio
    async def test_accepts_wire_names(self, effects):
        effects.trigger("colorShift")
        assert effects.state.kind is EffectKind.COLOR_SHIFT
        effects.cancel_all()

    @pytest.mark.asyncio
    async def test_unknown_kind(self, effects):
        with pytest.raises(UnknownKindError):
            effects.trigger("strobe")
        assert effects.is_neutral()

    @pytest.mark.asyncio
    async def test_cancel_all_forces_neutral(self, effects, clock):
        done = effects.blackout()
        await clock.settle()

        effects.cancel_all()
        await clock.settle()

        assert effects.is_neutral()
        assert done.done()
        assert clock.pending == 0

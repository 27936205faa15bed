"""
Motion primitives and recipes: finiteness, opacity range, determinism
"""

import math
import random

import pytest

from animations import ANIMATIONS, create_motion, resolve_kind
from animations import motion
from animations.travel import RandomMoveMotion
from models.enums import AnimationKind
from models.errors import UnknownKindError
from models.frame import FrameAnchor
from models.layer import TWO_PI, LayerParams, LayerState, Phase

SPEEDS = [0.1, 1.0, 2.5, 10.0]


def make_state(seed: int = 7, speed: float = 1.0, content: str = "HELLO") -> LayerState:
    return LayerState(
        id=0,
        phase=Phase.sample(random.Random(seed)),
        params=LayerParams(speed=speed),
        content=content,
    )


class TestPrimitives:

    def test_phase_components_in_range(self):
        rng = random.Random(3)
        for _ in range(200):
            phase = Phase.sample(rng)
            for value in (phase.x, phase.y, phase.rotation, phase.scale):
                assert 0.0 <= value < TWO_PI

    def test_displacement_matches_three_wave_sum(self):
        phase = Phase(0.3, 1.1, 0.0, 0.0)
        t, a = 2.0, 80.0
        x, y = motion.displacement(t, phase, a)

        expected_x = math.sin(t + 0.3) * a + math.sin(2.3 * t + 1.1) * 0.4 * a + math.cos(0.5 * t) * 0.3 * a
        expected_y = math.cos(0.7 * t + 1.1) * a + math.cos(1.8 * t + 0.3) * 0.4 * a + math.sin(0.3 * t) * 0.3 * a
        assert x == pytest.approx(expected_x)
        assert y == pytest.approx(expected_y)

    def test_opacity_always_in_unit_range(self):
        phase = Phase.sample(random.Random(1))
        for i in range(2000):
            assert 0.0 <= motion.opacity(i * 0.37, phase) <= 1.0

    def test_scale_and_rotation_bounded(self):
        phase = Phase.sample(random.Random(2))
        for i in range(500):
            t = i * 0.11
            assert 0.7 - 1e-9 <= motion.scale(t, phase, 0.3) <= 1.3 + 1e-9
            assert abs(motion.rotation(t, phase, 15)) <= 15 + 1e-9

    def test_wrap(self):
        assert motion.wrap(250, 100) == pytest.approx(50)
        assert motion.wrap(10, 0) == 0.0

    def test_font_px(self):
        assert motion.font_px("64px") == 64.0
        assert motion.font_px("huge") == 48.0


class TestRecipes:

    def test_every_kind_registered(self):
        assert set(ANIMATIONS) == set(AnimationKind)

    @pytest.mark.parametrize("kind", list(AnimationKind), ids=lambda k: k.value)
    def test_frames_finite_for_all_speeds(self, kind):
        for speed in SPEEDS:
            state = make_state(speed=speed)
            recipe = create_motion(kind, state, random.Random(99))
            for _ in range(400):
                frame = recipe.step()
                assert frame.is_finite()
                if frame.opacity is not None:
                    assert 0.0 <= frame.opacity <= 1.0

    @pytest.mark.parametrize("kind", list(AnimationKind), ids=lambda k: k.value)
    def test_same_seed_same_frames(self, kind):
        first = create_motion(kind, make_state(seed=5), random.Random(11))
        second = create_motion(kind, make_state(seed=5), random.Random(11))
        for _ in range(100):
            assert first.step() == second.step()

    def test_speed_scales_clock_increment(self):
        slow = create_motion(AnimationKind.WAVE, make_state(speed=1.0), random.Random(0))
        fast = create_motion(AnimationKind.WAVE, make_state(speed=4.0), random.Random(0))
        for _ in range(10):
            slow.step()
            fast.step()
        assert fast.state.clock == pytest.approx(slow.state.clock * 4)
        assert slow.state.ticks == fast.state.ticks == 10

    def test_wire_names_resolve(self):
        assert resolve_kind("randomMove") is AnimationKind.RANDOM_MOVE
        assert resolve_kind("3dRotate") is AnimationKind.ROTATE_3D
        assert resolve_kind("SPIRAL") is AnimationKind.SPIRAL

    def test_unknown_kind_raises(self):
        with pytest.raises(UnknownKindError) as exc_info:
            create_motion("moonwalk", make_state(), random.Random(0))
        assert "scroll" in exc_info.value.details["available"]

    @pytest.mark.parametrize("kind", [AnimationKind.RAINBOW, AnimationKind.CHAOS, AnimationKind.NEON], ids=lambda k: k.value)
    def test_hue_cycles_within_circle(self, kind):
        recipe = create_motion(kind, make_state(speed=1.3), random.Random(4))
        hues = [recipe.step().hue for _ in range(300)]
        assert all(0.0 <= h < 360.0 for h in hues)
        assert len(set(round(h, 3) for h in hues)) > 100

    def test_neon_glow_hue_follows_speed(self):
        slow = create_motion(AnimationKind.NEON, make_state(speed=1.0), random.Random(0))
        fast = create_motion(AnimationKind.NEON, make_state(speed=2.0), random.Random(0))
        for _ in range(10):
            slow_frame = slow.step()
            fast_frame = fast.step()

        assert slow_frame.hue == pytest.approx(20.0)
        assert fast_frame.hue == pytest.approx(40.0)
        assert slow_frame.glow_color == motion.hsl(slow_frame.hue)
        assert slow_frame.color is None


class TestRandomMove:

    def test_blend_toward_target(self):
        recipe = create_motion(AnimationKind.RANDOM_MOVE, make_state(speed=2.0), random.Random(4))
        assert isinstance(recipe, RandomMoveMotion)
        recipe.step()

        # Far from the target so no retarget happens on this tick
        recipe.current_x, recipe.current_y = 0.0, 0.0
        recipe.target_x, recipe.target_y = 1000.0, 500.0
        recipe.steer()

        assert recipe.current_x == pytest.approx(1000.0 * 0.05 * 2.0)
        assert recipe.current_y == pytest.approx(500.0 * 0.05 * 2.0)

    def test_retargets_when_close(self):
        recipe = create_motion(AnimationKind.RANDOM_MOVE, make_state(), random.Random(4))
        recipe.step()
        recipe.current_x, recipe.current_y = 400.0, 300.0
        recipe.target_x, recipe.target_y = 410.0, 305.0

        recipe.steer()

        assert (recipe.target_x, recipe.target_y) != (410.0, 305.0)
        assert RandomMoveMotion.MARGIN <= recipe.target_x <= recipe.viewport.width - RandomMoveMotion.MARGIN

    def test_absolute_anchor(self):
        recipe = create_motion(AnimationKind.RANDOM_MOVE, make_state(), random.Random(4))
        assert recipe.step().anchor is FrameAnchor.ABSOLUTE

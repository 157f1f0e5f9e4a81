"""Tests for mode mapping, jitter and parameter smoothing."""

import random

import pytest

import config
from motion import (AnimationContext, AnimationMode, AnimationParameters,
                    Smoother, TargetParameters, advance, jitter,
                    mode_from_flags, target_for)


class TestModeMapping:

    def test_priority(self):
        assert mode_from_flags(True, True) == AnimationMode.SPEAKING
        assert mode_from_flags(True, False) == AnimationMode.SPEAKING
        assert mode_from_flags(False, True) == AnimationMode.LISTENING
        assert mode_from_flags(False, False) == AnimationMode.IDLE

    def test_targets_in_bands(self):
        speaking = target_for(AnimationMode.SPEAKING)
        listening = target_for(AnimationMode.LISTENING)
        idle = target_for(AnimationMode.IDLE)
        assert 0.95 <= speaking.intensity <= 1.0
        assert 1.05 <= speaking.scale <= 1.1
        assert 0.85 <= listening.intensity <= 0.9
        assert 0.9 <= listening.scale <= 0.95
        assert 0.6 <= idle.intensity <= 0.7
        assert 0.85 <= idle.scale <= 0.9

    def test_accepts_string_mode(self):
        assert target_for("idle") == target_for(AnimationMode.IDLE)

    def test_jitter_stays_in_band(self):
        rng = random.Random(7)
        lo, hi = config.JITTER_BAND
        values = [jitter(rng) for _ in range(500)]
        assert all(lo <= v <= hi for v in values)
        assert len(set(values)) > 1

    def test_jitter_reproducible_with_seed(self):
        assert jitter(random.Random(3)) == jitter(random.Random(3))


class TestSmoother:

    def test_rejects_bad_rates(self):
        with pytest.raises(ValueError):
            Smoother(intensity_rate=0.0)
        with pytest.raises(ValueError):
            Smoother(scale_rate=1.5)

    def test_single_step(self):
        params = AnimationParameters(intensity=0.9, scale=0.95)
        Smoother().step(params, TargetParameters(0.65, 0.88))
        assert params.intensity == pytest.approx(0.9 + (0.65 - 0.9) * 0.03)
        assert params.scale == pytest.approx(0.95 + (0.88 - 0.95) * 0.04)

    def test_converges_monotonically_without_overshoot(self):
        params = AnimationParameters(intensity=0.9, scale=0.95)
        target = TargetParameters(0.65, 0.88)
        smoother = Smoother()
        prev_i, prev_s = params.intensity, params.scale
        for _ in range(400):
            smoother.step(params, target)
            assert target.intensity <= params.intensity <= prev_i
            assert target.scale <= params.scale <= prev_s
            prev_i, prev_s = params.intensity, params.scale
        assert params.intensity == pytest.approx(0.65, rel=0.01)
        assert params.scale == pytest.approx(0.88, rel=0.01)

    def test_upward_convergence(self):
        params = AnimationParameters(intensity=0.65, scale=0.88)
        target = TargetParameters(0.98, 1.08)
        smoother = Smoother()
        for _ in range(400):
            smoother.step(params, target)
            assert params.intensity <= target.intensity
        assert params.intensity == pytest.approx(0.98, rel=0.01)

    def test_drift_is_clamped(self):
        params = AnimationParameters(intensity=0.9, scale=0.95)
        target = TargetParameters(5.0, 5.0)
        smoother = Smoother(intensity_rate=1.0, scale_rate=1.0)
        smoother.step(params, target)
        assert params.intensity == config.INTENSITY_BAND[1]
        assert params.scale == config.SCALE_BAND[1]


class TestAnimationContext:

    def test_initial_seed(self):
        ctx = AnimationContext()
        assert ctx.params.intensity == 0.9
        assert ctx.params.scale == 0.95
        assert ctx.time == 0.0

    def test_apply_mode_touches_target_only(self):
        ctx = AnimationContext()
        ctx.apply_mode(AnimationMode.SPEAKING)
        assert ctx.mode == AnimationMode.SPEAKING
        assert ctx.target == target_for(AnimationMode.SPEAKING)
        assert ctx.params.intensity == 0.9
        assert ctx.params.scale == 0.95

    def test_advance_moves_time_forward(self):
        ctx = AnimationContext()
        smoother = Smoother()
        times = []
        for dt in (0.016, 0.0, -1.0, 0.033):
            advance(ctx, smoother, dt)
            times.append(ctx.time)
        assert all(b > a for a, b in zip(times, times[1:]))
        assert times[0] == pytest.approx(0.016)

    def test_clamped_views(self):
        ctx = AnimationContext()
        ctx.params.intensity = 3.0
        ctx.params.scale = 0.1
        assert ctx.intensity == config.INTENSITY_BAND[1]
        assert ctx.scale == config.SCALE_BAND[0]

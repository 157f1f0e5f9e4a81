"""Mode → target mapping and exponential parameter smoothing.

The animation state lives in an explicit AnimationContext owned by one Orb.
Mode changes and the speaking jitter only ever write ``ctx.target``; the
current values in ``ctx.params`` move once per frame in advance().
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum

import config


class AnimationMode(str, Enum):
    """Conversational state of the voice agent."""

    IDLE = "idle"
    LISTENING = "listening"
    SPEAKING = "speaking"


def mode_from_flags(is_speaking: bool, is_listening: bool) -> AnimationMode:
    """Speaking wins over listening, listening over idle."""
    if is_speaking:
        return AnimationMode.SPEAKING
    if is_listening:
        return AnimationMode.LISTENING
    return AnimationMode.IDLE


@dataclass
class TargetParameters:
    intensity: float
    scale: float


@dataclass
class AnimationParameters:
    intensity: float = config.INITIAL_INTENSITY
    scale: float = config.INITIAL_SCALE
    elapsed: float = 0.0


_TARGETS = {
    AnimationMode.SPEAKING: config.TARGET_SPEAKING,
    AnimationMode.LISTENING: config.TARGET_LISTENING,
    AnimationMode.IDLE: config.TARGET_IDLE,
}


def target_for(mode: AnimationMode) -> TargetParameters:
    intensity, scale = _TARGETS[AnimationMode(mode)]
    return TargetParameters(intensity=intensity, scale=scale)


def jitter(rng: random.Random) -> float:
    """A fresh speaking intensity target inside config.JITTER_BAND."""
    lo, hi = config.JITTER_BAND
    return lo + rng.random() * (hi - lo)


def clamp(value: float, band: tuple) -> float:
    lo, hi = band
    return max(lo, min(hi, value))


@dataclass
class AnimationContext:
    """Everything that persists between frames for one orb."""

    mode: AnimationMode = AnimationMode.LISTENING
    params: AnimationParameters = field(default_factory=AnimationParameters)
    target: TargetParameters = field(
        default_factory=lambda: TargetParameters(config.INITIAL_INTENSITY,
                                                 config.INITIAL_SCALE))

    def apply_mode(self, mode: AnimationMode) -> None:
        self.mode = AnimationMode(mode)
        self.target = target_for(self.mode)

    @property
    def intensity(self) -> float:
        """Current intensity, clamped to the safe drawing band."""
        return clamp(self.params.intensity, config.INTENSITY_BAND)

    @property
    def scale(self) -> float:
        return clamp(self.params.scale, config.SCALE_BAND)

    @property
    def time(self) -> float:
        return self.params.elapsed


class Smoother:
    """Per-parameter exponential approach: current += (target - current) * k.

    With 0 < k <= 1 every step shrinks the error by the factor (1 - k), so a
    held target is approached monotonically and never overshot.
    """

    def __init__(self, intensity_rate: float = config.INTENSITY_RATE,
                 scale_rate: float = config.SCALE_RATE):
        for name, k in (("intensity_rate", intensity_rate),
                        ("scale_rate", scale_rate)):
            if not 0.0 < k <= 1.0:
                raise ValueError(f"{name} must be in (0, 1], got {k!r}")
        self.intensity_rate = intensity_rate
        self.scale_rate = scale_rate

    def step(self, params: AnimationParameters,
             target: TargetParameters) -> None:
        params.intensity += (target.intensity - params.intensity) * self.intensity_rate
        params.scale += (target.scale - params.scale) * self.scale_rate
        # keep compounding jitter from drifting out of the safe band
        params.intensity = clamp(params.intensity, config.INTENSITY_BAND)
        params.scale = clamp(params.scale, config.SCALE_BAND)


def advance(ctx: AnimationContext, smoother: Smoother,
            dt: float = config.TIME_STEP) -> None:
    """One frame of motion: move time forward and smooth toward target."""
    if not dt > 0:
        dt = config.TIME_STEP
    ctx.params.elapsed += dt
    smoother.step(ctx.params, ctx.target)

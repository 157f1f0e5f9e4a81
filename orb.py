"""The animated orb: state mapping, smoothing, painting and frame loop.

Lifecycle::

    UNINITIALIZED --start()--> RUNNING --stop()--> STOPPED

``start()`` binds the drawing surface and schedules the first frame; every
frame advances the motion by one step, paints, hands the image to
``on_frame`` and schedules the next one.  ``set_state()`` only rewrites the
targets, so what is drawn always eases toward a new mode.  ``stop()`` is
terminal and idempotent; a frame callback that fires after it does nothing.
"""

import random

import compositor
import config
from logger import log
from motion import AnimationContext, AnimationMode, Smoother, advance, jitter, mode_from_flags
from scheduler import FrameScheduler, Ticker
from shapes import make_shape
from surface import Surface


def _check_palette(palette) -> tuple:
    colors = tuple(tuple(int(v) for v in c) for c in palette)
    if not colors:
        raise ValueError("palette must contain at least one colour")
    for c in colors:
        if len(c) != 3 or not all(0 <= v <= 255 for v in c):
            raise ValueError(f"palette entries must be RGB triples, got {c!r}")
    return colors


class Orb:
    UNINITIALIZED = "uninitialized"
    RUNNING       = "running"
    STOPPED       = "stopped"

    def __init__(self, host, size: float = config.ORB_SIZE, dpr: float = 1.0,
                 style: str = config.SHAPE_STYLE, palette=None,
                 is_speaking: bool = False, is_listening: bool = True,
                 rng: random.Random = None, smoother: Smoother = None,
                 on_frame=None):
        self.palette  = _check_palette(config.PALETTE if palette is None else palette)
        self.shape    = make_shape(style, self.palette)
        self.ctx      = AnimationContext()
        self.surface  = None
        self.on_frame = on_frame
        self.state    = self.UNINITIALIZED
        self.frames_drawn = 0

        self._size     = size
        self._dpr      = dpr
        self._rng      = rng or random.Random()
        self._smoother = smoother or Smoother()
        self._frames   = FrameScheduler(host, self._on_frame)
        self._jitter   = Ticker(host, self._on_jitter)

        self.ctx.apply_mode(mode_from_flags(is_speaking, is_listening))

    # ── public API ────────────────────────────────────────────────────────

    @property
    def mode(self) -> AnimationMode:
        return self.ctx.mode

    @property
    def running(self) -> bool:
        return self.state == self.RUNNING

    def set_state(self, is_speaking: bool, is_listening: bool):
        self.set_mode(mode_from_flags(is_speaking, is_listening))

    def set_mode(self, mode):
        if self.state == self.STOPPED:
            return
        mode = AnimationMode(mode)
        if mode != self.ctx.mode:
            log.debug("Orb mode %s -> %s", self.ctx.mode.value, mode.value)
        self.ctx.apply_mode(mode)
        if mode == AnimationMode.SPEAKING:
            if self.state == self.RUNNING:
                self._jitter.start()
        else:
            self._jitter.stop()

    def set_style(self, style: str):
        if self.state == self.STOPPED:
            return
        self.shape = make_shape(style, self.palette)

    def resize(self, size: float, dpr: float = None):
        if self.state == self.STOPPED:
            return
        self._size = size
        if dpr is not None:
            self._dpr = dpr
        if self.surface is not None:
            self.surface.resize(size, size, self._dpr)

    def start(self):
        if self.state != self.UNINITIALIZED:
            return
        self.surface = Surface(self._size, self._size, self._dpr)
        self.state = self.RUNNING
        log.info("Orb started (%s, %sx%s @%sx).", self.shape.name,
                 self._size, self._size, self._dpr)
        self._frames.start()
        if self.ctx.mode == AnimationMode.SPEAKING:
            self._jitter.start()

    def stop(self):
        if self.state == self.STOPPED:
            return
        self.state = self.STOPPED
        self._frames.stop()
        self._jitter.stop()
        if self.surface is not None:
            self.surface.release()
            self.surface = None
        log.info("Orb stopped after %d frames.", self.frames_drawn)

    def step(self, dt: float = config.TIME_STEP) -> bool:
        """Advance one frame and paint it.  Returns True if pixels changed."""
        if self.state == self.STOPPED:
            return False
        advance(self.ctx, self._smoother, dt)
        painted = compositor.paint_frame(self.surface, self.ctx, self.shape,
                                         self.palette)
        if painted:
            self.frames_drawn += 1
        return painted

    # ── callbacks ─────────────────────────────────────────────────────────

    def _on_frame(self):
        if self.state != self.RUNNING:
            return
        if self.surface is None or self.surface.released:
            log.debug("No surface, frame skipped.")
            return
        if self.step() and self.on_frame is not None:
            self.on_frame(self.surface.image)

    def _on_jitter(self):
        if self.state != self.RUNNING or self.ctx.mode != AnimationMode.SPEAKING:
            self._jitter.stop()
            return
        self.ctx.target.intensity = jitter(self._rng)

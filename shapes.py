"""Shape generators: per-layer outlines for the current frame.

Two interchangeable styles share one interface, ``outlines(ctx, geo)``:

  - BlobShape:  concentric rings deformed by multi-octave noise, filled
  - WaveShape:  sine strokes across the width, faded out at both edges

Both are pure functions of the animation context and the frame geometry.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

import config
import noise
from motion import AnimationContext

TAU = 2 * math.pi


@dataclass(frozen=True)
class LayerConfig:
    color: tuple
    opacity: float
    radius: float = 1.0        # blob: fraction of the base radius
    frequency: float = 1.0     # wave: periods across the width
    speed: float = 1.0         # wave: phase advance per second
    phase: float = 0.0
    amplitude: float = 1.0     # wave: fraction of the max amplitude
    accent: tuple = None       # gradient end colour (next palette entry)


@dataclass
class Geometry:
    width: float
    height: float
    cx: float
    cy: float
    base_radius: float


@dataclass
class Outline:
    points: np.ndarray         # (N, 2) logical coordinates
    closed: bool
    index: int
    layer: LayerConfig
    radius: float = 0.0        # blob ring radius before deformation


def frame_geometry(width: float, height: float,
                   ctx: AnimationContext) -> Geometry:
    """Center and breathing base radius for the current frame."""
    t = ctx.time
    breathe = 1 + math.sin(t * 0.8) * 0.02 * (1 + ctx.intensity)
    base = min(width, height) * 0.26 * ctx.scale * breathe
    return Geometry(width=width, height=height, cx=width / 2, cy=height / 2,
                    base_radius=max(0.0, base))


# ── layer palettes ────────────────────────────────────────────────────────

def blob_layers(palette=config.PALETTE,
                count: int = config.BLOB_LAYERS) -> tuple:
    layers = []
    for l in range(count):
        frac = l / count
        layers.append(LayerConfig(
            color=tuple(palette[l % len(palette)]),
            accent=tuple(palette[(l + 1) % len(palette)]),
            opacity=0.15 + frac * 0.12,
            radius=0.6 + frac * 0.45,
            phase=float(l),
        ))
    return tuple(layers)


# amplitude, frequency, speed, phase, opacity
_WAVE_TABLE = (
    (1.00, 1.4, 2.2, 0.0, 0.95),
    (0.80, 2.0, 3.1, 2.6, 0.70),
    (0.55, 1.6, 2.4, 1.3, 0.50),
    (0.35, 1.2, 1.8, 4.0, 0.35),
)


def wave_layers(palette=config.PALETTE,
                count: int = config.WAVE_COUNT) -> tuple:
    layers = []
    for i in range(count):
        amp, freq, speed, phase, opacity = _WAVE_TABLE[i % len(_WAVE_TABLE)]
        layers.append(LayerConfig(
            color=tuple(palette[i % len(palette)]),
            accent=tuple(palette[(i + 1) % len(palette)]),
            opacity=opacity,
            frequency=freq,
            speed=speed,
            phase=phase + (i // len(_WAVE_TABLE)) * 0.7,
            amplitude=amp,
        ))
    return tuple(layers)


# ── blob ──────────────────────────────────────────────────────────────────

def blob_radii(layer: int, base_radius: float, t: float, intensity: float,
               layers: int = config.BLOB_LAYERS,
               segments: int = config.BLOB_SEGMENTS):
    """Angles, deformed radii and undeformed radius r_l of one blob ring.

    Each radius lies within r_l * (1 ± max_deformation(intensity)),
    r_l = base_radius * (0.6 + 0.45 * layer / layers).
    """
    ring = base_radius * (0.6 + 0.45 * layer / layers)
    angles = np.arange(segments, dtype=float) * (TAU / segments)
    deform = noise.blob_noise(angles, t, layer) * noise.DEFORM_AMOUNT * intensity
    return angles, ring * (1 + deform), ring


class BlobShape:
    name = "blob"
    closed = True

    def __init__(self, palette=config.PALETTE, layers: int = config.BLOB_LAYERS,
                 segments: int = config.BLOB_SEGMENTS):
        if layers <= 0 or segments < 3:
            raise ValueError("blob needs at least one layer and three segments")
        self.layers = blob_layers(palette, layers)
        self.segments = segments

    def outlines(self, ctx: AnimationContext, geo: Geometry) -> list:
        out = []
        count = len(self.layers)
        for l, layer in enumerate(self.layers):
            angles, radii, ring = blob_radii(l, geo.base_radius, ctx.time,
                                             ctx.intensity, count, self.segments)
            pts = np.column_stack((geo.cx + np.cos(angles) * radii,
                                   geo.cy + np.sin(angles) * radii))
            out.append(Outline(points=pts, closed=True, index=l,
                               layer=layer, radius=ring))
        return out


# ── wave ──────────────────────────────────────────────────────────────────

def wave_points(layer: LayerConfig, width: float, height: float,
                t: float, intensity: float, scale: float) -> np.ndarray:
    """Sampled (x, y) of one attenuated sine across the full width."""
    if width <= 0 or height <= 0:
        return np.empty((0, 2))
    xs = np.arange(0, math.floor(width) + 1, dtype=float)
    max_amp = height * 0.35 * scale * intensity * layer.amplitude
    phase = xs / width * TAU * layer.frequency + t * layer.speed + layer.phase
    ys = height / 2 + np.sin(phase) * max_amp * noise.attenuate(xs, width)
    return np.column_stack((xs, ys))


class WaveShape:
    name = "wave"
    closed = False

    def __init__(self, palette=config.PALETTE, waves: int = config.WAVE_COUNT):
        if waves <= 0:
            raise ValueError("wave style needs at least one wave")
        # back-to-front: quietest wave first
        self.layers = tuple(sorted(wave_layers(palette, waves),
                                   key=lambda c: c.amplitude))

    def outlines(self, ctx: AnimationContext, geo: Geometry) -> list:
        return [
            Outline(points=wave_points(layer, geo.width, geo.height, ctx.time,
                                       ctx.intensity, ctx.scale),
                    closed=False, index=i, layer=layer)
            for i, layer in enumerate(self.layers)
        ]


STYLES = {
    BlobShape.name: BlobShape,
    WaveShape.name: WaveShape,
}


def make_shape(style: str, palette=config.PALETTE):
    try:
        cls = STYLES[style]
    except KeyError:
        raise ValueError(f"unknown shape style {style!r} "
                         f"(expected one of {', '.join(STYLES)})") from None
    return cls(palette)

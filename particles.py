"""Orbiting particle field drawn on top of the orb."""

import math
from collections import namedtuple

import config
from motion import AnimationMode

Particle = namedtuple("Particle", "x y size alpha color")


def particle_count(mode) -> int:
    if mode == AnimationMode.IDLE:
        return config.PARTICLES_IDLE
    return config.PARTICLES_ACTIVE


def compute_particles(t: float, intensity: float, base_radius: float,
                      cx: float, cy: float, count: int,
                      palette=config.PALETTE) -> list:
    """Recompute every particle from (index, time, intensity)."""
    if count <= 0:
        return []
    out = []
    for i in range(count):
        angle = (i / count) * 2 * math.pi + t * 0.2
        dist = base_radius * (1.1 + math.sin(t * 0.5 + i * 1.7) * 0.3 * intensity)
        size = max(0.0, 1.5 + math.sin(t + i) * intensity)
        alpha = (0.3 + math.sin(t * 0.8 + i * 2.3) * 0.3) * intensity
        out.append(Particle(
            x=cx + math.cos(angle) * dist,
            y=cy + math.sin(angle) * dist,
            size=size,
            alpha=max(0.0, min(1.0, alpha)),
            color=tuple(palette[i % len(palette)]),
        ))
    return out

"""Per-frame painting of the orb onto a Surface.

Fixed paint order, back to front:

  1. background glow  (large, faint radial gradient)
  2. shape layers     (gradient-filled blobs or stroked waves, each blurred
                       a little more than the one below)
  3. bright core
  4. specular highlight
  5. particle field   (always on top)

Gradients follow canvas semantics (focal point + end circle, colour stops
interpolated premultiplied) and are evaluated with numpy.  Every pass is
rendered only over the physical rectangle it can touch (its bounding box
plus the blur margin) and merged into the frame in place with
Image.alpha_composite(dest=...).
"""

from __future__ import annotations

import math

import numpy as np
from PIL import Image, ImageDraw, ImageFilter

import config
from motion import AnimationContext
from particles import compute_particles, particle_count
from shapes import Outline, frame_geometry
from surface import Surface

_TRANSPARENT = (0, 0, 0, 0.0)

# Gaussian tails past two sigma are below one alpha step
_BLUR_REACH = 2.0


# ── gradients ─────────────────────────────────────────────────────────────

def gradient_t(xs, ys, focal: tuple, center: tuple, radius: float):
    """Gradient position in [0, 1] for every (xs, ys) point.

    Solves for the largest t with |p - (f + t(c - f))| = t * radius, i.e.
    the circle of the canvas two-circle gradient that passes through p.
    """
    fx, fy = focal
    cx, cy = center
    dx, dy = cx - fx, cy - fy
    qx, qy = xs - fx, ys - fy
    # focal point stays inside the end circle, so a < 0
    a = min(dx * dx + dy * dy - radius * radius, -1e-9)
    b = qx * dx + qy * dy
    c = qx * qx + qy * qy
    disc = np.maximum(b * b - a * c, 0.0)
    t = (b - np.sqrt(disc)) / a
    return np.clip(t, 0.0, 1.0)


def gradient_rgba(t, stops) -> np.ndarray:
    """Map positions *t* to uint8 RGBA through (offset, (r, g, b, a)) stops."""
    offsets = [s[0] for s in stops]
    alpha = np.interp(t, offsets, [s[1][3] for s in stops])
    out = np.zeros(np.shape(t) + (4,), dtype=np.uint8)
    safe = np.where(alpha > 0, alpha, 1.0)
    for ch in range(3):
        premul = np.interp(t, offsets, [s[1][ch] * s[1][3] for s in stops])
        out[..., ch] = np.clip(premul / safe, 0, 255).astype(np.uint8)
    out[..., 3] = np.clip(alpha * 255, 0, 255).astype(np.uint8)
    return out


def radial_gradient(surface: Surface, focal: tuple, center: tuple,
                    radius: float, stops, mask: Image.Image = None,
                    box: tuple = None) -> Image.Image:
    """Render a gradient over *box* (default: the whole surface).

    With *mask* (same size as the box) only covered pixels are evaluated
    and their alpha is scaled by the coverage.
    """
    if box is None:
        box = (0, 0) + surface.image.size
    size = (box[2] - box[0], box[3] - box[1])
    if radius <= 0:
        return Image.new("RGBA", size, (0, 0, 0, 0))
    xs, ys = surface.grid(box)
    if mask is None:
        rgba = gradient_rgba(gradient_t(xs, ys, focal, center, radius), stops)
    else:
        coverage = np.asarray(mask, dtype=np.float32) / 255.0
        inside = coverage > 0
        rgba = np.zeros(coverage.shape + (4,), dtype=np.uint8)
        rgba[inside] = gradient_rgba(
            gradient_t(xs[inside], ys[inside], focal, center, radius), stops)
        rgba[..., 3] = (rgba[..., 3] * coverage).astype(np.uint8)
    return Image.fromarray(rgba)


def _rgba(color: tuple, alpha: float) -> tuple:
    return (color[0], color[1], color[2], max(0.0, min(1.0, alpha)))


def _mix(c1: tuple, c2: tuple) -> tuple:
    return tuple((a + b) // 2 for a, b in zip(c1, c2))


def _merge(surface: Surface, layer: Image.Image, blur: float = 0.0,
           box: tuple = None):
    if blur > 0:
        layer = layer.filter(ImageFilter.GaussianBlur(radius=blur * surface.scale))
    dest = box[:2] if box else (0, 0)
    surface.image.alpha_composite(layer, dest=dest)


def _paint_disc(surface: Surface, focal: tuple, center: tuple,
                radius: float, stops):
    """Gradient that is fully transparent outside its end circle."""
    if radius <= 0:
        return
    cx, cy = center
    box = surface.box(cx - radius, cy - radius, cx + radius, cy + radius, pad=1)
    if box is None:
        return
    _merge(surface, radial_gradient(surface, focal, center, radius, stops,
                                    box=box), box=box)


# ── passes ────────────────────────────────────────────────────────────────

def paint_glow(surface: Surface, geo, intensity: float, palette):
    base = palette[0]
    stops = [
        (0.0, _rgba(base, 0.08 * intensity)),
        (0.5, _rgba(base, 0.03 * intensity)),
        (1.0, _TRANSPARENT),
    ]
    center = (geo.cx, geo.cy)
    _paint_disc(surface, center, center, geo.base_radius * 2, stops)


def _layer_stops(outline: Outline, next_color: tuple, alpha: float):
    color = outline.layer.color
    return [
        (0.0, _rgba(color, alpha)),
        (0.5, _rgba(_mix(color, next_color), alpha * 0.7)),
        (1.0, _rgba(next_color, alpha * 0.3)),
    ]


def _outline_box(surface: Surface, outline: Outline, pad: float):
    pts = np.asarray(outline.points, dtype=float).reshape(-1, 2)
    (x0, y0), (x1, y1) = pts.min(axis=0), pts.max(axis=0)
    return surface.box(x0, y0, x1, y1, pad=pad)


def _outline_mask(surface: Surface, outline: Outline, stroke: float,
                  box: tuple) -> Image.Image:
    left, top, right, bottom = box
    mask = Image.new("L", (right - left, bottom - top), 0)
    draw = ImageDraw.Draw(mask)
    pts = [(x - left, y - top) for x, y in surface.to_px(outline.points)]
    if outline.closed:
        draw.polygon(pts, fill=255)
    else:
        w = max(1, int(round(stroke * surface.scale)))
        draw.line(pts, fill=255, width=w, joint="curve")
        # round caps
        r = w / 2
        for x, y in (pts[0], pts[-1]):
            draw.ellipse([x - r, y - r, x + r, y + r], fill=255)
    return mask


def paint_layers(surface: Surface, geo, ctx: AnimationContext,
                 outlines: list):
    t = ctx.time
    intensity = ctx.intensity
    for outline in outlines:
        if len(outline.points) < 2:
            continue
        l = outline.index
        layer = outline.layer
        next_color = layer.accent or layer.color
        alpha = layer.opacity * (0.6 + intensity * 0.4)

        # breathing: the focal point drifts with time and layer index
        drift = geo.base_radius * 0.2
        focal = (geo.cx + math.sin(t * 0.3 + layer.phase) * drift,
                 geo.cy + math.cos(t * 0.4 + layer.phase) * drift)

        if outline.closed:
            radius = outline.radius * 1.4
            stroke = 0.0
            blur = 2 + l * 2
        else:
            radius = max(geo.width, geo.height) * 0.6
            stroke = (1.5 + 2.5 * layer.amplitude) * ctx.scale
            blur = 1 + l * 0.5

        box = _outline_box(surface, outline,
                           stroke / 2 + blur * _BLUR_REACH + 1)
        if box is None:
            continue
        mask = _outline_mask(surface, outline, stroke, box)
        grad = radial_gradient(surface, focal, (geo.cx, geo.cy), radius,
                               _layer_stops(outline, next_color, alpha),
                               mask, box)
        _merge(surface, grad, blur, box)


def paint_core(surface: Surface, geo, intensity: float):
    center = (geo.cx, geo.cy)
    stops = [
        (0.0, (255, 255, 255, 0.3 * intensity)),
        (0.3, (220, 210, 255, 0.15 * intensity)),
        (1.0, _TRANSPARENT),
    ]
    _paint_disc(surface, center, center, geo.base_radius * 0.5, stops)


def paint_specular(surface: Surface, geo, intensity: float):
    highlight = (geo.cx - geo.base_radius * 0.2, geo.cy - geo.base_radius * 0.25)
    stops = [
        (0.0, (255, 255, 255, 0.15 * intensity)),
        (1.0, _TRANSPARENT),
    ]
    _paint_disc(surface, highlight, highlight, geo.base_radius * 0.35, stops)


def paint_particles(surface: Surface, particles: list):
    dots = [p for p in particles if p.size > 0 and int(255 * p.alpha) > 0]
    if not dots:
        return
    box = surface.box(min(p.x - p.size for p in dots),
                      min(p.y - p.size for p in dots),
                      max(p.x + p.size for p in dots),
                      max(p.y + p.size for p in dots), pad=1)
    if box is None:
        return
    left, top, right, bottom = box
    overlay = Image.new("RGBA", (right - left, bottom - top), (0, 0, 0, 0))
    draw = ImageDraw.Draw(overlay)
    k = surface.scale
    for p in dots:
        x, y, r = p.x * k - left, p.y * k - top, p.size * k
        draw.ellipse([x - r, y - r, x + r, y + r],
                     fill=p.color + (int(255 * p.alpha),))
    _merge(surface, overlay, box=box)


# ── frame ─────────────────────────────────────────────────────────────────

def paint_frame(surface: Surface, ctx: AnimationContext, shape,
                palette=config.PALETTE) -> bool:
    """Paint one frame.  Returns False when nothing could be drawn."""
    if surface is None or surface.released:
        return False
    surface.clear()
    if not surface.valid:
        return False

    palette = tuple(tuple(c) for c in palette)
    geo = frame_geometry(surface.width, surface.height, ctx)
    intensity = ctx.intensity

    with surface.scaled():
        paint_glow(surface, geo, intensity, palette)
        paint_layers(surface, geo, ctx, shape.outlines(ctx, geo))
        paint_core(surface, geo, intensity)
        paint_specular(surface, geo, intensity)
        paint_particles(surface, compute_particles(
            ctx.time, intensity, geo.base_radius, geo.cx, geo.cy,
            particle_count(ctx.mode), palette))
    return True

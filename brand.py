"""Headless orb renders: stills, tray icons and animated GIF export.

Provides offscreen rendering used by:
- tray_icon.py  (system tray icon per mode)
- export_gif()  (preview animation written to disk)
"""

import os

from PIL import Image, ImageChops, ImageDraw

import compositor
import config
from logger import log
from motion import AnimationContext, AnimationMode, Smoother, advance
from shapes import make_shape
from surface import Surface

# ── Tray icon backgrounds per mode ────────────────────────────────────────
_ICON_BG = {
    AnimationMode.IDLE:      (15, 15, 20),
    AnimationMode.LISTENING: (22, 16, 36),
    AnimationMode.SPEAKING:  (36, 14, 40),
}


def _settled_context(mode, frames: int) -> AnimationContext:
    """Context after *frames* steps in *mode*, so the still is not mid-ease."""
    ctx = AnimationContext()
    ctx.apply_mode(mode)
    smoother = Smoother()
    for _ in range(max(1, frames)):
        advance(ctx, smoother)
    return ctx


def render_still(
    size: int = 64,
    mode=AnimationMode.LISTENING,
    style: str = config.SHAPE_STYLE,
    palette=config.PALETTE,
    warmup: int = 90,
    supersample: int = 4,
) -> Image.Image:
    """Render one frame of the orb as a PIL RGBA image.

    Args:
        size:        Output image size (square).
        mode:        AnimationMode the orb has settled into.
        style:       "blob" or "wave".
        palette:     RGB triples cycled by layer.
        warmup:      Motion steps taken before painting.
        supersample: Internal pixel ratio; the result is downscaled.

    Returns:
        PIL Image in RGBA mode.
    """
    ctx = _settled_context(mode, warmup)
    surface = Surface(size, size, dpr=supersample)
    compositor.paint_frame(surface, ctx, make_shape(style, palette), palette)
    return surface.image.resize((size, size), Image.LANCZOS)


def make_tray_icon(mode=AnimationMode.IDLE,
                   style: str = config.SHAPE_STYLE) -> Image.Image:
    """64x64 tray icon: the orb on a dark circle tinted by mode."""
    mode = AnimationMode(mode)
    size = 64
    pad = 2
    disc = Image.new("L", (size, size), 0)
    ImageDraw.Draw(disc).ellipse([pad, pad, size - pad, size - pad], fill=255)

    img = Image.new("RGBA", (size, size), _ICON_BG[mode] + (255,))
    img.putalpha(disc)
    orb = render_still(size=size, mode=mode, style=style, warmup=60)
    # the glow must not spill past the disc
    orb.putalpha(ImageChops.multiply(orb.getchannel("A"), disc))
    return Image.alpha_composite(img, orb)


def export_gif(
    path: str,
    mode=AnimationMode.SPEAKING,
    style: str = config.SHAPE_STYLE,
    size: int = 160,
    seconds: float = 2.0,
    fps: int = 25,
    background: tuple = (12, 12, 15),
    palette=config.PALETTE,
) -> str:
    """Write a looping GIF of the orb and return its path.

    Every GIF frame advances the animation clock by 1/fps seconds, split
    into whole motion steps so the easing matches the live widget.
    """
    if fps <= 0 or seconds <= 0:
        raise ValueError("fps and seconds must be positive")
    ctx = _settled_context(mode, 1)
    smoother = Smoother()
    shape = make_shape(style, palette)
    surface = Surface(size, size)
    steps = max(1, round((1.0 / fps) / config.TIME_STEP))
    dt = (1.0 / fps) / steps

    frames = []
    for _ in range(max(1, int(seconds * fps))):
        for _ in range(steps):
            advance(ctx, smoother, dt)
        compositor.paint_frame(surface, ctx, shape, palette)
        bg = Image.new("RGBA", surface.image.size, background + (255,))
        frames.append(Image.alpha_composite(bg, surface.image).convert("RGB"))

    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
    frames[0].save(
        path,
        format="GIF",
        save_all=True,
        append_images=frames[1:],
        duration=int(1000 / fps),
        loop=0,
    )
    log.info("Exported %d frames to %s", len(frames), path)
    return path

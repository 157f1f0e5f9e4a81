"""Floating orb window.

 - Borderless, always-on-top, circular (chromakey outside the disc)
 - Dark glass backdrop with a thin ring tinted by mode
 - The Orb paints into a PIL surface; each frame is pushed to a Tk canvas
 - Smooth fade-in / fade-out; the orb is stopped while hidden
 - Optional caption line for short messages
"""

import tkinter as tk

from PIL import Image, ImageDraw, ImageTk

import config
from logger import log
from motion import AnimationMode, mode_from_flags
from orb import Orb

# ── visual constants ──────────────────────────────────────────────────────
_CHROMAKEY = "#000001"
_BG        = "#0c0c0f"

# ring colour opacity per mode
_RING_ALPHA = {
    AnimationMode.IDLE:      0.05,
    AnimationMode.LISTENING: 0.10,
    AnimationMode.SPEAKING:  0.16,
}

# ── fade constants ────────────────────────────────────────────────────────
_ALPHA_MAX     = 0.95
_ALPHA_MIN     = 0.0
_FADE_STEPS    = 14
_FADE_INTERVAL = 18


def _hex_to_rgb(c: str) -> tuple:
    c = c.lstrip("#")
    return (int(c[0:2], 16), int(c[2:4], 16), int(c[4:6], 16))


def _render_backdrop(size: int, fill_rgb: tuple, ring_rgb: tuple,
                     ring_a: float) -> Image.Image:
    """Dark disc with a faint ring, rendered at 4x then downscaled."""
    scale = 4
    s = size * scale
    img = Image.new("RGBA", (s, s), (0, 0, 0, 0))
    draw = ImageDraw.Draw(img)
    draw.ellipse([0, 0, s - 1, s - 1],
                 fill=ring_rgb + (max(1, int(255 * ring_a)),))
    bw = max(scale, int(scale * 1.2))
    draw.ellipse([bw, bw, s - 1 - bw, s - 1 - bw], fill=fill_rgb + (255,))
    return img.resize((size, size), Image.LANCZOS)


def _disc_mask(size: int) -> Image.Image:
    """Hard-edged mask: pixels outside it become chromakey."""
    mask = Image.new("L", (size, size), 0)
    ImageDraw.Draw(mask).ellipse([1, 1, size - 2, size - 2], fill=255)
    return mask


class OrbWidget:
    def __init__(self, root: tk.Tk, size: int = config.ORB_SIZE,
                 style: str = config.SHAPE_STYLE):
        self._root       = root
        self._win        = None
        self._canvas     = None
        self._img_id     = None
        self._text_id    = None
        self._frame_tk   = None
        self._after_fade = None
        self._after_msg  = None
        self._alpha      = _ALPHA_MIN
        self._fading     = None
        self._orb        = None
        self._size       = size
        self._style      = style
        self._mode       = AnimationMode.IDLE
        self._dpr        = 1.0
        self._backdrops  = {}
        self._mask       = None

    # ── public API (thread-safe: everything hops onto the Tk loop) ────────

    def show(self):
        self._root.after(0, self._show)

    def hide(self):
        self._root.after(0, self._start_fade_out)

    def set_mode(self, mode):
        mode = AnimationMode(mode)
        self._root.after(0, lambda: self._apply_mode(mode))

    def set_state(self, is_speaking: bool, is_listening: bool):
        self.set_mode(mode_from_flags(is_speaking, is_listening))

    def set_style(self, style: str):
        self._root.after(0, lambda: self._apply_style(style))

    def resize(self, size: int):
        self._root.after(0, lambda: self._apply_size(size))

    def show_message(self, text: str, duration_ms: int = 2500):
        self._root.after(0, lambda: self._show_msg(text, duration_ms))

    @property
    def mode(self) -> AnimationMode:
        return self._mode

    # ── fade transitions ──────────────────────────────────────────────────

    def _set_alpha(self, alpha: float):
        self._alpha = max(_ALPHA_MIN, min(_ALPHA_MAX, alpha))
        if self._win:
            try:
                self._win.wm_attributes("-alpha", self._alpha)
            except tk.TclError:
                pass

    def _start_fade_in(self):
        self._fading = "in"
        self._cancel_fade()
        self._fade_step()

    def _start_fade_out(self):
        if self._win is None or self._alpha <= _ALPHA_MIN:
            self._do_hide()
            return
        self._fading = "out"
        self._cancel_fade()
        self._fade_step()

    def _fade_step(self):
        step = _ALPHA_MAX / _FADE_STEPS
        if self._fading == "in":
            new_alpha = self._alpha + step
            if new_alpha >= _ALPHA_MAX:
                self._set_alpha(_ALPHA_MAX)
                self._fading = None
                return
            self._set_alpha(new_alpha)
        elif self._fading == "out":
            new_alpha = self._alpha - step
            if new_alpha <= _ALPHA_MIN:
                self._set_alpha(_ALPHA_MIN)
                self._fading = None
                self._do_hide()
                return
            self._set_alpha(new_alpha)
        else:
            return
        self._after_fade = self._root.after(_FADE_INTERVAL, self._fade_step)

    def _cancel_fade(self):
        if self._after_fade is not None:
            try:
                self._root.after_cancel(self._after_fade)
            except tk.TclError:
                pass
            self._after_fade = None

    # ── show / hide internals ─────────────────────────────────────────────

    def _window_alive(self) -> bool:
        if self._win is None:
            return False
        try:
            return bool(self._win.winfo_exists())
        except tk.TclError:
            return False

    def _show(self):
        if not self._window_alive():
            self._build()
        if self._fading == "out":
            self._cancel_fade()
        self._win.deiconify()

        if self._orb is None:
            self._orb = Orb(
                self._canvas, size=self._size, dpr=self._dpr,
                style=self._style,
                is_speaking=self._mode == AnimationMode.SPEAKING,
                is_listening=self._mode == AnimationMode.LISTENING,
                on_frame=self._present,
            )
            self._orb.start()

        if self._alpha < _ALPHA_MAX:
            self._start_fade_in()

    def _do_hide(self):
        if self._orb is not None:
            self._orb.stop()
            self._orb = None
        if self._after_msg is not None:
            try:
                self._root.after_cancel(self._after_msg)
            except tk.TclError:
                pass
            self._after_msg = None
        if self._win is not None:
            try:
                self._win.withdraw()
            except tk.TclError:
                pass

    def _apply_mode(self, mode: AnimationMode):
        self._mode = mode
        if self._orb is not None:
            self._orb.set_mode(mode)

    def _apply_style(self, style: str):
        self._style = style
        if self._orb is not None:
            self._orb.set_style(style)

    def _apply_size(self, size: int):
        self._size = size
        self._backdrops.clear()
        self._mask = None
        if self._window_alive():
            self._place_window()
        if self._orb is not None:
            self._orb.resize(size, self._dpr)

    def _show_msg(self, text: str, duration_ms: int):
        if self._canvas is None or self._text_id is None:
            return
        self._canvas.itemconfig(self._text_id, text=text, state="normal")
        self._canvas.tag_raise(self._text_id)
        if self._after_msg is not None:
            try:
                self._root.after_cancel(self._after_msg)
            except tk.TclError:
                pass
        self._after_msg = self._root.after(duration_ms, self._hide_msg)

    def _hide_msg(self):
        self._after_msg = None
        if self._canvas is not None and self._text_id is not None:
            self._canvas.itemconfig(self._text_id, text="", state="hidden")

    # ── build ─────────────────────────────────────────────────────────────

    def _detect_dpr(self, win) -> float:
        if config.DEVICE_PIXEL_RATIO:
            return float(config.DEVICE_PIXEL_RATIO)
        try:
            return max(1.0, round(win.winfo_fpixels("1i") / 96.0, 2))
        except tk.TclError:
            return 1.0

    def _physical(self) -> int:
        return max(1, int(round(self._size * self._dpr)))

    def _place_window(self):
        px = self._physical()
        sw = self._win.winfo_screenwidth()
        sh = self._win.winfo_screenheight()
        self._win.geometry(f"{px}x{px}+{(sw - px) // 2}+{sh - px - 52}")
        self._canvas.config(width=px, height=px)
        if self._text_id is not None:
            self._canvas.coords(self._text_id, px // 2, int(px * 0.88))

    def _build(self):
        win = tk.Toplevel(self._root)
        win.overrideredirect(True)
        win.wm_attributes("-topmost", True)
        win.wm_attributes("-alpha", _ALPHA_MIN)
        try:
            win.wm_attributes("-transparentcolor", _CHROMAKEY)
        except tk.TclError:
            log.debug("Window manager has no -transparentcolor support.")
        win.configure(bg=_CHROMAKEY)
        self._alpha = _ALPHA_MIN
        self._win = win
        self._dpr = self._detect_dpr(win)

        c = tk.Canvas(win, bg=_CHROMAKEY, highlightthickness=0)
        c.pack()
        self._canvas = c
        self._img_id = c.create_image(0, 0, image=None, anchor="nw")
        self._text_id = c.create_text(
            0, 0, text="", fill="#c8c8d4",
            font=("Segoe UI", 9), anchor="center", state="hidden",
        )
        self._place_window()

    # ── frame presentation ────────────────────────────────────────────────

    def _backdrop(self, px: int) -> Image.Image:
        key = (px, self._mode)
        if key not in self._backdrops:
            ring = self._orb.palette[0] if self._orb else config.PALETTE[0]
            self._backdrops[key] = _render_backdrop(
                px, _hex_to_rgb(_BG), tuple(ring),
                _RING_ALPHA.get(self._mode, 0.08))
        return self._backdrops[key]

    def _present(self, image: Image.Image):
        """Flatten the orb over the backdrop and show it on the canvas."""
        if self._canvas is None:
            return
        px = image.size[0]
        if self._mask is None or self._mask.size != image.size:
            self._mask = _disc_mask(px)
        disc = Image.alpha_composite(self._backdrop(px), image).convert("RGB")
        frame = Image.new("RGB", image.size, _hex_to_rgb(_CHROMAKEY))
        frame.paste(disc, (0, 0), self._mask)
        self._frame_tk = ImageTk.PhotoImage(frame)
        self._canvas.itemconfig(self._img_id, image=self._frame_tk)

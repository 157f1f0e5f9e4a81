"""Drawing surface: a PIL RGBA buffer sized in physical pixels.

Painting code works in logical coordinates.  The device-pixel-ratio
transform is switched on for the duration of one frame by ``scaled()`` and
switched off again on exit, so nothing leaks into the next frame.
"""

from contextlib import contextmanager

import numpy as np
from PIL import Image

from logger import log


class Surface:
    def __init__(self, width: float = 0, height: float = 0, dpr: float = 1.0):
        self.width  = 0.0
        self.height = 0.0
        self.dpr    = 1.0
        self.image  = None
        self.scale  = 1.0      # active transform; dpr only inside scaled()
        self._grid  = None
        self.resize(width, height, dpr)

    # ── geometry ──────────────────────────────────────────────────────────

    @property
    def physical_size(self) -> tuple:
        return (max(0, int(round(self.width * self.dpr))),
                max(0, int(round(self.height * self.dpr))))

    @property
    def valid(self) -> bool:
        pw, ph = self.physical_size
        return self.image is not None and pw > 0 and ph > 0

    def resize(self, width: float, height: float, dpr: float = None):
        """Re-derive the buffer for a new logical size and/or pixel ratio."""
        if dpr is not None:
            self.dpr = dpr if dpr and dpr > 0 else 1.0
        self.width = float(width or 0)
        self.height = float(height or 0)
        self._grid = None
        pw, ph = self.physical_size
        if pw > 0 and ph > 0:
            self.image = Image.new("RGBA", (pw, ph), (0, 0, 0, 0))
        else:
            # keep a 1x1 buffer so clear() still works, but nothing is drawn
            self.image = Image.new("RGBA", (1, 1), (0, 0, 0, 0))
            log.debug("Surface size %.1fx%.1f is empty, drawing disabled.",
                      self.width, self.height)

    def release(self):
        self.image = None
        self._grid = None

    @property
    def released(self) -> bool:
        return self.image is None

    # ── per-frame helpers ─────────────────────────────────────────────────

    def clear(self):
        if self.image is not None:
            self.image = Image.new("RGBA", self.image.size, (0, 0, 0, 0))

    @contextmanager
    def scaled(self):
        self.scale = self.dpr
        try:
            yield self
        finally:
            self.scale = 1.0

    def to_px(self, points):
        """Logical (x, y) pairs → physical pixel coordinates (list of tuples)."""
        arr = np.asarray(points, dtype=float) * self.scale
        return [tuple(p) for p in arr.reshape(-1, 2)]

    def box(self, x0: float, y0: float, x1: float, y1: float, pad: float = 0.0):
        """Logical bounds → physical (left, top, right, bottom) clipped to
        the buffer, or None when nothing of it is on screen."""
        k = self.scale
        w, h = self.image.size
        left = max(0, int(np.floor((x0 - pad) * k)))
        top = max(0, int(np.floor((y0 - pad) * k)))
        right = min(w, int(np.ceil((x1 + pad) * k)))
        bottom = min(h, int(np.ceil((y1 + pad) * k)))
        if right <= left or bottom <= top:
            return None
        return (left, top, right, bottom)

    def grid(self, box: tuple = None):
        """Logical coordinates of every physical pixel center, as (xs, ys).

        With *box* only the pixels of that physical rectangle are returned.
        """
        if self._grid is None:
            pw, ph = self.physical_size
            xs = (np.arange(pw, dtype=float) + 0.5) / self.dpr
            ys = (np.arange(ph, dtype=float) + 0.5) / self.dpr
            self._grid = np.meshgrid(xs, ys)
        if box is None:
            return self._grid
        left, top, right, bottom = box
        xs, ys = self._grid
        return xs[top:bottom, left:right], ys[top:bottom, left:right]

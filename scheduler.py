"""Cooperative repeat loops on top of a Tk-style ``after()`` host.

The host is anything with ``after(ms, fn) -> token`` and
``after_cancel(token)``: a tkinter widget in the app, a fake in tests.
At most one callback is pending at any time.
"""

import config
from logger import log


class FrameScheduler:
    """Calls *callback* once per frame until stopped."""

    label = "frame"

    def __init__(self, host, callback, interval_ms: int = config.FRAME_MS):
        self._host = host
        self._callback = callback
        self._interval = max(1, int(interval_ms))
        self._token = None
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    @property
    def pending(self) -> bool:
        return self._token is not None

    def start(self):
        if self._running:
            return
        self._running = True
        self._schedule()

    def stop(self):
        """Cancel the pending callback.  Safe to call any number of times."""
        self._running = False
        if self._token is not None:
            try:
                self._host.after_cancel(self._token)
            except Exception as exc:
                log.debug("%s cancel ignored: %s", self.label, exc)
            self._token = None

    def _schedule(self):
        self._token = self._host.after(self._interval, self._fire)

    def _fire(self):
        self._token = None
        if not self._running:
            return
        try:
            self._callback()
        except Exception as exc:
            log.error("%s callback error: %s", self.label, exc)
        if self._running and self._token is None:
            self._schedule()


class Ticker(FrameScheduler):
    """Fixed-period timer, independent of the frame loop."""

    label = "ticker"

    def __init__(self, host, callback, interval_ms: int = config.JITTER_MS):
        super().__init__(host, callback, interval_ms)

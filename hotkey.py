"""Dual-hotkey listener driving the orb mode.

  - config.LISTEN_HOTKEY: hold to listen (or press twice when
    config.HOLD_TO_LISTEN is False)
  - config.SPEAK_HOTKEY:  press to toggle speaking
"""

from pynput import keyboard

import config
from logger import log


def _resolve(name: str):
    try:
        return getattr(keyboard.Key, name)
    except AttributeError:
        raise ValueError(f"unknown hotkey name {name!r}") from None


class HotkeyListener:
    def __init__(self, on_listen_start, on_listen_end, on_speak_toggle):
        self._on_listen_start = on_listen_start
        self._on_listen_end = on_listen_end
        self._on_speak_toggle = on_speak_toggle
        self._listen_key = _resolve(config.LISTEN_HOTKEY)
        self._speak_key = _resolve(config.SPEAK_HOTKEY)
        self._listen_pressed = False
        self._speak_pressed = False
        # Toggle-mode state: True while listening
        self._listening = False
        self._listener = None

    def _is_hold_mode(self) -> bool:
        return getattr(config, "HOLD_TO_LISTEN", True)

    # ── press ─────────────────────────────────────────────────────────────

    def _handle_press(self, key):
        if key == self._listen_key:
            # ignore key-repeat while held
            if self._listen_pressed:
                return
            self._listen_pressed = True
            if self._is_hold_mode():
                self._safe_call(self._on_listen_start, "Listen press")
            elif not self._listening:
                self._listening = True
                self._safe_call(self._on_listen_start, "Listen toggle-start")
            else:
                self._listening = False
                self._safe_call(self._on_listen_end, "Listen toggle-stop")

        elif key == self._speak_key:
            if self._speak_pressed:
                return
            self._speak_pressed = True
            self._safe_call(self._on_speak_toggle, "Speak toggle")

    # ── release ───────────────────────────────────────────────────────────

    def _handle_release(self, key):
        if key == self._listen_key:
            was_pressed = self._listen_pressed
            self._listen_pressed = False
            if self._is_hold_mode() and was_pressed:
                self._safe_call(self._on_listen_end, "Listen release")
        elif key == self._speak_key:
            self._speak_pressed = False

    # ── helpers ───────────────────────────────────────────────────────────

    @staticmethod
    def _safe_call(fn, label: str):
        try:
            fn()
        except Exception as exc:
            log.error("%s error: %s", label, exc)

    def start(self):
        self._listener = keyboard.Listener(
            on_press=self._handle_press,
            on_release=self._handle_release,
        )
        self._listener.start()
        self._listener.wait()

    def stop(self):
        if self._listener is not None:
            self._listener.stop()

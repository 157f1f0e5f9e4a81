import os
import threading
import tkinter as tk

import brand
import config
import locales
from hotkey import HotkeyListener
from logger import log
from motion import AnimationMode, mode_from_flags
from tray_icon import TrayIcon
from widget import OrbWidget

_EXPORT_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)),
                            "orb_preview.gif")

tray   = None
widget = None
root   = None
hotkey_listener = None

# Conversation flags mirrored from hotkeys / tray
_speaking  = False
_listening = False
_style     = config.SHAPE_STYLE
_lock      = threading.Lock()


def _current_mode() -> AnimationMode:
    return mode_from_flags(_speaking, _listening)


def _publish():
    """Push the current flags to the widget and the tray."""
    mode = _current_mode()
    if widget:
        widget.set_state(_speaking, _listening)
    if tray:
        tray.set_mode(mode)
    log.info("Mode: %s", mode.value)


# ── Hotkey callbacks ──────────────────────────────────────────────────────

def _on_listen_start():
    global _listening
    with _lock:
        _listening = True
    _publish()


def _on_listen_end():
    global _listening
    with _lock:
        _listening = False
    _publish()


def _on_speak_toggle():
    global _speaking
    with _lock:
        _speaking = not _speaking
    _publish()


# ── Tray callbacks ────────────────────────────────────────────────────────

def _on_tray_mode(mode: AnimationMode):
    global _speaking, _listening
    with _lock:
        _speaking = mode == AnimationMode.SPEAKING
        _listening = mode == AnimationMode.LISTENING
    _publish()


def _on_tray_style(style: str):
    global _style
    _style = style
    if widget:
        widget.set_style(style)
    log.info("Style: %s", style)


def _show_orb():
    if widget:
        widget.show()


def _export():
    """Render a preview GIF on a worker thread."""
    mode = _current_mode()

    def work():
        try:
            path = brand.export_gif(_EXPORT_PATH, mode=mode, style=_style)
            if widget:
                widget.show_message(
                    locales.get("exported", name=os.path.basename(path)))
        except Exception as exc:
            log.error("GIF export failed: %s", exc)
            if widget:
                widget.show_message(locales.get("export_failed"))

    threading.Thread(target=work, daemon=True).start()


# ── Quit & Main ───────────────────────────────────────────────────────────

def _quit():
    log.info("Quitting...")
    if hotkey_listener:
        try:
            hotkey_listener.stop()
        except Exception as exc:
            log.warning("Hotkey listener stop failed: %s", exc)
    if tray:
        try:
            tray.stop()
        except Exception as exc:
            log.warning("Tray stop failed: %s", exc)
    if widget:
        widget.hide()
    if root:
        root.after(400, root.destroy)
    log.info("Shutdown complete.")


def main():
    global tray, widget, root, hotkey_listener

    root = tk.Tk()
    root.withdraw()

    widget = OrbWidget(root, size=config.ORB_SIZE, style=_style)

    tray = TrayIcon(on_quit=_quit, on_mode=_on_tray_mode,
                    on_style=_on_tray_style, on_show=_show_orb,
                    on_export=_export)
    tray.start(_style)

    hotkey_listener = HotkeyListener(
        on_listen_start=_on_listen_start,
        on_listen_end=_on_listen_end,
        on_speak_toggle=_on_speak_toggle,
    )
    hotkey_listener.start()

    widget.show()
    _publish()

    log.info("Ready. %s=listen, %s=speak.",
             config.LISTEN_HOTKEY, config.SPEAK_HOTKEY)
    root.mainloop()


if __name__ == "__main__":
    main()

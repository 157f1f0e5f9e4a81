"""System tray icon: pick the orb mode and style, export a preview, quit."""

import pystray

import locales
from brand import make_tray_icon
from motion import AnimationMode


class TrayIcon:
    def __init__(self, on_quit, on_mode, on_style=None, on_show=None,
                 on_export=None):
        self._on_quit = on_quit
        self._on_mode = on_mode
        self._on_style = on_style
        self._on_show = on_show
        self._on_export = on_export
        self._icon = None
        self._mode = AnimationMode.IDLE
        self._style = None

    # ── menu ──────────────────────────────────────────────────────────────

    def _mode_item(self, mode: AnimationMode):
        return pystray.MenuItem(
            locales.get(f"tray_mode_{mode.value}"),
            lambda icon, item: self._on_mode(mode),
            checked=lambda item: self._mode == mode,
            radio=True,
        )

    def _style_item(self, style: str):
        return pystray.MenuItem(
            locales.get(f"tray_style_{style}"),
            lambda icon, item: self._pick_style(style),
            checked=lambda item: self._style == style,
            radio=True,
        )

    def _build_menu(self):
        items = [
            pystray.MenuItem(locales.get("app_name"), None, enabled=False),
            pystray.Menu.SEPARATOR,
        ]
        items += [self._mode_item(m) for m in AnimationMode]
        if self._on_style:
            items.append(pystray.Menu.SEPARATOR)
            items.append(pystray.MenuItem(
                locales.get("tray_style"),
                pystray.Menu(self._style_item("blob"), self._style_item("wave")),
            ))
        items.append(pystray.Menu.SEPARATOR)
        if self._on_show:
            items.append(pystray.MenuItem(locales.get("tray_show"),
                                          lambda icon, item: self._on_show()))
        if self._on_export:
            items.append(pystray.MenuItem(locales.get("tray_export"),
                                          lambda icon, item: self._on_export()))
        items.append(pystray.MenuItem(locales.get("tray_quit"), self._quit))
        return pystray.Menu(*items)

    def _pick_style(self, style: str):
        self._style = style
        if self._on_style:
            self._on_style(style)

    def _quit(self, icon, item):
        icon.stop()
        self._on_quit()

    # ── lifecycle ─────────────────────────────────────────────────────────

    def start(self, style: str):
        self._style = style
        self._icon = pystray.Icon(
            "Orb",
            make_tray_icon(self._mode, style),
            self._title(),
            menu=self._build_menu(),
        )
        # run_detached() keeps the tray loop on pystray's own thread
        self._icon.run_detached()

    def set_mode(self, mode: AnimationMode):
        self._mode = AnimationMode(mode)
        if self._icon is None:
            return
        self._icon.icon = make_tray_icon(self._mode, self._style)
        self._icon.title = self._title()
        self._icon.update_menu()

    def _title(self) -> str:
        return locales.get("tray_title",
                           mode=locales.get(f"tray_mode_{self._mode.value}"))

    def stop(self):
        if self._icon is not None:
            self._icon.stop()

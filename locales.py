"""UI string table for the orb app, keyed by language code.

Use ``get(key)`` to retrieve the string for the current ``config.LANGUAGE``.
Supports format placeholders via ``get(key, **kwargs)``.
"""

import config

# ── String tables ─────────────────────────────────────────────────────────

_STRINGS: dict[str, dict[str, str]] = {
    "en": {
        # tray_icon.py
        "app_name":          "Orb",
        "tray_title":        "Orb: {mode}",
        "tray_mode_idle":      "Idle",
        "tray_mode_listening": "Listening",
        "tray_mode_speaking":  "Speaking",
        "tray_style":        "Style",
        "tray_style_blob":   "Blob",
        "tray_style_wave":   "Wave",
        "tray_show":         "Show orb",
        "tray_export":       "Export GIF",
        "tray_quit":         "Quit",

        # widget.py / main.py
        "exported":          "Saved {name}",
        "export_failed":     "Export failed",
    },

    "it": {
        "app_name":          "Orb",
        "tray_title":        "Orb: {mode}",
        "tray_mode_idle":      "Inattivo",
        "tray_mode_listening": "In ascolto",
        "tray_mode_speaking":  "Parla",
        "tray_style":        "Stile",
        "tray_style_blob":   "Sfera",
        "tray_style_wave":   "Onda",
        "tray_show":         "Mostra orb",
        "tray_export":       "Esporta GIF",
        "tray_quit":         "Esci",

        "exported":          "Salvato {name}",
        "export_failed":     "Esportazione fallita",
    },
}

_FALLBACK = "en"


# ── Public API ────────────────────────────────────────────────────────────

def get(key: str, **kwargs) -> str:
    """Return the localised string for *key*, formatted with *kwargs*.

    Falls back to English if the key is missing in the active language.
    """
    lang = getattr(config, "LANGUAGE", _FALLBACK)
    table = _STRINGS.get(lang, _STRINGS[_FALLBACK])
    template = table.get(key, _STRINGS[_FALLBACK].get(key, key))
    if kwargs:
        try:
            return template.format(**kwargs)
        except (KeyError, IndexError):
            return template
    return template

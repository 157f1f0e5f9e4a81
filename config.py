# ── Hotkeys ───────────────────────────────────────────────────────────────
# Names of pynput.keyboard.Key members (resolved in hotkey.py).
# Hold AltGr while the user talks (orb switches to listening)
LISTEN_HOTKEY = "alt_gr"

# Press Ctrl+R to toggle the speaking state
SPEAK_HOTKEY = "ctrl_r"

# True = hold LISTEN_HOTKEY to listen.  False = press to start, press to stop.
HOLD_TO_LISTEN = True

# ── Language ──────────────────────────────────────────────────────────────
# Controls tray and widget strings.  Supported values: "en", "it".
LANGUAGE = "en"

# ── Window ────────────────────────────────────────────────────────────────
ORB_SIZE = 200            # logical pixels (square)
# None = ask Tk for the display scaling; a number forces a ratio.
DEVICE_PIXEL_RATIO = None

# ── Shape ─────────────────────────────────────────────────────────────────
# "blob" = noise-deformed layered rings, "wave" = attenuated sine strokes
SHAPE_STYLE = "blob"

# Purple-pink palette, cycled by layer and particle index
PALETTE = (
    (139, 92, 246),    # #8B5CF6 purple
    (168, 85, 247),    # #A855F7 violet
    (217, 70, 239),    # #D946EF fuchsia
    (236, 72, 153),    # #EC4899 pink
    (167, 139, 250),   # #A78BFA light purple
    (244, 114, 182),   # #F472B6 light pink
)

BLOB_LAYERS    = 6
BLOB_SEGMENTS  = 120
WAVE_COUNT     = 4

PARTICLES_ACTIVE = 20      # listening / speaking
PARTICLES_IDLE   = 12

# ── Timing ────────────────────────────────────────────────────────────────
FRAME_MS   = 16            # ~60 fps
TIME_STEP  = 0.016         # seconds of animation time per frame
JITTER_MS  = 120           # speaking intensity re-roll period

# ── Smoothing ─────────────────────────────────────────────────────────────
INTENSITY_RATE = 0.03
SCALE_RATE     = 0.04

INTENSITY_BAND = (0.2, 1.1)
SCALE_BAND     = (0.8, 1.2)

# Seed values used when the orb is created
INITIAL_INTENSITY = 0.9
INITIAL_SCALE     = 0.95

# ── Mode targets: (intensity, scale) ──────────────────────────────────────
TARGET_SPEAKING  = (0.98, 1.08)
TARGET_LISTENING = (0.9, 0.92)
TARGET_IDLE      = (0.65, 0.88)

# Speaking jitter re-rolls intensity uniformly in this band
JITTER_BAND = (0.95, 1.0)

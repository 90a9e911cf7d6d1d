"""
settings.py — Global constants for Key Cracker.

All magic numbers live here. No other module should hardcode colors,
dimensions, symbol tables, or timing values. Import what you need with:
    from settings import COLOR, SCREEN_W, ...
"""

# ── Screen ────────────────────────────────────────────────────────────────────
SCREEN_W = 360
SCREEN_H = 640
FPS = 60
TITLE = "Key Cracker"

# ── Colors ────────────────────────────────────────────────────────────────────
COLOR = {
    "background":   ( 10,  14,  22),   # #0A0E16
    "panel":        ( 18,  28,  42),   # #121C2A
    "panel_border": ( 40, 190, 210),   # #28BED2 holographic cyan
    "key":          ( 26,  40,  60),   # #1A283C
    "key_border":   ( 60,  90, 120),   # #3C5A78
    "highlight":    ( 40, 190, 210),   # hovered key / active button
    "timer":        (229,  57,  53),   # #E53935
    "progress":     ( 52, 168,  83),   # #34A853
    "chrome":       (117, 130, 150),   # secondary labels
    "text":         (220, 240, 245),
    "text_dim":     (120, 140, 160),
    "pass":         ( 52, 168,  83),   # green flash on accepted
    "fail":         (234,  67,  53),   # red flash on invalid / time out
    "warning":      (250, 190,  40),   # special-effect notices
}

# ── Bevel depth for raised keys and bars ──────────────────────────────────────
BEVEL_DEPTH = 6   # px offset for top/right faces

# ── Symbols ───────────────────────────────────────────────────────────────────
# Internal value → display glyph. Sequences and user input store values;
# the keypad shows glyphs.
SYMBOL_MAP = {
    "0": "∅",
    "1": "↱",
    "2": "⥃",
    "3": "∆",
    "4": "☩",
    "5": "⭓",
    "6": "☗",
    "7": "⚇",
    "§": "▓",   # Quantum Entanglement Lock's out-of-alphabet symbol
}

KEYPAD_VALUES = ("0", "1", "2", "3", "4", "5", "6", "7")
ENTANGLED_SYMBOL = "§"

# ── Levels ────────────────────────────────────────────────────────────────────
MIN_ITEM_LEVEL = 1
MAX_ITEM_LEVEL = 8

# ── Difficulty floors ─────────────────────────────────────────────────────────
MIN_REQUIRED_ENTRIES   = 1
MIN_SYMBOLS_DISPLAYED  = 1
MIN_TIME_ALLOWED_S     = 5
BASE_TIME_ALLOWED_S    = 20
BASE_SYMBOLS_DISPLAYED = 6
ENTRIES_PER_LOCK_LEVEL = 10

# ── Cadence ───────────────────────────────────────────────────────────────────
# Level-driven effects fire every (CADENCE_CEILING - level)th round:
# L1 every 10th round, L8 every 3rd.
CADENCE_CEILING = 11

# ── Session ───────────────────────────────────────────────────────────────────
MAX_ATTEMPTS_PER_SEQUENCE = 3
TICK_INTERVAL_S           = 1.0
FLASH_PERIOD_S            = 1.0   # symbols blink out at the end of each period
FEEDBACK_FLASH_S          = 0.4   # pass / fail tint fade

# ── Messages ──────────────────────────────────────────────────────────────────
MESSAGE = {
    "instruction":   "Code sequence incoming.\nPress START to begin.",
    "memorise":      "Code shown only once.\nPress CONTINUE to proceed.",
    "reversed":      "CODE REVERSED! Memorise symbols.\nPress CONTINUE to proceed.",
    "enter":         "ENTER CODE",
    "incomplete":    "Incomplete code. ENTER CODE",
    "memorise_out":  "TIME OUT! ENTER CODE.",
    "accepted":      "CODE ACCEPTED",
    "invalid":       "INVALID CODE",
    "input_out":     "TIME OUT! INVALID CODE.",
    "granted":       "ACCESS GRANTED",
    "exhausted":     "INFILTRATION FAILED: ATTEMPTS EXHAUSTED",
    "aborted":       "INFILTRATION ABORTED",
    "strength_up":   "LOCK STRENGTH INCREASING: {amount}/s!",
}

# ── Logging ───────────────────────────────────────────────────────────────────
LOG_LEVEL  = "INFO"
LOG_FORMAT = "console"   # "console" or "json"

# ── UI Layout (relative to 360×640) ──────────────────────────────────────────
HEADER_H        = 64    # px: lock / tool banner
TIMER_BAR_H     = 8     # px: thin bar below header
DISPLAY_H       = 150   # px: digital display panel
PROGRESS_BAR_H  = 10    # px: successful entries progress
KEY_W           = 72
KEY_H           = 56
KEY_PADDING     = 10
KEYPAD_COLS     = 3
BUTTON_H        = 48    # px: START/CONTINUE/ENTER and BACKSPACE/ABORT
ATTEMPTS_BAR_H  = 14

# ── Fonts ─────────────────────────────────────────────────────────────────────
# pygame.font.SysFont name, symbol glyphs need a font with wide coverage
FONT_FAMILY = "dejavusansmono"
FONT_SIZE_XL = 30
FONT_SIZE_LG = 18
FONT_SIZE_MD = 14
FONT_SIZE_SM = 11

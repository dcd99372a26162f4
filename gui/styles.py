"""
UI theme definitions for MoodEmoji.

Based on Monkeytype's Serika Dark color scheme.
All UI components should reference these constants instead of hardcoding values.

Color philosophy:
- Matte palette, single accent color (#E2B714) for focus elements
- Sentiment colors are muted green / gray / red so emoji stay the focal point
"""

from typing import Final

# ===== COLOR SCHEME =====
COLORS: Final[dict[str, str]] = {
    # === BACKGROUNDS ===
    "bg": "#323437",  # Main window background (soft dark gray)
    "bg_secondary": "#2C2E31",  # Buttons, input fields, side panels (darker gray)

    # === TEXT COLORS ===
    "text_main": "#D1D0C5",  # Primary text (light gray/beige)
    "text_header": "#E2B714",  # App title
    "text_accent": "#E2B714",  # Highlights, active elements
    "text_faint": "#646669",  # Timestamps, hints, disabled state
    "text_error": "#CA4754",  # Error message

    # === SENTIMENT ===
    "positive": "#7FB77E",
    "neutral": "#A0A0A0",
    "negative": "#CA4754",

    # === CONFIDENCE BAR ===
    "band_high": "#7FB77E",  # > 70%
    "band_medium": "#E2B714",  # > 50%
    "band_low": "#CA4754",
    "bar_trough": "#2C2E31",

    # === UI ELEMENTS ===
    "separator": "#646669",  # Horizontal dividers
    "button_bg": "#2C2E31",  # Button backgrounds
}

# ===== FONT DEFINITIONS =====
FONTS: Final[dict[str, tuple]] = {
    # === HEADERS ===
    "header": ("Segoe UI", 20, "bold"),  # "Mood Emoji AI"
    "subheader": ("Segoe UI", 10),  # Tagline under the title
    "section": ("Segoe UI", 10, "bold"),  # Sidebar section titles

    # === INPUT ===
    "input": ("Segoe UI", 16),
    "submit": ("Segoe UI", 12, "bold"),

    # === RESULT ===
    "emoji": ("Segoe UI Emoji", 64),  # Big verdict emoji
    "verdict": ("Segoe UI", 16, "bold"),  # "Sunshine is Positive"
    "percent": ("Consolas", 12, "bold"),
    "celebration": ("Segoe UI Emoji", 22),

    # === SIDEBAR ===
    "history_word": ("Segoe UI", 10),
    "history_meta": ("Consolas", 8),
    "stat": ("Segoe UI", 24, "bold"),  # Positive rate value

    # === UI CONTROLS ===
    "ui": ("Segoe UI", 9),  # General UI elements (labels, buttons)
    "error": ("Segoe UI", 10),
}

# ===== LAYOUT =====
CONFIDENCE_BAR_WIDTH: Final[int] = 220
CONFIDENCE_BAR_HEIGHT: Final[int] = 10

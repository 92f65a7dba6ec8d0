"""Shared style constants for TAPEDECK."""

COLORS = {
    "bass": "#cc5500",
    "primary": "#ff8c00",
    "highlight": "#ffb347",
    "background": "#1a1a1a",
    "surface": "#2d2d2d",
    "muted": "#888888",
}

COLOR_BASS = COLORS["bass"]
COLOR_PRIMARY = COLORS["primary"]
COLOR_HIGHLIGHT = COLORS["highlight"]
COLOR_BACKGROUND = COLORS["background"]
COLOR_SURFACE = COLORS["surface"]
COLOR_MUTED = COLORS["muted"]

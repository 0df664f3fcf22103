"""Layout, color, and rendering constants."""
from __future__ import annotations

# Layout
SCREEN_W = 900
SCREEN_H = 600
HEADER_H = 48
LOG_H = 110
COLUMN_W = SCREEN_W // 3
ROW_H = 42
FPS = 60

# UI colors
COLOR_BG = (20, 20, 30)
COLOR_PANEL_BG = (25, 25, 35)
COLOR_LOG_BG = (18, 18, 25)
COLOR_DIVIDER = (50, 50, 60)
COLOR_TEXT = (200, 200, 200)
COLOR_TEXT_DIM = (130, 130, 140)
COLOR_ROW = (40, 40, 55)
COLOR_ROW_READY = (45, 80, 55)
COLOR_BUTTON = (70, 110, 60)

# Weather tint on the header strip
WEATHER_COLORS: dict[str, tuple[int, int, int]] = {
    "Warm": (220, 160, 60),
    "Average": (160, 160, 160),
    "Cold": (120, 170, 230),
}

# Event log colors
LOG_COLORS: dict[str, tuple[int, int, int]] = {
    "season": (200, 200, 100),
    "weather": (120, 170, 230),
    "unlock": (100, 220, 100),
    "build": (220, 180, 60),
    "upgrade": (180, 120, 255),
    "save": (100, 200, 220),
    "default": (170, 170, 170),
}

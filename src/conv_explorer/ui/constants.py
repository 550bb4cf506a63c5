"""Centralized UI constants for the convolution explorer.

This file only stores values (numbers, colors, labels).
Keeping these in one place makes the UI easier to tune later because
you do not need to search through the full application for each value.
"""

# Main window sizing defaults.
WINDOW_SIZE = "1380x900"
WINDOW_MIN_SIZE = (1180, 780)

# Each grid cell is drawn as a square of this many screen pixels.
GRID_CELL_SIZE = 24
# Canvases are sized for the largest padded grid the sliders allow:
# 24 input cells + 2 * 6 padding cells = 36 cells per axis.
GRID_CANVAS_SIZE = 36 * GRID_CELL_SIZE + 8
GRID_MARGIN = 4

# Slider ranges as (min, max). Kernel sizes move in steps of 2 so the
# kernel always has a center cell.
INPUT_SIZE_RANGE = (4, 24)
KERNEL_RANGE = (1, 11)
KERNEL_STEP = 2
STRIDE_RANGE = (1, 6)
PADDING_RANGE = (0, 6)
DILATION_RANGE = (1, 4)

# Scan animation speed in milliseconds per output cell.
SCAN_SPEED_RANGE = (60, 800)
SCAN_SPEED_DEFAULT = 350

# Core color palette used by the app.
COLOR_BG = "#f3f7fb"
COLOR_CARD = "#ffffff"
COLOR_INK = "#0f172a"
COLOR_SUB = "#475569"
COLOR_EDGE = "#cbd5e1"

# Colors used by the status banner at the bottom.
COLOR_STATUS_INFO_BG = "#e0f2fe"
COLOR_STATUS_INFO_FG = "#0c4a6e"
COLOR_STATUS_WARN_BG = "#fff7ed"
COLOR_STATUS_WARN_FG = "#9a3412"

# Neutral button colors (normal, hover, pressed).
COLOR_NEUTRAL_BTN = "#e5e7eb"
COLOR_NEUTRAL_BTN_HOVER = "#d1d5db"
COLOR_NEUTRAL_BTN_PRESS = "#c7ccd4"

# Grid cell colors, one (fill, outline) pair per cell role.
# Greens mark the receptive field; the darker the green, the more
# directly that cell feeds the selected output.
CELL_COLORS = {
    "center": ("#059669", "#047857"),
    "tap": ("#a7f3d0", "#059669"),
    "skipped": ("#ecfdf5", "#059669"),
    "stride_anchor": ("#eff6ff", "#93c5fd"),
    "padding": ("#f1f5f9", "#e2e8f0"),
    "plain": ("#ffffff", "#e2e8f0"),
}
COLOR_OUTPUT_SELECTED = "#059669"
COLOR_OUTPUT_VALUE = "#0ea5e9"
COLOR_CELL_TEXT = "#334155"
COLOR_CELL_TEXT_ON_DARK = "#ffffff"

CELL_FONT = ("Menlo", 8)

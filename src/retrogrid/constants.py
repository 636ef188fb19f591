"""
Default constants for ASCII generation.

Pixel ratios reflect the aspect of a typical monospace glyph. Limits are
soft: exceeding them produces warnings, never a failed render.
"""

# px per character column
CHAR_WIDTH_RATIO = 8
# px per character row
CHAR_HEIGHT_RATIO = 12

# Smallest box (in cells) that can show four corners and one edge segment
MIN_RENDERABLE_CHARS = 3

# Blank cells between a box border and its text
TEXT_PADDING_CHARS = 1

# Margin added around the canvas bounds (total, both sides)
GRID_MARGIN = 2

MAX_OUTPUT_LINES = 10000
MAX_LINE_LENGTH = 500

MAX_NESTING_DEPTH = 5

# Never scale below one pixel per character
MIN_CHAR_RATIO = 1

# Pixel ratios for the preview scale presets
SCALE_PRESETS = {
    "compact": (1.5, 2.5),
    "normal": (2, 3),
    "spacious": (3, 4),
}

NO_ARTBOARDS_MESSAGE = (
    "// No artboards found - create an artboard to see ASCII output!"
)

"""
Box-drawing glyph tables.

Each border style has one fixed character set. The set is a tuple indexed
by JunctionType, so looking up a glyph never involves string keys.
Dashed borders only differ from single ones in their straight edges.
"""

from enum import IntEnum
from typing import Iterable, NamedTuple, Optional, Union

from .models import ArrowStyle, BorderStyle, LineDirection, LineStyle


class JunctionType(IntEnum):
    """How a border cell connects to its four neighbors."""

    HORIZONTAL = 0
    VERTICAL = 1
    CORNER_TOP_LEFT = 2
    CORNER_TOP_RIGHT = 3
    CORNER_BOTTOM_LEFT = 4
    CORNER_BOTTOM_RIGHT = 5
    T_DOWN = 6  # ┬
    T_UP = 7  # ┴
    T_RIGHT = 8  # ├
    T_LEFT = 9  # ┤
    CROSS = 10  # ┼
    NONE = 11


class BoxChars(NamedTuple):
    """Glyphs of one border style, in JunctionType order."""

    horizontal: str
    vertical: str
    corner_top_left: str
    corner_top_right: str
    corner_bottom_left: str
    corner_bottom_right: str
    t_down: str
    t_up: str
    t_right: str
    t_left: str
    cross: str


SINGLE_LINE = BoxChars("─", "│", "┌", "┐", "└", "┘", "┬", "┴", "├", "┤", "┼")
DOUBLE_LINE = BoxChars("═", "║", "╔", "╗", "╚", "╝", "╦", "╩", "╠", "╣", "╬")
DASHED_LINE = SINGLE_LINE._replace(horizontal="┄", vertical="┊")

CHARSETS = {
    BorderStyle.SINGLE: SINGLE_LINE,
    BorderStyle.DOUBLE: DOUBLE_LINE,
    BorderStyle.DASHED: DASHED_LINE,
}

# Higher wins when styles meet at one cell
BORDER_STYLE_PRIORITY = {
    BorderStyle.DOUBLE: 3,
    BorderStyle.SINGLE: 2,
    BorderStyle.DASHED: 1,
}

BORDER_CHARS = frozenset(SINGLE_LINE + DOUBLE_LINE + DASHED_LINE)

CORNER_POSITIONS = {
    "top-left": JunctionType.CORNER_TOP_LEFT,
    "top-right": JunctionType.CORNER_TOP_RIGHT,
    "bottom-left": JunctionType.CORNER_BOTTOM_LEFT,
    "bottom-right": JunctionType.CORNER_BOTTOM_RIGHT,
}

# Connector glyphs: (horizontal, vertical) per line style
LINE_CHARS = {
    LineStyle.SOLID: ("─", "│"),
    LineStyle.DASHED: ("-", "¦"),
    LineStyle.DOTTED: ("·", ":"),
}

ARROW_CHARS = {
    ArrowStyle.SIMPLE: {"left": "←", "right": "→", "up": "↑", "down": "↓"},
    ArrowStyle.FILLED: {"left": "◀", "right": "▶", "up": "▲", "down": "▼"},
}


def coerce_border_style(style: Union[BorderStyle, str, None]) -> Optional[BorderStyle]:
    """Return the BorderStyle for ``style``; unknown names map to SINGLE."""
    if style is None:
        return None
    if isinstance(style, BorderStyle):
        return style
    try:
        return BorderStyle(style)
    except ValueError:
        return BorderStyle.SINGLE


def get_character_set(border_style: Union[BorderStyle, str, None]) -> BoxChars:
    style = coerce_border_style(border_style) or BorderStyle.SINGLE
    return CHARSETS[style]


def get_junction_char(
    junction_type: JunctionType, border_style: Union[BorderStyle, str, None]
) -> str:
    """Glyph for a junction in the given style; NONE maps to a space."""
    if junction_type == JunctionType.NONE:
        return " "
    return get_character_set(border_style)[junction_type]


def get_corner_char(position: str, border_style: Union[BorderStyle, str, None]) -> str:
    """
    Corner glyph for a box.

    Args:
        position: One of "top-left", "top-right", "bottom-left", "bottom-right".
        border_style: Style of the box border.
    """
    return get_character_set(border_style)[CORNER_POSITIONS[position]]


def get_edge_char(orientation: str, border_style: Union[BorderStyle, str, None]) -> str:
    charset = get_character_set(border_style)
    return charset.horizontal if orientation == "horizontal" else charset.vertical


def get_dominant_border_style(
    styles: Iterable[Union[BorderStyle, str, None]],
) -> BorderStyle:
    """
    Pick the style that wins where several borders meet.

    Ranking is double > single > dashed. Missing styles are ignored; if
    nothing is left the result is single. On a tie the first style wins.
    """
    dominant: Optional[BorderStyle] = None
    for raw in styles:
        style = coerce_border_style(raw)
        if style is None:
            continue
        if (
            dominant is None
            or BORDER_STYLE_PRIORITY[style] > BORDER_STYLE_PRIORITY[dominant]
        ):
            dominant = style
    return dominant or BorderStyle.SINGLE


def is_border_char(char: str) -> bool:
    return char in BORDER_CHARS


def get_line_char(direction: LineDirection, style: LineStyle) -> str:
    horizontal, vertical = LINE_CHARS[style]
    return horizontal if direction == LineDirection.HORIZONTAL else vertical


def get_arrow_char(direction: str, style: ArrowStyle) -> Optional[str]:
    """Arrow glyph pointing ``direction`` ("left", "right", "up", "down")."""
    if style == ArrowStyle.NONE:
        return None
    return ARROW_CHARS[style][direction]

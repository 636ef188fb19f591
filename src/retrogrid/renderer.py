"""
Box renderer module.

Draws box borders and box text into an AsciiGrid. Borders are drawn per
box with the box's own z-index; boxes are processed in ascending z-index
so the grid's occlusion rule acts as a painter's algorithm.
"""

from typing import Callable, Iterable, List, Sequence

from .constants import MIN_RENDERABLE_CHARS
from .coordinates import CharBounds
from .glyphs import get_corner_char, get_edge_char
from .grid import AsciiGrid
from .models import Box
from .text import format_text_content, truncate_lines, vertical_center_offset


class BoxRenderer:
    """
    Renders box outlines.

    Box structure (3x3 is the smallest that renders):
    ┌───┐   ┌─┐
    │   │   │ │
    └───┘   └─┘
    """

    def __init__(self, min_width: int = MIN_RENDERABLE_CHARS, min_height: int = MIN_RENDERABLE_CHARS):
        self.min_width = max(MIN_RENDERABLE_CHARS, min_width)
        self.min_height = max(MIN_RENDERABLE_CHARS, min_height)

    def can_render(self, bounds: CharBounds) -> bool:
        return bounds.width >= self.min_width and bounds.height >= self.min_height

    def draw_box(self, grid: AsciiGrid, box: Box, bounds: CharBounds) -> bool:
        """
        Draw the four corners and four edges of ``box`` at grid ``bounds``.

        Returns:
            False if the box is too small to show all four corners and
            nothing was drawn.
        """
        if not self.can_render(bounds):
            return False

        style = box.border_style
        z = box.z_index
        top, left = bounds.start_row, bounds.start_col
        bottom, right = bounds.end_row, bounds.end_col

        corners = (
            (top, left, "top-left"),
            (top, right, "top-right"),
            (bottom, left, "bottom-left"),
            (bottom, right, "bottom-right"),
        )
        for row, col, position in corners:
            grid.set_cell(
                row, col, get_corner_char(position, style), z, box.id, style,
                is_border=True, reason="border",
            )

        if right - left > 1:
            horizontal = get_edge_char("horizontal", style)
            grid.draw_horizontal_line(top, left + 1, right - 1, horizontal, z, box.id, style)
            grid.draw_horizontal_line(bottom, left + 1, right - 1, horizontal, z, box.id, style)

        if bottom - top > 1:
            vertical = get_edge_char("vertical", style)
            grid.draw_vertical_line(left, top + 1, bottom - 1, vertical, z, box.id, style)
            grid.draw_vertical_line(right, top + 1, bottom - 1, vertical, z, box.id, style)

        return True

    def draw_boxes(
        self,
        grid: AsciiGrid,
        boxes: Iterable[Box],
        get_bounds: Callable[[Box], CharBounds],
    ) -> List[Box]:
        """
        Draw boxes in ascending z-index order (stable for ties).

        Returns:
            The boxes that were too small to draw.
        """
        skipped: List[Box] = []
        for box in sorted(boxes, key=lambda b: b.z_index):
            if not self.draw_box(grid, box, get_bounds(box)):
                skipped.append(box)
        return skipped


class TextRenderer:
    """
    Renders a box's text inside its content bounds.

    Text is wrapped to the content width, aligned, and cut to the content
    height with a trailing "..." when it does not fit. Every character is
    written with ``is_text`` so it can be told apart from border ink.
    """

    def __init__(self, vertically_center: bool = False):
        self.vertically_center = vertically_center

    def layout(self, box: Box, content_bounds: CharBounds) -> List[str]:
        """Lines that will be written for ``box``, without drawing them."""
        text = box.text
        if text is None or not text.value or not text.value.strip():
            return []
        if content_bounds.width <= 0 or content_bounds.height <= 0:
            return []

        lines = format_text_content(text, content_bounds.width)
        return truncate_lines(lines, content_bounds.height)

    def draw_text(
        self,
        grid: AsciiGrid,
        box: Box,
        content_bounds: CharBounds,
        covered: Sequence[CharBounds] = (),
    ) -> int:
        """
        Write the text of ``box``.

        Cells inside any of ``covered`` (the bounds of nested child boxes)
        are left alone, so a parent's text never paints over its children.

        Returns:
            Number of lines written.
        """
        lines = self.layout(box, content_bounds)
        if not lines:
            return 0

        offset = 0
        if self.vertically_center:
            offset = vertical_center_offset(len(lines), content_bounds.height)

        for index, line in enumerate(lines):
            row = content_bounds.start_row + offset + index
            if row > content_bounds.end_row:
                break
            for col_index, char in enumerate(line[: content_bounds.width]):
                col = content_bounds.start_col + col_index
                if any(bounds.contains(row, col) for bounds in covered):
                    continue
                grid.set_cell(
                    row,
                    col,
                    char,
                    box.z_index,
                    box.id,
                    is_text=True,
                    reason="text",
                )
        return len(lines)

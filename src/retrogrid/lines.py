"""
Connector line renderer.

Lines are straight horizontal or vertical runs. Arrowheads point outward
at whichever end they sit on: the leftmost end of a horizontal line always
gets a left-pointing glyph, whether that end is the line's start or end.
Arrowheads and labels are written one z-index above the line body.
"""

from typing import Iterable, Tuple

from .coordinates import CharCoord, CoordinateMapper
from .glyphs import get_arrow_char, get_line_char
from .grid import AsciiGrid
from .models import ArrowStyle, LabelPosition, Line, LineDirection, OutputMode


class LineRenderer:
    """
    Renders lines into a grid.

    Args:
        mapper: Maps line end points to absolute character coordinates.
        offset_row: Row offset subtracted to get grid indices.
        offset_col: Column offset subtracted to get grid indices.
    """

    def __init__(self, mapper: CoordinateMapper, offset_row: int = 0, offset_col: int = 0):
        self.mapper = mapper
        self.offset_row = offset_row
        self.offset_col = offset_col

    def grid_endpoints(self, line: Line) -> Tuple[CharCoord, CharCoord]:
        start, end = self.mapper.line_endpoints(line)
        return (
            CharCoord(start.row - self.offset_row, start.col - self.offset_col),
            CharCoord(end.row - self.offset_row, end.col - self.offset_col),
        )

    def draw_line(self, grid: AsciiGrid, line: Line) -> bool:
        """
        Draw one line with its arrowheads and label.

        Returns:
            False if the line is hidden or not meant for ASCII output.
        """
        if line.output_mode != OutputMode.ASCII or not line.visible:
            return False

        start, end = self.grid_endpoints(line)
        body = get_line_char(line.direction, line.line_style)
        arrow_z = line.z_index + 1

        if line.direction == LineDirection.HORIZONTAL:
            row = start.row
            grid.draw_horizontal_line(
                row, min(start.col, end.col), max(start.col, end.col), body,
                line.z_index, line.id, None, reason="line",
            )
            start_is_left = start.col <= end.col
            self._draw_arrow(grid, line, row, start.col,
                             "left" if start_is_left else "right", line.start_arrow, arrow_z)
            self._draw_arrow(grid, line, row, end.col,
                             "right" if start_is_left else "left", line.end_arrow, arrow_z)
        else:
            col = start.col
            grid.draw_vertical_line(
                col, min(start.row, end.row), max(start.row, end.row), body,
                line.z_index, line.id, None, reason="line",
            )
            start_is_top = start.row <= end.row
            self._draw_arrow(grid, line, start.row, col,
                             "up" if start_is_top else "down", line.start_arrow, arrow_z)
            self._draw_arrow(grid, line, end.row, col,
                             "down" if start_is_top else "up", line.end_arrow, arrow_z)

        if line.label is not None and line.label.text:
            self._draw_label(grid, line, start, end, arrow_z)

        return True

    def draw_lines(self, grid: AsciiGrid, lines: Iterable[Line]) -> int:
        """Draw lines in ascending z-index order; returns how many were drawn."""
        drawn = 0
        for line in sorted(lines, key=lambda ln: ln.z_index):
            if self.draw_line(grid, line):
                drawn += 1
        return drawn

    def label_anchor(self, line: Line, start: CharCoord, end: CharCoord) -> CharCoord:
        """Grid cell where the first label character goes."""
        text = line.label.text
        position = line.label.position

        if line.direction == LineDirection.HORIZONTAL:
            if position == LabelPosition.START:
                col = start.col + 1
            elif position == LabelPosition.END:
                col = end.col - len(text)
            else:
                col = (min(start.col, end.col) + max(start.col, end.col) - len(text)) // 2
            return CharCoord(row=start.row, col=col)

        if position == LabelPosition.START:
            row = start.row
        elif position == LabelPosition.END:
            row = end.row
        else:
            row = (min(start.row, end.row) + max(start.row, end.row)) // 2
        return CharCoord(row=row, col=start.col + 1)

    def _draw_label(
        self, grid: AsciiGrid, line: Line, start: CharCoord, end: CharCoord, z_index: int
    ) -> None:
        # Characters past the grid edge are dropped by set_cell
        anchor = self.label_anchor(line, start, end)
        for index, char in enumerate(line.label.text):
            grid.set_cell(
                anchor.row, anchor.col + index, char, z_index, line.id,
                is_text=True, reason="label",
            )

    def _draw_arrow(
        self,
        grid: AsciiGrid,
        line: Line,
        row: int,
        col: int,
        direction: str,
        style: ArrowStyle,
        z_index: int,
    ) -> None:
        char = get_arrow_char(direction, style)
        if char is None:
            return
        grid.set_cell(row, col, char, z_index, line.id, reason="arrow")

"""
Junction resolution.

After all borders and connectors are drawn, each border cell is rewritten
to the glyph matching the border cells around it. Where two boxes share
an edge this turns overlapping corners into T-junctions and crosses.

Classification only looks at whether a neighbor is a border cell holding
a box-drawing glyph, and rewriting only changes characters (never flags
or styles). Resolution is therefore independent of scan order and
running it twice gives the same grid.
"""

from dataclasses import dataclass
from typing import List, Optional

from .glyphs import JunctionType, get_dominant_border_style, get_junction_char, is_border_char
from .grid import AsciiGrid, CharCell
from .models import BorderStyle

# (has_top, has_bottom, has_left, has_right) -> junction
_JUNCTIONS = {
    (True, True, True, True): JunctionType.CROSS,
    (True, True, True, False): JunctionType.T_LEFT,
    (True, True, False, True): JunctionType.T_RIGHT,
    (True, False, True, True): JunctionType.T_UP,
    (False, True, True, True): JunctionType.T_DOWN,
    (False, True, False, True): JunctionType.CORNER_TOP_LEFT,
    (False, True, True, False): JunctionType.CORNER_TOP_RIGHT,
    (True, False, False, True): JunctionType.CORNER_BOTTOM_LEFT,
    (True, False, True, False): JunctionType.CORNER_BOTTOM_RIGHT,
    (True, True, False, False): JunctionType.VERTICAL,
    (False, False, True, True): JunctionType.HORIZONTAL,
}

_STRAIGHT = (JunctionType.HORIZONTAL, JunctionType.VERTICAL)


@dataclass
class NeighborAnalysis:
    has_top: bool
    has_bottom: bool
    has_left: bool
    has_right: bool
    top_style: Optional[BorderStyle] = None
    bottom_style: Optional[BorderStyle] = None
    left_style: Optional[BorderStyle] = None
    right_style: Optional[BorderStyle] = None

    @property
    def connection_count(self) -> int:
        return sum((self.has_top, self.has_bottom, self.has_left, self.has_right))

    def connected_styles(self) -> List[Optional[BorderStyle]]:
        """Styles of the neighbors that actually connect."""
        pairs = (
            (self.has_top, self.top_style),
            (self.has_bottom, self.bottom_style),
            (self.has_left, self.left_style),
            (self.has_right, self.right_style),
        )
        return [style for connected, style in pairs if connected]


def _connects(cell: Optional[CharCell]) -> bool:
    return cell is not None and cell.is_border and is_border_char(cell.char)


def _style(cell: Optional[CharCell]) -> Optional[BorderStyle]:
    return cell.border_style if cell is not None else None


class JunctionResolver:
    """Rewrites border cells into corner, T and cross glyphs."""

    def analyze_neighbors(self, grid: AsciiGrid, row: int, col: int) -> NeighborAnalysis:
        top = grid.get_cell(row - 1, col)
        bottom = grid.get_cell(row + 1, col)
        left = grid.get_cell(row, col - 1)
        right = grid.get_cell(row, col + 1)
        return NeighborAnalysis(
            has_top=_connects(top),
            has_bottom=_connects(bottom),
            has_left=_connects(left),
            has_right=_connects(right),
            top_style=_style(top),
            bottom_style=_style(bottom),
            left_style=_style(left),
            right_style=_style(right),
        )

    def determine_junction_type(self, neighbors: NeighborAnalysis) -> JunctionType:
        """
        Classify a connection pattern.

        Fewer than two connections leave the cell alone (NONE).
        """
        if neighbors.connection_count <= 1:
            return JunctionType.NONE
        key = (
            neighbors.has_top,
            neighbors.has_bottom,
            neighbors.has_left,
            neighbors.has_right,
        )
        return _JUNCTIONS.get(key, JunctionType.NONE)

    def resolve_junction(self, grid: AsciiGrid, row: int, col: int) -> bool:
        """
        Rewrite one border-glyph cell to match its neighbors.

        Straight runs keep the cell's own style; corners, T-junctions and
        crosses take the dominant style among the cell and the neighbors
        that connect to it.

        Returns:
            True if the character changed.
        """
        cell = grid.get_cell(row, col)
        if cell is None or not _connects(cell):
            return False

        neighbors = self.analyze_neighbors(grid, row, col)
        junction = self.determine_junction_type(neighbors)
        if junction == JunctionType.NONE:
            return False

        if junction in _STRAIGHT:
            style = get_dominant_border_style([cell.border_style])
        else:
            style = get_dominant_border_style(
                [cell.border_style] + neighbors.connected_styles()
            )

        char = get_junction_char(junction, style)
        if char == cell.char:
            return False
        grid.force_set_cell(row, col, char)
        return True

    def resolve_all(self, grid: AsciiGrid) -> int:
        """
        Resolve every cell, row-major.

        Returns:
            Number of cells whose character changed.
        """
        return self.resolve_region(grid, 0, 0, grid.height - 1, grid.width - 1)

    def resolve_region(
        self, grid: AsciiGrid, start_row: int, start_col: int, end_row: int, end_col: int
    ) -> int:
        changed = 0
        for row in range(start_row, end_row + 1):
            for col in range(start_col, end_col + 1):
                if self.resolve_junction(grid, row, col):
                    changed += 1
        return changed


def resolve_all_junctions(grid: AsciiGrid) -> int:
    return JunctionResolver().resolve_all(grid)

"""
Character grid: the cell buffer every renderer draws into.

Occlusion rule: a write lands only if its z-index is greater than or equal
to the z-index already stored in the cell. Equal z-indices therefore let
the later write win. Empty cells start at z-index -1 so any write with a
z-index of 0 or more is accepted.
"""

from dataclasses import dataclass
from typing import List, Optional

from .constants import MAX_LINE_LENGTH, MAX_OUTPUT_LINES
from .models import BorderStyle
from .tracer import CellWrite, RenderTrace

EMPTY_Z_INDEX = -1


@dataclass
class CharCell:
    """One monospace cell."""

    char: str = " "
    z_index: int = EMPTY_Z_INDEX
    owner_id: Optional[str] = None
    border_style: Optional[BorderStyle] = None
    is_border: bool = False
    is_text: bool = False


@dataclass
class GridValidation:
    valid: bool
    warnings: List[str]


class AsciiGrid:
    """
    A fixed-size, row-major matrix of CharCell.

    The shape never changes after construction; cells are mutated in place.
    Coordinates are (row, col) and out-of-range writes are dropped.
    """

    def __init__(self, width: int, height: int, trace: Optional[RenderTrace] = None):
        self.width = max(0, width)
        self.height = max(0, height)
        self.cells: List[List[CharCell]] = [
            [CharCell() for _ in range(self.width)] for _ in range(self.height)
        ]
        self.trace = trace

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def get_cell(self, row: int, col: int) -> Optional[CharCell]:
        if not self.in_bounds(row, col):
            return None
        return self.cells[row][col]

    def get_char(self, row: int, col: int) -> str:
        """Character at (row, col), or a space outside the grid."""
        cell = self.get_cell(row, col)
        return cell.char if cell is not None else " "

    def set_cell(
        self,
        row: int,
        col: int,
        char: str,
        z_index: int,
        owner_id: Optional[str] = None,
        border_style: Optional[BorderStyle] = None,
        is_border: bool = False,
        is_text: bool = False,
        reason: str = "",
    ) -> bool:
        """
        Write a cell if the occlusion rule allows it.

        The write replaces the whole cell when ``z_index`` is greater than
        or equal to the stored z-index (ties favor the later write).

        Returns:
            True if the cell was written, False if it was out of bounds or
            occluded by a higher z-index.
        """
        if not self.in_bounds(row, col):
            return False

        current = self.cells[row][col]
        if z_index < current.z_index:
            return False

        self.cells[row][col] = CharCell(
            char=char,
            z_index=z_index,
            owner_id=owner_id,
            border_style=border_style,
            is_border=is_border,
            is_text=is_text,
        )
        self._record(row, col, char, current.char, z_index, owner_id, reason,
                     is_border, is_text)
        return True

    def force_set_cell(self, row: int, col: int, char: str, reason: str = "junction") -> bool:
        """
        Replace the character of a cell without the z-index check.

        Only the character changes; z-index, owner, style and flags are
        kept, so the occlusion order established by earlier writes holds.
        """
        if not self.in_bounds(row, col):
            return False
        cell = self.cells[row][col]
        previous = cell.char
        cell.char = char
        self._record(row, col, char, previous, cell.z_index, cell.owner_id, reason,
                     cell.is_border, cell.is_text)
        return True

    def fill_region(
        self,
        start_row: int,
        start_col: int,
        end_row: int,
        end_col: int,
        char: str,
        z_index: int,
        owner_id: Optional[str] = None,
        border_style: Optional[BorderStyle] = None,
        is_border: bool = False,
        is_text: bool = False,
    ) -> None:
        """Write ``char`` into every cell of the inclusive rectangle."""
        for row in range(start_row, end_row + 1):
            for col in range(start_col, end_col + 1):
                self.set_cell(row, col, char, z_index, owner_id, border_style,
                              is_border, is_text)

    def draw_horizontal_line(
        self,
        row: int,
        start_col: int,
        end_col: int,
        char: str,
        z_index: int,
        owner_id: Optional[str] = None,
        border_style: Optional[BorderStyle] = None,
        reason: str = "border",
    ) -> None:
        """Draw border cells from start_col to end_col inclusive."""
        for col in range(start_col, end_col + 1):
            self.set_cell(row, col, char, z_index, owner_id, border_style,
                          is_border=True, reason=reason)

    def draw_vertical_line(
        self,
        col: int,
        start_row: int,
        end_row: int,
        char: str,
        z_index: int,
        owner_id: Optional[str] = None,
        border_style: Optional[BorderStyle] = None,
        reason: str = "border",
    ) -> None:
        """Draw border cells from start_row to end_row inclusive."""
        for row in range(start_row, end_row + 1):
            self.set_cell(row, col, char, z_index, owner_id, border_style,
                          is_border=True, reason=reason)

    def rows(self) -> List[str]:
        """Each row as a string, untrimmed."""
        return ["".join(cell.char for cell in row) for row in self.cells]

    def to_string(self) -> str:
        """
        Serialize the grid.

        Trailing spaces are stripped from every row and blank rows are
        dropped from the bottom. Blank rows at the top are kept so vertical
        position inside an artboard survives.
        """
        lines = [row.rstrip() for row in self.rows()]

        while lines and not lines[-1].strip():
            lines.pop()

        return "\n".join(lines)

    def count_characters(self) -> int:
        """Number of non-space cells."""
        return sum(1 for row in self.cells for cell in row if cell.char != " ")

    def count_lines(self) -> int:
        """Height of the output after trailing blank rows are trimmed."""
        for index in range(self.height - 1, -1, -1):
            if any(cell.char != " " for cell in self.cells[index]):
                return index + 1
        return 0

    def validate_size(
        self, max_lines: int = MAX_OUTPUT_LINES, max_line_length: int = MAX_LINE_LENGTH
    ) -> GridValidation:
        """Flag grids too tall or too wide. Never raises or truncates."""
        warnings: List[str] = []
        if self.height > max_lines:
            warnings.append(
                f"Grid height ({self.height}) exceeds maximum ({max_lines})"
            )
        if self.width > max_line_length:
            warnings.append(
                f"Grid width ({self.width}) exceeds maximum ({max_line_length})"
            )
        return GridValidation(valid=not warnings, warnings=warnings)

    def _record(
        self,
        row: int,
        col: int,
        char: str,
        previous: str,
        z_index: int,
        owner_id: Optional[str],
        reason: str,
        is_border: bool,
        is_text: bool,
    ) -> None:
        if self.trace is None:
            return
        if not reason:
            reason = "text" if is_text else ("border" if is_border else "char")
        self.trace.add_write(
            CellWrite(row, col, char, previous, z_index, owner_id, reason)
        )


def create_grid(width: int, height: int) -> AsciiGrid:
    """Allocate ``height`` rows of ``width`` empty cells."""
    return AsciiGrid(width, height)

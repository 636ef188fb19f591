"""
Debug utilities for retrogrid.

Tools for troubleshooting a rendered diagram:
- GridInspector: query a grid by character, row, column or region
- visual_diff: compare two text diagrams character by character

Usage:
    >>> generator = AsciiGenerator()
    >>> output = generator.generate(boxes, debug=True)
    >>> print(generator.get_trace().summary())

    >>> from retrogrid.debug import visual_diff
    >>> print(visual_diff(expected_output, output.content))
"""

from typing import List, Optional, Set, Tuple

from .grid import AsciiGrid


class GridInspector:
    """
    Read-only queries over an AsciiGrid.

    Positions are (row, col) grid indices, matching AsciiGrid.
    """

    def __init__(self, grid: AsciiGrid):
        self._grid = grid

    def find_char(self, char: str) -> List[Tuple[int, int]]:
        """All (row, col) positions holding ``char``."""
        return [
            (row, col)
            for row in range(self._grid.height)
            for col in range(self._grid.width)
            if self._grid.get_char(row, col) == char
        ]

    def find_chars(self, chars: str) -> List[Tuple[int, int, str]]:
        """
        All positions holding any character of ``chars``.

        Returns:
            List of (row, col, char) tuples in row-major order.
        """
        wanted = set(chars)
        found = []
        for row in range(self._grid.height):
            for col in range(self._grid.width):
                char = self._grid.get_char(row, col)
                if char in wanted:
                    found.append((row, col, char))
        return found

    def get_row(self, row: int) -> str:
        if 0 <= row < self._grid.height:
            return "".join(cell.char for cell in self._grid.cells[row])
        return ""

    def get_column(self, col: int) -> str:
        if 0 <= col < self._grid.width:
            return "".join(self._grid.get_char(row, col) for row in range(self._grid.height))
        return ""

    def get_region(self, row: int, col: int, height: int, width: int) -> str:
        """Rectangle starting at (row, col) as newline-joined rows."""
        return "\n".join(
            "".join(self._grid.get_char(r, c) for c in range(col, col + width))
            for r in range(row, row + height)
        )

    def count_char(self, char: str) -> int:
        return len(self.find_char(char))

    def owner_at(self, row: int, col: int) -> Optional[str]:
        """Id of the box or line that last wrote the cell."""
        cell = self._grid.get_cell(row, col)
        return cell.owner_id if cell is not None else None


def visual_diff(expected: str, actual: str, context_lines: int = 2) -> str:
    """
    Character-level diff of two diagrams.

    Differing rows are shown as an E/A pair with a caret marker under each
    differing column; ``context_lines`` matching rows surround each one.

    Example:
        >>> print(visual_diff("┌─┐\\n│A│\\n└─┘", "┌─┐\\n│B│\\n└─┘"))
    """
    expected_rows = expected.split("\n")
    actual_rows = actual.split("\n")
    total = max(len(expected_rows), len(actual_rows))

    def row_at(rows: List[str], index: int) -> str:
        return rows[index] if index < len(rows) else ""

    differing = [
        i for i in range(total) if row_at(expected_rows, i) != row_at(actual_rows, i)
    ]

    output = ["=" * 60, "VISUAL DIFF", "=" * 60]
    if not differing:
        output.append("No differences found.")
        return "\n".join(output)

    output.append(f"Found {len(differing)} differing line(s)")
    output.append("")

    shown: Set[int] = set()
    for index in differing:
        shown.update(range(max(0, index - context_lines), min(total, index + context_lines + 1)))

    previous = -2
    for index in sorted(shown):
        if index > previous + 1:
            output.append("...")
        previous = index

        exp_row = row_at(expected_rows, index)
        act_row = row_at(actual_rows, index)
        if exp_row == act_row:
            output.append(f"{index:3d}:   {act_row}")
            continue

        output.append(f"{index:3d}: E |{exp_row}|")
        output.append(f"     A |{act_row}|")
        width = max(len(exp_row), len(act_row))
        columns = [
            col for col in range(width) if exp_row[col:col + 1] != act_row[col:col + 1]
        ]
        marker = [" "] * (width + 8)
        for col in columns:
            marker[col + 8] = "^"
        output.append("".join(marker).rstrip())
        suffix = "..." if len(columns) > 5 else ""
        output.append(f"     Diff at col(s): {columns[:5]}{suffix}")

    return "\n".join(output)

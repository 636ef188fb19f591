"""Tests for the character grid."""

from retrogrid.grid import EMPTY_Z_INDEX, AsciiGrid, CharCell, create_grid
from retrogrid.models import BorderStyle
from retrogrid.tracer import RenderTrace


class TestGridCreation:
    """Tests for grid allocation."""

    def test_dimensions(self):
        """Test the grid has the requested shape."""
        grid = create_grid(5, 3)
        assert grid.width == 5
        assert grid.height == 3
        assert len(grid.cells) == 3
        assert all(len(row) == 5 for row in grid.cells)

    def test_cells_start_empty(self):
        """Test every cell starts blank with z-index -1."""
        grid = create_grid(2, 2)
        cell = grid.get_cell(1, 1)
        assert cell == CharCell()
        assert cell.z_index == EMPTY_Z_INDEX

    def test_negative_size_clamped(self):
        """Test negative sizes produce an empty grid."""
        grid = AsciiGrid(-1, -4)
        assert grid.width == 0
        assert grid.height == 0
        assert grid.to_string() == ""


class TestSetCell:
    """Tests for bounded, z-ordered writes."""

    def test_write(self):
        """Test a basic write stores all attributes."""
        grid = create_grid(3, 3)
        assert grid.set_cell(1, 2, "X", 0, "box", BorderStyle.DOUBLE, is_border=True)
        cell = grid.get_cell(1, 2)
        assert cell.char == "X"
        assert cell.owner_id == "box"
        assert cell.border_style == BorderStyle.DOUBLE
        assert cell.is_border

    def test_out_of_bounds_dropped(self):
        """Test writes outside the grid are ignored."""
        grid = create_grid(3, 3)
        assert not grid.set_cell(-1, 0, "X", 0)
        assert not grid.set_cell(0, 3, "X", 0)
        assert grid.get_cell(3, 0) is None
        assert grid.get_char(9, 9) == " "

    def test_higher_z_wins_regardless_of_order(self):
        """Test occlusion: the higher z-index write always ends up visible."""
        first = create_grid(1, 1)
        first.set_cell(0, 0, "A", 1)
        first.set_cell(0, 0, "B", 5)

        second = create_grid(1, 1)
        second.set_cell(0, 0, "B", 5)
        assert not second.set_cell(0, 0, "A", 1)

        assert first.get_char(0, 0) == "B"
        assert second.get_char(0, 0) == "B"

    def test_equal_z_later_write_wins(self):
        """Test ties favor the later write."""
        grid = create_grid(1, 1)
        grid.set_cell(0, 0, "A", 2)
        grid.set_cell(0, 0, "B", 2)
        assert grid.get_char(0, 0) == "B"

    def test_write_replaces_flags(self):
        """Test a text write clears the border flag."""
        grid = create_grid(1, 1)
        grid.set_cell(0, 0, "│", 0, is_border=True)
        grid.set_cell(0, 0, "x", 0, is_text=True)
        cell = grid.get_cell(0, 0)
        assert cell.is_text
        assert not cell.is_border


class TestForceSetCell:
    """Tests for junction rewrites."""

    def test_only_char_changes(self):
        """Test force_set keeps z-index, owner and flags."""
        grid = create_grid(1, 1)
        grid.set_cell(0, 0, "─", 4, "box", BorderStyle.SINGLE, is_border=True)
        assert grid.force_set_cell(0, 0, "┬")
        cell = grid.get_cell(0, 0)
        assert cell.char == "┬"
        assert cell.z_index == 4
        assert cell.owner_id == "box"
        assert cell.is_border

    def test_out_of_bounds(self):
        """Test force_set outside the grid does nothing."""
        assert not create_grid(1, 1).force_set_cell(2, 2, "┼")


class TestPrimitives:
    """Tests for line and region primitives."""

    def test_horizontal_line(self):
        """Test an inclusive horizontal run of border cells."""
        grid = create_grid(5, 1)
        grid.draw_horizontal_line(0, 1, 3, "─", 0, "a", BorderStyle.SINGLE)
        assert grid.rows() == [" ─── "]
        assert grid.get_cell(0, 2).is_border

    def test_vertical_line(self):
        """Test an inclusive vertical run."""
        grid = create_grid(1, 3)
        grid.draw_vertical_line(0, 0, 2, "│", 0)
        assert grid.rows() == ["│", "│", "│"]

    def test_fill_region(self):
        """Test a rectangle fill."""
        grid = create_grid(4, 3)
        grid.fill_region(0, 1, 1, 2, "#", 0)
        assert grid.rows() == [" ## ", " ## ", "    "]


class TestSerialization:
    """Tests for to_string and the metrics."""

    def test_trailing_whitespace_trimmed(self):
        """Test trailing spaces and bottom blank rows are removed."""
        grid = create_grid(5, 4)
        grid.set_cell(1, 1, "A", 0)
        assert grid.to_string() == "\n A"

    def test_leading_blank_rows_kept(self):
        """Test blank rows above content survive."""
        grid = create_grid(2, 3)
        grid.set_cell(2, 0, "B", 0)
        assert grid.to_string().split("\n") == ["", "", "B"]

    def test_counts(self):
        """Test character and line counts."""
        grid = create_grid(5, 4)
        grid.set_cell(0, 0, "A", 0)
        grid.set_cell(2, 3, "B", 0)
        assert grid.count_characters() == 2
        assert grid.count_lines() == 3

    def test_empty_counts(self):
        """Test an empty grid counts nothing."""
        grid = create_grid(3, 3)
        assert grid.count_characters() == 0
        assert grid.count_lines() == 0


class TestValidateSize:
    """Tests for output size warnings."""

    def test_within_limits(self):
        """Test a small grid is valid."""
        result = create_grid(10, 10).validate_size()
        assert result.valid
        assert result.warnings == []

    def test_too_tall_and_wide(self):
        """Test both limits are reported without raising."""
        result = create_grid(11, 6).validate_size(max_lines=5, max_line_length=10)
        assert not result.valid
        assert len(result.warnings) == 2
        assert "height" in result.warnings[0]
        assert "width" in result.warnings[1]


class TestTracing:
    """Tests for write recording."""

    def test_writes_recorded(self):
        """Test accepted writes land in the trace."""
        trace = RenderTrace()
        grid = AsciiGrid(3, 1, trace)
        grid.set_cell(0, 0, "A", 1, "box", reason="text")
        grid.set_cell(0, 0, "B", 0)
        grid.force_set_cell(0, 0, "C")
        assert [w.char for w in trace.writes] == ["A", "C"]
        assert trace.writes[1].previous_char == "A"
        assert trace.writes[1].reason == "junction"

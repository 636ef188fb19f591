"""Tests for junction resolution."""

from retrogrid.coordinates import CharBounds
from retrogrid.glyphs import JunctionType
from retrogrid.grid import create_grid
from retrogrid.junctions import JunctionResolver, NeighborAnalysis, resolve_all_junctions
from retrogrid.models import BorderStyle, Box
from retrogrid.renderer import BoxRenderer


def draw(grid, box_id, top, left, bottom, right, style=BorderStyle.SINGLE, z=0):
    box = Box(id=box_id, x=0, y=0, width=1, height=1, border_style=style, z_index=z)
    BoxRenderer().draw_box(grid, box, CharBounds.from_corners(top, left, bottom, right))


class TestDetermineJunctionType:
    """Tests for neighbor pattern classification."""

    def setup_method(self):
        self.resolver = JunctionResolver()

    def classify(self, top, bottom, left, right):
        return self.resolver.determine_junction_type(
            NeighborAnalysis(top, bottom, left, right)
        )

    def test_cross(self):
        """Test four connections."""
        assert self.classify(True, True, True, True) == JunctionType.CROSS

    def test_tees(self):
        """Test the four T shapes."""
        assert self.classify(False, True, True, True) == JunctionType.T_DOWN
        assert self.classify(True, False, True, True) == JunctionType.T_UP
        assert self.classify(True, True, False, True) == JunctionType.T_RIGHT
        assert self.classify(True, True, True, False) == JunctionType.T_LEFT

    def test_corners(self):
        """Test the four corners."""
        assert self.classify(False, True, False, True) == JunctionType.CORNER_TOP_LEFT
        assert self.classify(False, True, True, False) == JunctionType.CORNER_TOP_RIGHT
        assert self.classify(True, False, False, True) == JunctionType.CORNER_BOTTOM_LEFT
        assert self.classify(True, False, True, False) == JunctionType.CORNER_BOTTOM_RIGHT

    def test_straight(self):
        """Test straight runs."""
        assert self.classify(True, True, False, False) == JunctionType.VERTICAL
        assert self.classify(False, False, True, True) == JunctionType.HORIZONTAL

    def test_fewer_than_two(self):
        """Test isolated cells and line ends are left alone."""
        assert self.classify(False, False, False, False) == JunctionType.NONE
        assert self.classify(True, False, False, False) == JunctionType.NONE


class TestResolveGrid:
    """Tests for whole-grid resolution."""

    def test_lone_box_unchanged(self):
        """Test a single box needs no rewrites."""
        grid = create_grid(5, 3)
        draw(grid, "a", 0, 0, 2, 4)
        before = grid.rows()
        assert resolve_all_junctions(grid) == 0
        assert grid.rows() == before

    def test_shared_vertical_edge(self):
        """Test two boxes side by side get T-junctions on the shared edge."""
        grid = create_grid(9, 3)
        draw(grid, "left", 0, 0, 2, 4)
        draw(grid, "right", 0, 4, 2, 8)
        resolve_all_junctions(grid)
        assert grid.rows() == ["┌───┬───┐", "│   │   │", "└───┴───┘"]

    def test_shared_horizontal_edge(self):
        """Test stacked boxes get side tees."""
        grid = create_grid(5, 5)
        draw(grid, "top", 0, 0, 2, 4)
        draw(grid, "bottom", 2, 0, 4, 4)
        resolve_all_junctions(grid)
        assert grid.rows()[2] == "├───┤"

    def test_four_boxes_cross(self):
        """Test the common corner of four boxes becomes a cross."""
        grid = create_grid(5, 5)
        draw(grid, "a", 0, 0, 2, 2)
        draw(grid, "b", 0, 2, 2, 4)
        draw(grid, "c", 2, 0, 4, 2)
        draw(grid, "d", 2, 2, 4, 4)
        resolve_all_junctions(grid)
        assert grid.rows() == ["┌─┬─┐", "│ │ │", "├─┼─┤", "│ │ │", "└─┴─┘"]

    def test_double_dominates(self):
        """Test a double border wins at a mixed junction."""
        grid = create_grid(9, 3)
        draw(grid, "left", 0, 0, 2, 4, BorderStyle.SINGLE)
        draw(grid, "right", 0, 4, 2, 8, BorderStyle.DOUBLE)
        resolve_all_junctions(grid)
        assert grid.get_char(0, 4) == "╦"
        assert grid.get_char(2, 4) == "╩"
        # straight runs keep their own style
        assert grid.get_char(0, 2) == "─"

    def test_idempotent(self):
        """Test resolving twice gives the same grid."""
        grid = create_grid(9, 5)
        draw(grid, "a", 0, 0, 2, 4, BorderStyle.DASHED)
        draw(grid, "b", 0, 4, 2, 8, BorderStyle.DOUBLE)
        draw(grid, "c", 2, 0, 4, 8)
        resolve_all_junctions(grid)
        once = grid.rows()
        assert resolve_all_junctions(grid) == 0
        assert grid.rows() == once

    def test_text_cells_untouched(self):
        """Test non-border cells are never rewritten."""
        grid = create_grid(3, 3)
        grid.set_cell(1, 1, "─", 0, is_text=True)
        grid.set_cell(1, 0, "─", 0, is_border=True)
        grid.set_cell(1, 2, "─", 0, is_border=True)
        grid.set_cell(0, 1, "│", 0, is_border=True)
        resolve_all_junctions(grid)
        assert grid.get_char(1, 1) == "─"

    def test_resolve_region(self):
        """Test resolution limited to a region."""
        grid = create_grid(9, 3)
        draw(grid, "left", 0, 0, 2, 4)
        draw(grid, "right", 0, 4, 2, 8)
        JunctionResolver().resolve_region(grid, 0, 0, 0, 8)
        assert grid.get_char(0, 4) == "┬"
        assert grid.get_char(2, 4) == "└"

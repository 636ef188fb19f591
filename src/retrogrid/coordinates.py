"""
Pixel to character coordinate mapping.

Boxes are mapped with floor division: a box covers the cells from
``floor(x / ratio)`` to ``floor((x + width) / ratio)`` inclusive, so two
boxes that touch in pixel space share a border row or column. Line end
points are rounded half up instead, which snaps a connector drawn along a
border onto that border.
"""

import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from .constants import (
    CHAR_HEIGHT_RATIO,
    CHAR_WIDTH_RATIO,
    GRID_MARGIN,
    MIN_CHAR_RATIO,
    MIN_RENDERABLE_CHARS,
    TEXT_PADDING_CHARS,
)
from .hierarchy import BoxHierarchy
from .models import Box, Line


@dataclass(frozen=True)
class CharRatios:
    """Pixels per character column (width) and row (height)."""

    width: float = CHAR_WIDTH_RATIO
    height: float = CHAR_HEIGHT_RATIO


DEFAULT_RATIOS = CharRatios()


@dataclass(frozen=True)
class CharCoord:
    row: int
    col: int


@dataclass(frozen=True)
class CharBounds:
    """
    Inclusive character-space rectangle.

    ``width`` and ``height`` are cell counts and never negative.
    """

    start_row: int
    start_col: int
    end_row: int
    end_col: int
    width: int
    height: int

    @classmethod
    def from_corners(
        cls, start_row: int, start_col: int, end_row: int, end_col: int
    ) -> "CharBounds":
        return cls(
            start_row=start_row,
            start_col=start_col,
            end_row=end_row,
            end_col=end_col,
            width=max(0, end_col - start_col + 1),
            height=max(0, end_row - start_row + 1),
        )

    def offset(self, row_offset: int, col_offset: int) -> "CharBounds":
        """The same rectangle shifted into grid-local indices."""
        return CharBounds(
            start_row=self.start_row - row_offset,
            start_col=self.start_col - col_offset,
            end_row=self.end_row - row_offset,
            end_col=self.end_col - col_offset,
            width=self.width,
            height=self.height,
        )

    def overlap(self, other: "CharBounds") -> Tuple[int, int]:
        """Cell counts (width, height) of the intersection, 0 when disjoint."""
        width = min(self.end_col, other.end_col) - max(self.start_col, other.start_col) + 1
        height = min(self.end_row, other.end_row) - max(self.start_row, other.start_row) + 1
        return max(0, width), max(0, height)

    def contains(self, row: int, col: int) -> bool:
        return self.start_row <= row <= self.end_row and self.start_col <= col <= self.end_col


@dataclass(frozen=True)
class CanvasBounds:
    min_col: int = 0
    min_row: int = 0
    max_col: int = 0
    max_row: int = 0


@dataclass(frozen=True)
class GridDimensions:
    """Grid size plus the offset subtracted from absolute character coordinates."""

    width: int = 0
    height: int = 0
    offset_col: int = 0
    offset_row: int = 0


def pixel_to_char_col(px: float, char_width_ratio: float = CHAR_WIDTH_RATIO) -> int:
    return math.floor(px / char_width_ratio)


def pixel_to_char_row(py: float, char_height_ratio: float = CHAR_HEIGHT_RATIO) -> int:
    return math.floor(py / char_height_ratio)


def pixel_to_char(
    px: float,
    py: float,
    char_width_ratio: float = CHAR_WIDTH_RATIO,
    char_height_ratio: float = CHAR_HEIGHT_RATIO,
) -> CharCoord:
    return CharCoord(
        row=pixel_to_char_row(py, char_height_ratio),
        col=pixel_to_char_col(px, char_width_ratio),
    )


def char_to_pixel(
    coord: CharCoord,
    char_width_ratio: float = CHAR_WIDTH_RATIO,
    char_height_ratio: float = CHAR_HEIGHT_RATIO,
) -> Tuple[float, float]:
    """Pixel (x, y) of the top-left corner of a cell."""
    return coord.col * char_width_ratio, coord.row * char_height_ratio


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _adapt_ratio(size: float, default: float) -> float:
    if size / default >= MIN_RENDERABLE_CHARS:
        return default
    return max(MIN_CHAR_RATIO, min(default, size / MIN_RENDERABLE_CHARS))


def calculate_adaptive_ratios(
    boxes: Iterable[Box], default_ratios: CharRatios = DEFAULT_RATIOS
) -> CharRatios:
    """
    Shrink the ratios so the smallest visible box still spans 3 characters.

    Each axis is handled on its own, using the smallest width and the
    smallest height among visible boxes. A ratio is never raised above its
    default and never drops below one pixel per character.
    """
    visible = [box for box in boxes if box.visible]
    if not visible:
        return default_ratios

    min_width = min(box.width for box in visible)
    min_height = min(box.height for box in visible)

    return CharRatios(
        width=_adapt_ratio(min_width, default_ratios.width),
        height=_adapt_ratio(min_height, default_ratios.height),
    )


class CoordinateMapper:
    """
    Maps boxes and lines onto character space.

    Args:
        hierarchy: Parent/child relations used for absolute positions.
        ratios: Pixel-per-character ratios for this generation.
        text_padding: Blank cells between a border and the text region.
    """

    def __init__(
        self,
        hierarchy: BoxHierarchy,
        ratios: CharRatios = DEFAULT_RATIOS,
        text_padding: int = TEXT_PADDING_CHARS,
    ):
        self.hierarchy = hierarchy
        self.ratios = ratios
        self.text_padding = text_padding

    def box_char_bounds(self, box: Box) -> CharBounds:
        x, y = self.hierarchy.absolute_position(box, self.ratios.width, self.ratios.height)
        return CharBounds.from_corners(
            start_row=pixel_to_char_row(y, self.ratios.height),
            start_col=pixel_to_char_col(x, self.ratios.width),
            end_row=pixel_to_char_row(y + box.height, self.ratios.height),
            end_col=pixel_to_char_col(x + box.width, self.ratios.width),
        )

    def box_content_bounds(self, box: Box) -> CharBounds:
        """Writable interior: the full bounds inset by border and text padding."""
        bounds = self.box_char_bounds(box)
        inset = 1 + self.text_padding
        return CharBounds(
            start_row=bounds.start_row + inset,
            start_col=bounds.start_col + inset,
            end_row=bounds.end_row - inset,
            end_col=bounds.end_col - inset,
            width=max(0, bounds.width - 2 * inset),
            height=max(0, bounds.height - 2 * inset),
        )

    def line_endpoints(self, line: Line) -> Tuple[CharCoord, CharCoord]:
        """Absolute character coordinates of both ends of a line."""
        origin_x, origin_y = 0.0, 0.0
        if line.parent_id is not None and line.parent_id in self.hierarchy.boxes:
            parent = self.hierarchy.boxes[line.parent_id]
            origin_x, origin_y = self.hierarchy.content_origin(
                parent, self.ratios.width, self.ratios.height
            )

        def to_char(px: float, py: float) -> CharCoord:
            return CharCoord(
                row=round_half_up((origin_y + py) / self.ratios.height),
                col=round_half_up((origin_x + px) / self.ratios.width),
            )

        return (
            to_char(line.start_x, line.start_y),
            to_char(line.end_x, line.end_y),
        )

    def canvas_bounds(
        self,
        boxes: Sequence[Box],
        lines: Sequence[Line] = (),
        include_origin: bool = False,
    ) -> CanvasBounds:
        """
        Character extent of everything that will be drawn.

        Returns a zeroed rectangle when there is nothing to measure.
        """
        cols: List[int] = []
        rows: List[int] = []

        for box in boxes:
            bounds = self.box_char_bounds(box)
            cols.extend((bounds.start_col, bounds.end_col))
            rows.extend((bounds.start_row, bounds.end_row))

        for line in lines:
            for coord in self.line_endpoints(line):
                cols.append(coord.col)
                rows.append(coord.row)

        if not cols:
            return CanvasBounds()

        if include_origin:
            cols.append(0)
            rows.append(0)

        return CanvasBounds(
            min_col=min(cols), min_row=min(rows), max_col=max(cols), max_row=max(rows)
        )

    def grid_dimensions(
        self,
        boxes: Sequence[Box],
        lines: Sequence[Line] = (),
        include_origin: bool = False,
    ) -> GridDimensions:
        """
        Grid size with one character of margin on each side.

        The offset maps an absolute character coordinate to a grid index:
        ``grid_col = col - offset_col``.
        """
        if not boxes and not lines:
            return GridDimensions()

        bounds = self.canvas_bounds(boxes, lines, include_origin)
        margin = GRID_MARGIN // 2
        return GridDimensions(
            width=bounds.max_col - bounds.min_col + 1 + GRID_MARGIN,
            height=bounds.max_row - bounds.min_row + 1 + GRID_MARGIN,
            offset_col=bounds.min_col - margin,
            offset_row=bounds.min_row - margin,
        )


def _mapper(all_boxes: Union[BoxHierarchy, Iterable[Box]], ratios: CharRatios) -> CoordinateMapper:
    hierarchy = all_boxes if isinstance(all_boxes, BoxHierarchy) else BoxHierarchy(all_boxes)
    return CoordinateMapper(hierarchy, ratios)


def get_box_char_bounds(
    box: Box,
    all_boxes: Union[BoxHierarchy, Iterable[Box]],
    ratios: CharRatios = DEFAULT_RATIOS,
) -> CharBounds:
    return _mapper(all_boxes, ratios).box_char_bounds(box)


def get_box_content_bounds(
    box: Box,
    all_boxes: Union[BoxHierarchy, Iterable[Box]],
    ratios: CharRatios = DEFAULT_RATIOS,
    text_padding: int = TEXT_PADDING_CHARS,
) -> CharBounds:
    mapper = _mapper(all_boxes, ratios)
    mapper.text_padding = text_padding
    return mapper.box_content_bounds(box)


def calculate_canvas_bounds(
    boxes: Sequence[Box], ratios: CharRatios = DEFAULT_RATIOS
) -> CanvasBounds:
    return _mapper(boxes, ratios).canvas_bounds(boxes)


def calculate_grid_dimensions(
    boxes: Sequence[Box],
    ratios: CharRatios = DEFAULT_RATIOS,
    lines: Sequence[Line] = (),
    all_boxes: Optional[Iterable[Box]] = None,
) -> GridDimensions:
    return _mapper(all_boxes if all_boxes is not None else boxes, ratios).grid_dimensions(
        boxes, lines
    )

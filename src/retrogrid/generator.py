"""
Main ASCII generator module.

Combines coordinate mapping, box and line rendering, junction resolution
and text layout to turn a set of boxes and lines into a text diagram.

Pipeline:
    1. Filter boxes and lines to the requested artboard
    2. Pick pixel-per-character ratios (adaptive to the smallest box)
    3. Size the grid from the character bounds of everything drawn
    4. Draw box borders in ascending z-index
    5. Draw lines in ascending z-index
    6. Resolve border junctions once over the whole grid
    7. Draw box text
    8. Serialize and collect counts and warnings

Geometry problems never raise: boxes too small to draw are skipped and
reported in ``AsciiOutput.warnings``.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, NamedTuple, Optional, Sequence

from .constants import (
    CHAR_HEIGHT_RATIO,
    CHAR_WIDTH_RATIO,
    MAX_NESTING_DEPTH,
    MIN_RENDERABLE_CHARS,
    NO_ARTBOARDS_MESSAGE,
    SCALE_PRESETS,
    TEXT_PADDING_CHARS,
)
from .coordinates import CharBounds, CharRatios, CoordinateMapper, calculate_adaptive_ratios
from .grid import AsciiGrid
from .hierarchy import BoxHierarchy
from .junctions import JunctionResolver
from .lines import LineRenderer
from .models import Artboard, Box, Line, OutputMode
from .renderer import BoxRenderer, TextRenderer
from .tracer import RenderTrace

logger = logging.getLogger(__name__)


@dataclass
class AsciiGenerationOptions:
    """
    Options for one generation call.

    Attributes:
        char_width_ratio: Pixels per character column (None for the default).
        char_height_ratio: Pixels per character row (None for the default).
        min_box_chars_width: Narrowest box drawn, in cells (never below 3).
        min_box_chars_height: Shortest box drawn, in cells (never below 3).
        include_metadata: Attach ratios, offsets and box ids to the output.
        show_overlap_warnings: Warn about sibling boxes that overlap.
        adaptive_ratios: Shrink ratios so the smallest box stays drawable.
        text_padding_chars: Blank cells between a border and its text.
        vertically_center_text: Center text vertically in its box.
    """

    char_width_ratio: Optional[float] = None
    char_height_ratio: Optional[float] = None
    min_box_chars_width: int = MIN_RENDERABLE_CHARS
    min_box_chars_height: int = MIN_RENDERABLE_CHARS
    include_metadata: bool = False
    show_overlap_warnings: bool = False
    adaptive_ratios: bool = True
    text_padding_chars: int = TEXT_PADDING_CHARS
    vertically_center_text: bool = False

    @classmethod
    def from_scale(cls, scale: str, **kwargs: Any) -> "AsciiGenerationOptions":
        """Options for a named preview scale: compact, normal or spacious."""
        if scale not in SCALE_PRESETS:
            raise ValueError(
                f"Unknown scale {scale!r} (expected one of: {', '.join(SCALE_PRESETS)})"
            )
        width, height = SCALE_PRESETS[scale]
        return cls(char_width_ratio=width, char_height_ratio=height, **kwargs)

    @property
    def default_ratios(self) -> CharRatios:
        return CharRatios(
            width=self.char_width_ratio or CHAR_WIDTH_RATIO,
            height=self.char_height_ratio or CHAR_HEIGHT_RATIO,
        )


class Dimensions(NamedTuple):
    width: int
    height: int


@dataclass
class AsciiOutput:
    """Result of one generation call."""

    content: str
    character_count: int
    line_count: int
    dimensions: Dimensions
    box_count: int
    warnings: List[str] = field(default_factory=list)
    timestamp: datetime = field(default_factory=datetime.now)
    metadata: Optional[Dict[str, Any]] = None


@dataclass
class GenerationCheck:
    can_generate: bool
    reason: Optional[str] = None


def _hierarchy_problem(hierarchy: BoxHierarchy) -> Optional[str]:
    if hierarchy.has_cycle():
        return "Box hierarchy contains a cyclic parent chain"
    depth = hierarchy.max_depth()
    if depth > MAX_NESTING_DEPTH:
        return f"Box nesting depth ({depth}) exceeds maximum ({MAX_NESTING_DEPTH})"
    return None


def can_generate_ascii(boxes: Sequence[Box]) -> GenerationCheck:
    """
    Check whether ``boxes`` can be rendered before generating.

    Returns a reason when there are no boxes, no visible boxes, a cyclic
    parent chain, or nesting deeper than the maximum depth.
    """
    if not boxes:
        return GenerationCheck(False, "No boxes to render")

    hierarchy = BoxHierarchy(boxes)
    problem = _hierarchy_problem(hierarchy)
    if problem:
        return GenerationCheck(False, problem)

    if all(hierarchy.is_hidden(box) for box in boxes):
        return GenerationCheck(False, "No visible boxes to render")

    return GenerationCheck(True)


class AsciiGenerator:
    """
    Generate ASCII diagrams from positioned boxes and lines.

    Example:
        >>> generator = AsciiGenerator()
        >>> output = generator.generate([Box(id="a", x=0, y=0, width=80, height=48)])
        >>> print(output.content)
    """

    def __init__(self, options: Optional[AsciiGenerationOptions] = None):
        self.options = options or AsciiGenerationOptions()
        self.box_renderer = BoxRenderer(
            min_width=self.options.min_box_chars_width,
            min_height=self.options.min_box_chars_height,
        )
        self.text_renderer = TextRenderer(
            vertically_center=self.options.vertically_center_text
        )
        self.junction_resolver = JunctionResolver()
        self._trace: Optional[RenderTrace] = None

    def get_trace(self) -> Optional[RenderTrace]:
        """Trace of the last ``generate(..., debug=True)`` call."""
        return self._trace

    def generate(
        self,
        boxes: Sequence[Box],
        artboard: Optional[Artboard] = None,
        lines: Optional[Sequence[Line]] = None,
        debug: bool = False,
    ) -> AsciiOutput:
        """
        Render boxes and lines to text.

        Args:
            boxes: All boxes; ancestors outside the artboard are still used
                   for absolute positions.
            artboard: Only render boxes and lines belonging to this artboard.
            lines: Connector lines.
            debug: Record a RenderTrace, available through get_trace().

        Returns:
            AsciiOutput with the text and its counts and warnings.
        """
        trace = RenderTrace() if debug else None
        self._trace = trace
        lines = list(lines or [])
        warnings: List[str] = []

        hierarchy = BoxHierarchy(boxes)
        problem = _hierarchy_problem(hierarchy)
        if problem:
            logger.warning("ASCII generation aborted: %s", problem)
            return self._empty_output([problem])

        candidates = list(boxes)
        if artboard is not None:
            candidates = [b for b in candidates if b.artboard_id == artboard.id]
            lines = [ln for ln in lines if ln.artboard_id == artboard.id]

        visible_boxes = [b for b in candidates if not hierarchy.is_hidden(b)]
        visible_lines = [
            ln for ln in lines if ln.visible and ln.output_mode == OutputMode.ASCII
        ]

        if not visible_boxes and not visible_lines:
            return self._empty_output(["No boxes to render"])

        ratios = self.options.default_ratios
        if self.options.adaptive_ratios:
            ratios = calculate_adaptive_ratios(visible_boxes, ratios)
        if trace:
            trace.add_stage(
                "filtered",
                {
                    "boxes": [b.id for b in visible_boxes],
                    "lines": [ln.id for ln in visible_lines],
                    "artboard": artboard.id if artboard else None,
                },
            )
            trace.add_stage("ratios", {"width": ratios.width, "height": ratios.height})
        logger.debug(
            "Rendering %d boxes and %d lines at %s x %s px/char",
            len(visible_boxes), len(visible_lines), ratios.width, ratios.height,
        )

        mapper = CoordinateMapper(hierarchy, ratios, self.options.text_padding_chars)
        dims = mapper.grid_dimensions(
            visible_boxes, visible_lines, include_origin=artboard is not None
        )
        grid = AsciiGrid(dims.width, dims.height, trace)
        if trace:
            trace.add_stage(
                "grid_created",
                {"width": dims.width, "height": dims.height,
                 "offset_col": dims.offset_col, "offset_row": dims.offset_row},
                grid,
            )

        def grid_bounds(box: Box) -> CharBounds:
            return mapper.box_char_bounds(box).offset(dims.offset_row, dims.offset_col)

        skipped = self.box_renderer.draw_boxes(grid, visible_boxes, grid_bounds)
        skipped_ids = {b.id for b in skipped}
        for box in skipped:
            bounds = grid_bounds(box)
            warnings.append(
                f"Box '{box.id}' is too small to render "
                f"({bounds.width}x{bounds.height} chars, minimum "
                f"{self.box_renderer.min_width}x{self.box_renderer.min_height})"
            )
        rendered = [b for b in visible_boxes if b.id not in skipped_ids]
        if trace:
            trace.add_stage("boxes_drawn", {"rendered": len(rendered),
                                            "skipped": sorted(skipped_ids)}, grid)

        line_renderer = LineRenderer(mapper, dims.offset_row, dims.offset_col)
        lines_drawn = line_renderer.draw_lines(grid, visible_lines)
        if trace:
            trace.add_stage("lines_drawn", {"lines": lines_drawn}, grid)

        changed = self.junction_resolver.resolve_all(grid)
        if trace:
            trace.add_stage("junctions_resolved", {"changed": changed}, grid)

        descendants = defaultdict(list)
        for box in rendered:
            for ancestor in hierarchy.ancestors(box):
                descendants[ancestor.id].append(grid_bounds(box))

        for box in sorted(rendered, key=lambda b: b.z_index):
            content_bounds = mapper.box_content_bounds(box).offset(
                dims.offset_row, dims.offset_col
            )
            self.text_renderer.draw_text(
                grid, box, content_bounds, descendants.get(box.id, ())
            )
        if trace:
            trace.add_stage("text_drawn", {}, grid)

        if self.options.show_overlap_warnings:
            warnings.extend(self._overlap_warnings(rendered, mapper))

        warnings.extend(grid.validate_size().warnings)

        if warnings:
            logger.warning(
                "ASCII generation produced %d warning(s): %s",
                len(warnings), "; ".join(warnings),
            )

        metadata = None
        if self.options.include_metadata:
            metadata = {
                "char_width_ratio": ratios.width,
                "char_height_ratio": ratios.height,
                "offset_col": dims.offset_col,
                "offset_row": dims.offset_row,
                "artboard_id": artboard.id if artboard else None,
                "rendered_box_ids": [b.id for b in rendered],
                "skipped_box_ids": [b.id for b in skipped],
                "lines_drawn": lines_drawn,
            }

        return AsciiOutput(
            content=grid.to_string(),
            character_count=grid.count_characters(),
            line_count=grid.count_lines(),
            dimensions=Dimensions(grid.width, grid.height),
            box_count=len(rendered),
            warnings=warnings,
            metadata=metadata,
        )

    def generate_all_artboards(
        self,
        artboards: Iterable[Artboard],
        boxes: Sequence[Box],
        lines: Optional[Sequence[Line]] = None,
    ) -> Dict[str, AsciiOutput]:
        """
        Run the full pipeline once per visible artboard.

        Each artboard gets its own grid and its own adaptive ratios.

        Returns:
            Artboard id -> output, in ascending artboard z-index.
        """
        outputs: Dict[str, AsciiOutput] = {}
        for artboard in sorted(artboards, key=lambda a: a.z_index):
            if not artboard.visible:
                continue
            outputs[artboard.id] = self.generate(boxes, artboard, lines)
        return outputs

    def _overlap_warnings(
        self, boxes: Sequence[Box], mapper: CoordinateMapper
    ) -> List[str]:
        # Sharing a border row or column is allowed; more than that overlaps
        by_parent: Dict[Optional[str], List[Box]] = defaultdict(list)
        for box in boxes:
            by_parent[box.parent_id].append(box)

        warnings = []
        for siblings in by_parent.values():
            bounds = [(box, mapper.box_char_bounds(box)) for box in siblings]
            for i, (first, first_bounds) in enumerate(bounds):
                for second, second_bounds in bounds[i + 1:]:
                    width, height = first_bounds.overlap(second_bounds)
                    if width > 1 and height > 1:
                        warnings.append(f"Boxes '{first.id}' and '{second.id}' overlap")
        return warnings

    def _empty_output(self, warnings: List[str]) -> AsciiOutput:
        return AsciiOutput(
            content="",
            character_count=0,
            line_count=0,
            dimensions=Dimensions(0, 0),
            box_count=0,
            warnings=warnings,
        )


def generate_ascii(
    boxes: Sequence[Box],
    options: Optional[AsciiGenerationOptions] = None,
    artboard: Optional[Artboard] = None,
    lines: Optional[Sequence[Line]] = None,
) -> AsciiOutput:
    return AsciiGenerator(options).generate(boxes, artboard, lines)


def generate_all_artboards(
    artboards: Iterable[Artboard],
    boxes: Sequence[Box],
    options: Optional[AsciiGenerationOptions] = None,
    lines: Optional[Sequence[Line]] = None,
) -> Dict[str, AsciiOutput]:
    return AsciiGenerator(options).generate_all_artboards(artboards, boxes, lines)


def format_multiple_artboards(
    outputs: Dict[str, AsciiOutput], artboards: Sequence[Artboard]
) -> str:
    """
    Join per-artboard outputs under ``// <name> (<w>x<h>px)`` headers.

    Artboards without an output (hidden ones) are left out.
    """
    if not artboards:
        return NO_ARTBOARDS_MESSAGE

    by_id = {artboard.id: artboard for artboard in artboards}
    sections = []
    for artboard_id, output in outputs.items():
        artboard = by_id.get(artboard_id)
        if artboard is None:
            continue
        header = f"// {artboard.name} ({artboard.width:g}x{artboard.height:g}px)"
        body = output.content if output.content.strip() else "// (empty artboard)"
        sections.append(f"{header}\n{body}")
    return "\n\n".join(sections)

"""
RetroGrid - ASCII diagrams from positioned boxes and lines

Turns boxes, connector lines and artboards laid out in pixel space into a
monospace text diagram built from Unicode box-drawing characters.

Example:
    >>> from retrogrid import Box, generate_ascii
    >>> output = generate_ascii([Box(id="a", x=0, y=0, width=80, height=48)])
    >>> print(output.content)

Debug Mode Example:
    >>> generator = AsciiGenerator()
    >>> output = generator.generate(boxes, debug=True)
    >>> print(generator.get_trace().summary())
"""

from .coordinates import (
    CharBounds,
    CharCoord,
    CharRatios,
    CoordinateMapper,
    calculate_adaptive_ratios,
    calculate_canvas_bounds,
    calculate_grid_dimensions,
    char_to_pixel,
    get_box_char_bounds,
    get_box_content_bounds,
    pixel_to_char,
)
from .debug import GridInspector, visual_diff
from .export import AsciiExporter, to_markdown
from .generator import (
    AsciiGenerationOptions,
    AsciiGenerator,
    AsciiOutput,
    GenerationCheck,
    can_generate_ascii,
    format_multiple_artboards,
    generate_all_artboards,
    generate_ascii,
)
from .glyphs import JunctionType, get_dominant_border_style, get_junction_char
from .grid import AsciiGrid, CharCell, create_grid
from .junctions import JunctionResolver, resolve_all_junctions
from .lines import LineRenderer
from .models import (
    Artboard,
    ArrowStyle,
    BorderStyle,
    Box,
    Line,
    LineDirection,
    LineLabel,
    LineStyle,
    Scene,
    SceneError,
    TextAlignment,
    TextContent,
)
from .renderer import BoxRenderer, TextRenderer
from .tracer import CellWrite, PipelineStage, RenderTrace

__version__ = "0.1.0"

__all__ = [
    # Main API
    "AsciiGenerator",
    "AsciiGenerationOptions",
    "AsciiOutput",
    "GenerationCheck",
    "can_generate_ascii",
    "generate_ascii",
    "generate_all_artboards",
    "format_multiple_artboards",
    # Models
    "Artboard",
    "ArrowStyle",
    "BorderStyle",
    "Box",
    "Line",
    "LineDirection",
    "LineLabel",
    "LineStyle",
    "Scene",
    "SceneError",
    "TextAlignment",
    "TextContent",
    # Coordinates
    "CharBounds",
    "CharCoord",
    "CharRatios",
    "CoordinateMapper",
    "calculate_adaptive_ratios",
    "calculate_canvas_bounds",
    "calculate_grid_dimensions",
    "char_to_pixel",
    "get_box_char_bounds",
    "get_box_content_bounds",
    "pixel_to_char",
    # Grid and renderers
    "AsciiGrid",
    "CharCell",
    "create_grid",
    "BoxRenderer",
    "TextRenderer",
    "LineRenderer",
    "JunctionResolver",
    "JunctionType",
    "resolve_all_junctions",
    "get_junction_char",
    "get_dominant_border_style",
    # Export
    "AsciiExporter",
    "to_markdown",
    # Debug/Tracing
    "RenderTrace",
    "CellWrite",
    "PipelineStage",
    "GridInspector",
    "visual_diff",
]

"""
Command line entry point.

    retrogrid scene.json
    retrogrid scene.json --artboard main --markdown -o diagram.md
    retrogrid scene.json --all-artboards --scale compact
    retrogrid scene.json --png diagram.png

The scene file is a JSON object with ``boxes``, ``lines`` and
``artboards`` lists in the editor's camelCase shape.
"""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple

import typer
from rich.console import Console
from rich.markup import escape

from . import __version__
from .export import AsciiExporter, to_markdown
from .generator import (
    AsciiGenerationOptions,
    AsciiGenerator,
    format_multiple_artboards,
)
from .models import Scene, SceneError

logger = logging.getLogger(__name__)

app = typer.Typer(add_completion=False, help="Render a JSON scene of boxes and lines as a text diagram.")
err_console = Console(stderr=True, soft_wrap=True)


class Scale(str, Enum):
    COMPACT = "compact"
    NORMAL = "normal"
    SPACIOUS = "spacious"


def load_scene(path: Path) -> Scene:
    """
    Read a scene file.

    Raises:
        SceneError: If the file is missing, is not JSON, or has bad entities.
    """
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise SceneError(f"Cannot read scene file {str(path)!r}: {exc}") from exc
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SceneError(f"Scene file {str(path)!r} is not valid JSON: {exc}") from exc
    return Scene.from_dict(data)


def build_options(
    scale: Optional[Scale] = None,
    char_width: Optional[float] = None,
    char_height: Optional[float] = None,
    adaptive: bool = True,
    overlap_warnings: bool = False,
) -> AsciiGenerationOptions:
    """Generation options for a preset scale with per-axis overrides."""
    flags = dict(adaptive_ratios=adaptive, show_overlap_warnings=overlap_warnings)
    if scale is not None:
        options = AsciiGenerationOptions.from_scale(scale.value, **flags)
    else:
        options = AsciiGenerationOptions(**flags)
    if char_width:
        options.char_width_ratio = char_width
    if char_height:
        options.char_height_ratio = char_height
    return options


def render_scene(
    scene: Scene,
    options: AsciiGenerationOptions,
    artboard_id: Optional[str] = None,
    all_artboards: bool = False,
) -> Tuple[str, List[str]]:
    """
    Render ``scene`` and collect its warnings.

    Raises:
        SceneError: If ``artboard_id`` names no artboard in the scene.
    """
    generator = AsciiGenerator(options)
    warnings: List[str] = []

    if all_artboards:
        outputs = generator.generate_all_artboards(scene.artboards, scene.boxes, scene.lines)
        for output in outputs.values():
            warnings.extend(output.warnings)
        return format_multiple_artboards(outputs, scene.artboards), warnings

    artboard = None
    if artboard_id:
        artboard = next((a for a in scene.artboards if a.id == artboard_id), None)
        if artboard is None:
            raise SceneError(f"No artboard with id {artboard_id!r}")
    output = generator.generate(scene.boxes, artboard, scene.lines)
    warnings.extend(output.warnings)
    return output.content, warnings


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"retrogrid {__version__}")
        raise typer.Exit()


@app.command()
def render(
    scene_path: Path = typer.Argument(..., metavar="SCENE", help="Path to the scene JSON file."),
    artboard: Optional[str] = typer.Option(None, metavar="ID", help="Render a single artboard."),
    all_artboards: bool = typer.Option(
        False, "--all-artboards", help="Render every visible artboard with headers."
    ),
    scale: Optional[Scale] = typer.Option(None, help="Preset pixels per character."),
    char_width: Optional[float] = typer.Option(None, metavar="PX", help="Pixels per character column."),
    char_height: Optional[float] = typer.Option(None, metavar="PX", help="Pixels per character row."),
    no_adaptive: bool = typer.Option(
        False, "--no-adaptive", help="Do not shrink ratios for small boxes."
    ),
    overlap_warnings: bool = typer.Option(
        False, "--overlap-warnings", help="Warn about overlapping sibling boxes."
    ),
    markdown: bool = typer.Option(False, "--markdown", help="Wrap output in a code fence."),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", metavar="FILE", help="Write text output to FILE."
    ),
    png: Optional[Path] = typer.Option(
        None, metavar="FILE", help="Also render the diagram to a PNG image."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.ERROR,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if artboard and all_artboards:
        raise typer.BadParameter("--artboard and --all-artboards cannot be combined")

    options = build_options(scale, char_width, char_height, not no_adaptive, overlap_warnings)
    try:
        scene = load_scene(scene_path)
        text, warnings = render_scene(scene, options, artboard, all_artboards)
    except SceneError as exc:
        err_console.print(f"[red]error:[/] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    for warning in warnings:
        err_console.print(f"[yellow]warning:[/] {escape(warning)}")

    exporter = AsciiExporter()
    if output is not None:
        exporter.save_txt(text, output, markdown=markdown)
        logger.debug("Wrote %s", output)
    else:
        typer.echo(to_markdown(text) if markdown else text)

    if png is not None:
        exporter.save_png(text, png)
        logger.debug("Wrote %s", png)


if __name__ == "__main__":
    app()

"""
File export for generated diagrams.

- Markdown: the diagram inside a fenced code block, ready to paste into docs
- Text files (.txt): the plain diagram as UTF-8
- PNG images: the diagram rasterized with a monospace font

The AsciiExporter accepts either an AsciiOutput or a plain string.
"""

from pathlib import Path
from typing import List, Optional, Union

from PIL import Image, ImageDraw, ImageFont

from .generator import AsciiOutput

Diagram = Union[AsciiOutput, str]

_MONOSPACE_FONTS = [
    # Linux
    "DejaVuSansMono",
    "DejaVu Sans Mono",
    "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
    # macOS
    "Menlo",
    "Monaco",
    "/System/Library/Fonts/Menlo.ttc",
    # Windows
    "Consolas",
    "Cascadia Code",
    "C:/Windows/Fonts/consola.ttf",
]


def _content(diagram: Diagram) -> str:
    return diagram.content if isinstance(diagram, AsciiOutput) else diagram


def to_markdown(diagram: Diagram, language: str = "") -> str:
    """Wrap a diagram in a fenced code block."""
    return f"```{language}\n{_content(diagram)}\n```"


class AsciiExporter:
    """
    Writes diagrams to disk.

    Attributes:
        default_font: Font tried first for PNG export.
    """

    def __init__(self, default_font: Optional[str] = None):
        self.default_font = default_font

    def save_txt(self, diagram: Diagram, filename: Union[str, Path], markdown: bool = False) -> Path:
        """
        Save a diagram as UTF-8 text, with a trailing newline.

        Args:
            diagram: Output or text to save.
            filename: Destination path.
            markdown: Wrap the diagram in a fenced code block first.
        """
        text = to_markdown(diagram) if markdown else _content(diagram)
        path = Path(filename)
        path.write_text(text + "\n", encoding="utf-8")
        return path

    def save_png(
        self,
        diagram: Diagram,
        filename: Union[str, Path],
        font_size: int = 16,
        bg_color: str = "#FFFFFF",
        fg_color: str = "#000000",
        padding: int = 20,
        font: Optional[str] = None,
        scale: int = 2,
    ) -> Path:
        """
        Rasterize a diagram to PNG.

        Each row is drawn at a fixed line height with a monospace font, so
        box-drawing characters line up as they do in a terminal.

        Args:
            diagram: Output or text to render.
            filename: Destination path.
            font_size: Font size in points before scaling.
            bg_color: Background color.
            fg_color: Text color.
            padding: Margin around the diagram in pixels before scaling.
            font: Font to try before the default and system fonts.
            scale: Resolution multiplier.
        """
        rows = _content(diagram).split("\n")
        loaded_font = self._load_monospace_font(font_size * scale, font or self.default_font)

        left, top, right, bottom = loaded_font.getbbox("M")
        char_width = right - left
        line_height = int((bottom - top) * 1.2)
        margin = padding * scale

        longest = max((len(row) for row in rows), default=0)
        width = max(char_width * longest + margin * 2, 100 * scale)
        height = max(line_height * len(rows) + margin * 2, 100 * scale)

        image = Image.new("RGB", (width, height), bg_color)
        draw = ImageDraw.Draw(image)
        for index, row in enumerate(rows):
            draw.text((margin, margin + index * line_height), row, font=loaded_font, fill=fg_color)

        path = Path(filename)
        image.save(path, "PNG")
        return path

    def _load_monospace_font(self, font_size: int, font_name: Optional[str] = None):
        """First loadable font among ``font_name`` and common system monospace fonts."""
        candidates: List[str] = [font_name] if font_name else []
        candidates.extend(_MONOSPACE_FONTS)

        for candidate in candidates:
            try:
                return ImageFont.truetype(candidate, font_size)
            except OSError:
                continue

        try:
            return ImageFont.load_default(size=font_size)
        except TypeError:
            # Pillow < 10.1 has no size parameter
            return ImageFont.load_default()

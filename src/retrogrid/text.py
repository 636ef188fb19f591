"""
Text formatting for box content.

The target is plain text, so inline formatting becomes literal markdown
markup (``**bold**``, ``*italic*``, ```code```) before wrapping.
"""

from typing import List, Sequence

from .models import FormatType, TextAlignment, TextContent, TextFormat

ELLIPSIS = "..."

_MARKUP = {
    FormatType.BOLD: "**",
    FormatType.ITALIC: "*",
    FormatType.CODE: "`",
}


def apply_markdown_formatting(text: str, formatting: Sequence[TextFormat]) -> str:
    """
    Wrap formatted spans in markdown markup.

    Spans are applied from the rightmost start so earlier indices stay
    valid. Spans that are empty or fall outside the text are ignored;
    color spans keep their text unchanged.
    """
    if not formatting:
        return text

    result = text
    for fmt in sorted(formatting, key=lambda f: f.start, reverse=True):
        if fmt.start < 0 or fmt.end > len(result) or fmt.start >= fmt.end:
            continue
        marker = _MARKUP.get(fmt.type, "")
        result = (
            result[: fmt.start]
            + marker
            + result[fmt.start : fmt.end]
            + marker
            + result[fmt.end :]
        )
    return result


def wrap_text(text: str, max_width: int) -> List[str]:
    """
    Word-wrap ``text`` to ``max_width`` columns.

    Explicit newlines start new paragraphs and blank paragraphs are kept as
    empty lines. Words longer than the width are split at the boundary.
    """
    if max_width <= 0:
        return []
    if not text or not text.strip():
        return [""]

    lines: List[str] = []
    for paragraph in text.split("\n"):
        if not paragraph.strip():
            lines.append("")
            continue

        current = ""
        for word in paragraph.split():
            candidate = f"{current} {word}" if current else word
            if len(candidate) <= max_width:
                current = candidate
                continue

            if current:
                lines.append(current)

            while len(word) > max_width:
                lines.append(word[:max_width])
                word = word[max_width:]
            current = word

        if current:
            lines.append(current)

    return lines


def align_line(line: str, alignment: TextAlignment, width: int) -> str:
    """
    Pad a line to ``width`` columns.

    Centered text puts the odd extra space on the right. Lines that do not
    fit are cut to the width.
    """
    trimmed = line.strip()
    padding = width - len(trimmed)

    if padding <= 0:
        return trimmed[:width]

    if alignment == TextAlignment.CENTER:
        left = padding // 2
        return " " * left + trimmed + " " * (padding - left)
    if alignment == TextAlignment.RIGHT:
        return " " * padding + trimmed
    return trimmed + " " * padding


def align_text(lines: Sequence[str], alignment: TextAlignment, width: int) -> List[str]:
    return [align_line(line, alignment, width) for line in lines]


def format_text_content(content: TextContent, max_width: int) -> List[str]:
    """Markup, wrap and align a box's text for a region ``max_width`` wide."""
    marked = apply_markdown_formatting(content.value, content.formatting)
    wrapped = wrap_text(marked, max_width)
    return align_text(wrapped, content.alignment, max_width)


def truncate_lines(lines: Sequence[str], max_lines: int) -> List[str]:
    """
    Keep at most ``max_lines`` lines.

    When lines are dropped, the last kept line ends in "..." (its final
    three characters are replaced, or it becomes "..." when shorter).
    """
    if len(lines) <= max_lines:
        return list(lines)
    if max_lines <= 0:
        return []

    truncated = list(lines[: max_lines - 1])
    last = lines[max_lines - 1]
    if len(last) > len(ELLIPSIS):
        truncated.append(last[: -len(ELLIPSIS)] + ELLIPSIS)
    else:
        truncated.append(ELLIPSIS)
    return truncated


def vertical_center_offset(line_count: int, available_height: int) -> int:
    if line_count >= available_height:
        return 0
    return (available_height - line_count) // 2

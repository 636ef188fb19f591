"""
Data models for ASCII generation.

These dataclasses mirror the entities handed over by the editor: boxes,
connector lines and artboards, all in floating-point pixel coordinates.
The renderer only reads them; nothing in this package mutates a model.

Classes:
    Box: A positioned rectangle, optionally nested inside another box.
    Line: A horizontal or vertical connector with optional arrows and label.
    Artboard: A named canvas region used as a rendering and export unit.
    TextContent: Text, alignment and inline formatting spans of a box.

Each model has a ``from_dict`` loader that accepts the editor's camelCase
JSON shape and raises SceneError on malformed input.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Type, TypeVar


class SceneError(ValueError):
    """Raised when scene input cannot be turned into models."""

    pass


class BorderStyle(str, Enum):
    SINGLE = "single"
    DOUBLE = "double"
    DASHED = "dashed"


class TextAlignment(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class FormatType(str, Enum):
    BOLD = "bold"
    ITALIC = "italic"
    CODE = "code"
    COLOR = "color"


class LineDirection(str, Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class ArrowStyle(str, Enum):
    NONE = "none"
    SIMPLE = "simple"
    FILLED = "filled"


class LineStyle(str, Enum):
    SOLID = "solid"
    DASHED = "dashed"
    DOTTED = "dotted"


class LabelPosition(str, Enum):
    START = "start"
    MIDDLE = "middle"
    END = "end"


class OutputMode(str, Enum):
    ASCII = "ascii"
    SVG = "svg"
    COMMENT = "comment"


E = TypeVar("E", bound=Enum)


def _enum(enum_cls: Type[E], value: Any, default: E, what: str) -> E:
    if value is None:
        return default
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise SceneError(f"Invalid {what} {value!r} (expected one of: {allowed})")


def _number(data: Dict[str, Any], key: str, owner: str, default: Any = None) -> float:
    value = data.get(key, default)
    if value is None:
        raise SceneError(f"{owner}: missing required field '{key}'")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SceneError(f"{owner}: field '{key}' must be a number, got {value!r}")
    return value


def _require_id(data: Dict[str, Any], kind: str) -> str:
    if not isinstance(data, dict):
        raise SceneError(f"{kind} entry must be an object, got {type(data).__name__}")
    entity_id = data.get("id")
    if entity_id is None or entity_id == "":
        raise SceneError(f"{kind} is missing an 'id'")
    return str(entity_id)


@dataclass
class TextFormat:
    """
    An inline formatting span over ``TextContent.value``.

    Attributes:
        start: Index of the first formatted character.
        end: Index one past the last formatted character.
        type: Kind of formatting.
        value: Extra data (the color for COLOR spans).
    """

    start: int
    end: int
    type: FormatType
    value: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TextFormat":
        if not isinstance(data, dict):
            raise SceneError("Formatting entry must be an object")
        return cls(
            start=int(_number(data, "start", "formatting")),
            end=int(_number(data, "end", "formatting")),
            type=_enum(FormatType, data.get("type"), FormatType.BOLD, "format type"),
            value=data.get("value"),
        )


@dataclass
class TextContent:
    """Text shown inside a box."""

    value: str = ""
    alignment: TextAlignment = TextAlignment.LEFT
    font_size: str = "medium"
    formatting: List[TextFormat] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "TextContent":
        if data is None:
            return cls()
        if isinstance(data, str):
            return cls(value=data)
        if not isinstance(data, dict):
            raise SceneError(
                f"Text must be a string or an object, got {type(data).__name__}"
            )
        return cls(
            value=str(data.get("value") or ""),
            alignment=_enum(
                TextAlignment, data.get("alignment"), TextAlignment.LEFT, "alignment"
            ),
            font_size=str(data.get("fontSize", "medium")),
            formatting=[TextFormat.from_dict(f) for f in data.get("formatting") or []],
        )


@dataclass
class Box:
    """
    A rectangle on the canvas.

    ``x``/``y`` are local to the parent box's content origin, or to the
    artboard for root boxes. ``z_index`` orders painting among siblings.
    """

    id: str
    x: float
    y: float
    width: float
    height: float
    border_style: BorderStyle = BorderStyle.SINGLE
    padding: float = 0
    text: TextContent = field(default_factory=TextContent)
    parent_id: Optional[str] = None
    children: List[str] = field(default_factory=list)
    z_index: int = 0
    visible: bool = True
    locked: bool = False
    artboard_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Box":
        box_id = _require_id(data, "Box")
        owner = f"Box '{box_id}'"
        return cls(
            id=box_id,
            x=_number(data, "x", owner, 0),
            y=_number(data, "y", owner, 0),
            width=_number(data, "width", owner),
            height=_number(data, "height", owner),
            border_style=_enum(
                BorderStyle, data.get("borderStyle"), BorderStyle.SINGLE, "border style"
            ),
            padding=_number(data, "padding", owner, 0),
            text=TextContent.from_dict(data.get("text")),
            parent_id=data.get("parentId"),
            children=list(data.get("children") or []),
            z_index=int(_number(data, "zIndex", owner, 0)),
            visible=bool(data.get("visible", True)),
            locked=bool(data.get("locked", False)),
            artboard_id=data.get("artboardId"),
        )


@dataclass
class LineLabel:
    text: str
    position: LabelPosition = LabelPosition.MIDDLE


@dataclass
class Line:
    """
    A straight connector.

    Endpoints are in the same space as root boxes unless ``parent_id`` is
    set, in which case they are relative to the parent's content origin.
    ``direction`` is fixed when the line is created and decides which axis
    is drawn; the other coordinate of the end point is ignored.
    """

    id: str
    start_x: float
    start_y: float
    end_x: float
    end_y: float
    direction: LineDirection = LineDirection.HORIZONTAL
    start_arrow: ArrowStyle = ArrowStyle.NONE
    end_arrow: ArrowStyle = ArrowStyle.NONE
    line_style: LineStyle = LineStyle.SOLID
    output_mode: OutputMode = OutputMode.ASCII
    label: Optional[LineLabel] = None
    parent_id: Optional[str] = None
    artboard_id: Optional[str] = None
    z_index: int = 0
    visible: bool = True
    locked: bool = False
    name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Line":
        line_id = _require_id(data, "Line")
        owner = f"Line '{line_id}'"
        start_x = _number(data, "startX", owner)
        start_y = _number(data, "startY", owner)
        end_x = _number(data, "endX", owner)
        end_y = _number(data, "endY", owner)

        # Derive direction from the dominant axis when the editor omitted it
        default_direction = (
            LineDirection.HORIZONTAL
            if abs(end_x - start_x) >= abs(end_y - start_y)
            else LineDirection.VERTICAL
        )

        label = None
        label_data = data.get("label")
        if label_data is not None and not isinstance(label_data, dict):
            raise SceneError(
                f"Line '{line_id}': label must be an object, got {type(label_data).__name__}"
            )
        if label_data and label_data.get("text"):
            label = LineLabel(
                text=str(label_data["text"]),
                position=_enum(
                    LabelPosition,
                    label_data.get("position"),
                    LabelPosition.MIDDLE,
                    "label position",
                ),
            )

        return cls(
            id=line_id,
            start_x=start_x,
            start_y=start_y,
            end_x=end_x,
            end_y=end_y,
            direction=_enum(
                LineDirection, data.get("direction"), default_direction, "direction"
            ),
            start_arrow=_enum(
                ArrowStyle, data.get("startArrow"), ArrowStyle.NONE, "arrow style"
            ),
            end_arrow=_enum(
                ArrowStyle, data.get("endArrow"), ArrowStyle.NONE, "arrow style"
            ),
            line_style=_enum(
                LineStyle, data.get("lineStyle"), LineStyle.SOLID, "line style"
            ),
            output_mode=_enum(
                OutputMode, data.get("outputMode"), OutputMode.ASCII, "output mode"
            ),
            label=label,
            parent_id=data.get("parentId"),
            artboard_id=data.get("artboardId"),
            z_index=int(_number(data, "zIndex", owner, 0)),
            visible=bool(data.get("visible", True)),
            locked=bool(data.get("locked", False)),
            name=data.get("name"),
        )


@dataclass
class Artboard:
    """A named region of the canvas rendered and exported on its own."""

    id: str
    name: str
    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0
    visible: bool = True
    locked: bool = False
    z_index: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Artboard":
        artboard_id = _require_id(data, "Artboard")
        owner = f"Artboard '{artboard_id}'"
        return cls(
            id=artboard_id,
            name=str(data.get("name") or artboard_id),
            x=_number(data, "x", owner, 0),
            y=_number(data, "y", owner, 0),
            width=_number(data, "width", owner, 0),
            height=_number(data, "height", owner, 0),
            visible=bool(data.get("visible", True)),
            locked=bool(data.get("locked", False)),
            z_index=int(_number(data, "zIndex", owner, 0)),
        )


@dataclass
class Scene:
    """Everything needed for one generation call, as loaded from JSON."""

    boxes: List[Box] = field(default_factory=list)
    lines: List[Line] = field(default_factory=list)
    artboards: List[Artboard] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Scene":
        if not isinstance(data, dict):
            raise SceneError("Scene must be a JSON object")
        for key in ("boxes", "lines", "artboards"):
            if not isinstance(data.get(key, []), list):
                raise SceneError(f"Scene field '{key}' must be a list")
        return cls(
            boxes=[Box.from_dict(b) for b in data.get("boxes", [])],
            lines=[Line.from_dict(ln) for ln in data.get("lines", [])],
            artboards=[Artboard.from_dict(a) for a in data.get("artboards", [])],
        )

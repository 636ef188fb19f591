"""Tests for the models module."""

import pytest

from retrogrid.models import (
    Artboard,
    ArrowStyle,
    BorderStyle,
    Box,
    FormatType,
    LabelPosition,
    Line,
    LineDirection,
    LineStyle,
    OutputMode,
    Scene,
    SceneError,
    TextAlignment,
    TextContent,
)


class TestBoxFromDict:
    """Tests for loading boxes from camelCase JSON."""

    def test_full_box(self):
        """Test every field is mapped."""
        box = Box.from_dict(
            {
                "id": "b1",
                "x": 10,
                "y": 20.5,
                "width": 100,
                "height": 50,
                "borderStyle": "double",
                "padding": 4,
                "text": {
                    "value": "Hello",
                    "alignment": "center",
                    "fontSize": "large",
                    "formatting": [{"start": 0, "end": 5, "type": "bold"}],
                },
                "parentId": "p",
                "children": ["c1"],
                "zIndex": 3,
                "visible": False,
                "locked": True,
                "artboardId": "main",
            }
        )
        assert box.id == "b1"
        assert box.y == 20.5
        assert box.border_style == BorderStyle.DOUBLE
        assert box.padding == 4
        assert box.text.value == "Hello"
        assert box.text.alignment == TextAlignment.CENTER
        assert box.text.font_size == "large"
        assert box.text.formatting[0].type == FormatType.BOLD
        assert box.parent_id == "p"
        assert box.children == ["c1"]
        assert box.z_index == 3
        assert box.visible is False
        assert box.locked is True
        assert box.artboard_id == "main"

    def test_defaults(self):
        """Test optional fields fall back to defaults."""
        box = Box.from_dict({"id": "b", "width": 10, "height": 10})
        assert box.x == 0
        assert box.y == 0
        assert box.border_style == BorderStyle.SINGLE
        assert box.text == TextContent()
        assert box.parent_id is None
        assert box.visible is True

    def test_missing_id(self):
        """Test a box without id is rejected."""
        with pytest.raises(SceneError, match="id"):
            Box.from_dict({"width": 10, "height": 10})

    def test_missing_width(self):
        """Test a missing size is rejected."""
        with pytest.raises(SceneError, match="width"):
            Box.from_dict({"id": "b", "height": 10})

    def test_non_numeric_geometry(self):
        """Test string coordinates are rejected."""
        with pytest.raises(SceneError, match="must be a number"):
            Box.from_dict({"id": "b", "x": "10", "width": 10, "height": 10})

    def test_bool_is_not_a_number(self):
        """Test booleans are not accepted as numbers."""
        with pytest.raises(SceneError):
            Box.from_dict({"id": "b", "width": True, "height": 10})

    def test_unknown_border_style(self):
        """Test an unknown enum value names the allowed values."""
        with pytest.raises(SceneError, match="single, double, dashed"):
            Box.from_dict({"id": "b", "width": 10, "height": 10, "borderStyle": "wavy"})

    def test_plain_string_text(self):
        """Test text given as a bare string."""
        box = Box.from_dict({"id": "b", "width": 10, "height": 10, "text": "Hi"})
        assert box.text.value == "Hi"

    def test_text_of_wrong_type(self):
        """Test text that is neither a string nor an object is rejected."""
        with pytest.raises(SceneError, match="Text must be a string or an object"):
            Box.from_dict({"id": "b", "width": 10, "height": 10, "text": ["Hi"]})

    def test_scene_error_is_value_error(self):
        """Test SceneError can be caught as ValueError."""
        assert issubclass(SceneError, ValueError)


class TestLineFromDict:
    """Tests for loading lines."""

    def test_full_line(self):
        """Test every field is mapped."""
        line = Line.from_dict(
            {
                "id": "l1",
                "startX": 0,
                "startY": 0,
                "endX": 0,
                "endY": 100,
                "direction": "vertical",
                "startArrow": "simple",
                "endArrow": "filled",
                "lineStyle": "dashed",
                "outputMode": "svg",
                "label": {"text": "yes", "position": "start"},
                "parentId": "p",
                "artboardId": "main",
                "zIndex": 2,
                "name": "Flow",
            }
        )
        assert line.direction == LineDirection.VERTICAL
        assert line.start_arrow == ArrowStyle.SIMPLE
        assert line.end_arrow == ArrowStyle.FILLED
        assert line.line_style == LineStyle.DASHED
        assert line.output_mode == OutputMode.SVG
        assert line.label.text == "yes"
        assert line.label.position == LabelPosition.START
        assert line.parent_id == "p"
        assert line.z_index == 2
        assert line.name == "Flow"

    def test_direction_from_dominant_axis(self):
        """Test direction is derived when omitted."""
        horizontal = Line.from_dict({"id": "h", "startX": 0, "startY": 0, "endX": 50, "endY": 10})
        vertical = Line.from_dict({"id": "v", "startX": 0, "startY": 0, "endX": 10, "endY": 50})
        assert horizontal.direction == LineDirection.HORIZONTAL
        assert vertical.direction == LineDirection.VERTICAL

    def test_empty_label_is_dropped(self):
        """Test a label without text is ignored."""
        line = Line.from_dict(
            {"id": "l", "startX": 0, "startY": 0, "endX": 5, "endY": 0, "label": {"text": ""}}
        )
        assert line.label is None

    def test_string_label_rejected(self):
        """Test a label given as a bare string raises SceneError."""
        with pytest.raises(SceneError, match="label must be an object"):
            Line.from_dict(
                {"id": "l", "startX": 0, "startY": 0, "endX": 5, "endY": 0, "label": "yes"}
            )

    def test_missing_endpoint(self):
        """Test a missing endpoint is rejected."""
        with pytest.raises(SceneError, match="endX"):
            Line.from_dict({"id": "l", "startX": 0, "startY": 0, "endY": 0})


class TestArtboardAndScene:
    """Tests for artboards and whole scenes."""

    def test_artboard_name_defaults_to_id(self):
        """Test an unnamed artboard uses its id."""
        artboard = Artboard.from_dict({"id": "main", "width": 100, "height": 50})
        assert artboard.name == "main"

    def test_scene(self, scene_dict):
        """Test a complete scene loads."""
        scene = Scene.from_dict(scene_dict)
        assert [b.id for b in scene.boxes] == ["a", "b"]
        assert [ln.id for ln in scene.lines] == ["l1"]
        assert [a.id for a in scene.artboards] == ["main"]

    def test_scene_must_be_object(self):
        """Test a JSON list is not a scene."""
        with pytest.raises(SceneError):
            Scene.from_dict([])

    def test_scene_lists_are_checked(self):
        """Test non-list entity collections are rejected."""
        with pytest.raises(SceneError, match="boxes"):
            Scene.from_dict({"boxes": {}})

    def test_entity_must_be_object(self):
        """Test a non-object box entry is rejected."""
        with pytest.raises(SceneError):
            Scene.from_dict({"boxes": ["a"]})

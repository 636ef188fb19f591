"""Pytest configuration and shared fixtures for RetroGrid tests."""

import json

import pytest

from retrogrid import AsciiGenerationOptions, AsciiGenerator, Artboard, Box, TextContent


@pytest.fixture
def generator():
    """Default AsciiGenerator instance."""
    return AsciiGenerator()


@pytest.fixture
def fixed_generator():
    """Generator with adaptive ratios off, so ratios stay at 8 x 12."""
    return AsciiGenerator(AsciiGenerationOptions(adaptive_ratios=False))


@pytest.fixture
def small_box():
    """80x48 box at the origin: 11 columns by 5 rows."""
    return Box(id="a", x=0, y=0, width=80, height=48)


@pytest.fixture
def labelled_box():
    """Small box carrying a short text."""
    return Box(id="a", x=0, y=0, width=80, height=48, text=TextContent(value="Hi"))


@pytest.fixture
def side_by_side_boxes():
    """Two boxes sharing their vertical edge at column 10."""
    return [
        Box(id="left", x=0, y=0, width=80, height=48),
        Box(id="right", x=80, y=0, width=80, height=48),
    ]


@pytest.fixture
def stacked_boxes():
    """Two boxes sharing their horizontal edge at row 4."""
    return [
        Box(id="top", x=0, y=0, width=80, height=48),
        Box(id="bottom", x=0, y=48, width=80, height=48),
    ]


@pytest.fixture
def artboards():
    """Two visible artboards, the second drawn first by z-index."""
    return [
        Artboard(id="main", name="Main", width=400, height=300, z_index=1),
        Artboard(id="side", name="Side", x=500, width=200, height=100, z_index=0),
    ]


@pytest.fixture
def scene_dict():
    """Scene in the editor's camelCase JSON shape."""
    return {
        "artboards": [
            {"id": "main", "name": "Main", "x": 0, "y": 0, "width": 400, "height": 300}
        ],
        "boxes": [
            {
                "id": "a",
                "x": 0,
                "y": 0,
                "width": 80,
                "height": 48,
                "borderStyle": "single",
                "text": {"value": "Hi", "alignment": "left"},
                "artboardId": "main",
            },
            {
                "id": "b",
                "x": 160,
                "y": 0,
                "width": 80,
                "height": 48,
                "borderStyle": "double",
                "artboardId": "main",
            },
        ],
        "lines": [
            {
                "id": "l1",
                "startX": 88,
                "startY": 24,
                "endX": 152,
                "endY": 24,
                "endArrow": "filled",
                "artboardId": "main",
            }
        ],
    }


@pytest.fixture
def scene_file(tmp_path, scene_dict):
    """Scene JSON written to a temporary file."""
    path = tmp_path / "scene.json"
    path.write_text(json.dumps(scene_dict), encoding="utf-8")
    return path

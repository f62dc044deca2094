"""Tests for the Foundry VTT converter."""

import pytest

from map_exchange.exceptions import FormatMismatchError, UnsupportedShapeError
from map_exchange.foundry import FoundryConverter, from_foundry, looks_like_scene, to_foundry
from map_exchange.models import ImportOptions, ShapeObject, TextObject, TokenObject


@pytest.mark.unit
class TestFromFoundry:
    """Tests for Foundry import."""

    def test_ellipse_radius_becomes_circle(self, foundry_scene):
        """An ellipse with radius 25 imports as a 50x50 circle."""
        result = from_foundry(foundry_scene)
        circle = next(o for o in result.map.objects if isinstance(o, ShapeObject))

        assert circle.shape_type == "circle"
        assert circle.width == 50
        assert circle.height == 50
        assert circle.radius == 25
        assert circle.layer == 30
        assert circle.stroke == "#ff0000"

    def test_token_fields(self, foundry_scene):
        token = from_foundry(foundry_scene).map.objects[0]

        assert isinstance(token, TokenObject)
        assert (token.position.x, token.position.y) == (300, 400)
        assert token.layer == 40
        assert token.visible is False
        assert token.locked is False
        assert token.image == "tokens/skeleton.png"

    def test_scene_fields(self, foundry_scene):
        result = from_foundry(foundry_scene)

        assert result.source_format == "foundry"
        assert result.map.name == "Crypt"
        assert result.map.grid.size == 100
        assert result.map.grid.type == "square"
        assert result.map.background == "maps/crypt.webp"
        assert result.warnings == []

    def test_v10_shape_codes(self, foundry_scene):
        """v10 drawings carry single-letter codes in shape.type."""
        foundry_scene["drawings"] = [
            {"_id": "d2", "x": 0, "y": 0, "shape": {"type": "r", "width": 40, "height": 20}},
            {"_id": "d3", "x": 0, "y": 0, "shape": {"type": "p", "points": [0, 0, 30, 0, 30, 40]}},
        ]

        objects = from_foundry(foundry_scene).map.objects[1:]

        assert objects[0].shape_type == "rect"
        assert (objects[0].width, objects[0].height) == (40, 20)
        assert objects[1].shape_type == "polygon"
        assert objects[1].points == [0, 0, 30, 0, 30, 40]
        assert (objects[1].width, objects[1].height) == (30, 40)

    def test_odd_points_are_trimmed(self, foundry_scene):
        foundry_scene["drawings"] = [
            {"_id": "d4", "type": "freehand", "shape": {"points": [0, 0, 10, 10, 20]}},
        ]

        result = from_foundry(foundry_scene)

        assert result.map.objects[1].points == [0, 0, 10, 10]
        assert any("Odd-length points" in w for w in result.warnings)

    def test_unknown_drawing_type_degrades(self, foundry_scene):
        foundry_scene["drawings"][0]["type"] = "star"

        result = from_foundry(foundry_scene)

        assert result.map.objects[1].shape_type == "rect"
        assert any("Unsupported shape type 'star'" in w for w in result.warnings)

    def test_unknown_drawing_type_strict(self, foundry_scene):
        foundry_scene["drawings"][0]["type"] = "star"

        with pytest.raises(UnsupportedShapeError):
            from_foundry(foundry_scene, ImportOptions(strict_shapes=True))

    def test_text_drawing(self, foundry_scene):
        foundry_scene["drawings"] = [
            {"_id": "d5", "type": "t", "x": 5, "y": 6, "text": "Here lies", "fontSize": 30},
        ]

        text = from_foundry(foundry_scene).map.objects[1]

        assert isinstance(text, TextObject)
        assert text.text == "Here lies"
        assert text.font_size == 30
        assert text.layer == 35

    def test_hex_grid(self, foundry_scene):
        foundry_scene["grid"]["type"] = 2

        assert from_foundry(foundry_scene).map.grid.type == "hex"

    def test_legacy_numeric_grid(self, foundry_scene):
        """Pre-v10 scenes store the grid size as a bare number."""
        foundry_scene["grid"] = 70

        result = from_foundry(foundry_scene)

        assert result.map.grid.size == 70
        assert any("Legacy numeric grid" in w for w in result.warnings)

    def test_missing_grid_defaults(self, foundry_scene):
        del foundry_scene["grid"]

        result = from_foundry(foundry_scene)

        assert result.map.grid.size == 50
        assert result.warnings

    def test_legacy_token_img(self, foundry_scene):
        token = foundry_scene["tokens"][0]
        del token["texture"]
        token["img"] = "old/path.png"

        assert from_foundry(foundry_scene).map.objects[0].image == "old/path.png"

    def test_scenes_export_uses_first_scene(self, foundry_scene):
        result = from_foundry({"scenes": [foundry_scene, {"name": "Other"}]})

        assert result.map.name == "Crypt"

    def test_empty_scenes_rejected(self):
        with pytest.raises(FormatMismatchError):
            from_foundry({"scenes": []})

    def test_unrecognizable_document_rejected(self):
        with pytest.raises(FormatMismatchError) as exc_info:
            from_foundry({"name": "just a name"})

        assert exc_info.value.format_id == "foundry"

    def test_preserve_ids(self, foundry_scene):
        result = from_foundry(foundry_scene, ImportOptions(preserve_ids=True))

        assert result.map.id == "scene-1"
        assert [o.id for o in result.map.objects] == ["t1", "d1"]

    def test_background_skipped_when_disabled(self, foundry_scene):
        """Skipping the background leaves the rest of the scene intact."""
        result = from_foundry(foundry_scene, ImportOptions(import_background=False))

        assert result.map.background is None
        assert len(result.map.objects) == 2
        assert result.warnings == ["Background image was not imported"]


@pytest.mark.unit
class TestToFoundry:
    """Tests for Foundry export."""

    def test_scene_collections(self, sample_map):
        scene = to_foundry(sample_map)

        assert len(scene["tokens"]) == 1
        assert len(scene["drawings"]) == 4
        for key in ("walls", "lights", "sounds", "templates"):
            assert scene[key] == []

    def test_grid(self, sample_map):
        grid = to_foundry(sample_map)["grid"]

        assert grid == {"type": 1, "size": 50, "color": "#666666", "alpha": 0.5}

    def test_hex_grid_and_hidden(self, sample_map):
        grid = sample_map.grid.model_copy(update={"type": "hex", "visible": False})

        scene_grid = to_foundry(sample_map.model_copy(update={"grid": grid}))["grid"]

        assert scene_grid["type"] == 2
        assert scene_grid["alpha"] == 0

    def test_token_uses_camel_case(self, sample_map):
        token = to_foundry(sample_map)["tokens"][0]

        assert token["_id"] == "tok-1"
        assert token["texture"]["src"] == "goblin.png"
        assert token["hidden"] is False

    def test_circle_becomes_ellipse_radius(self, sample_map):
        drawings = to_foundry(sample_map)["drawings"]
        ellipse = next(d for d in drawings if d["_id"] == "shp-2")

        assert ellipse["type"] == "ellipse"
        assert ellipse["shape"]["radius"] == 30

    def test_rect_drawing_fields(self, sample_map):
        drawings = to_foundry(sample_map)["drawings"]
        rect = next(d for d in drawings if d["_id"] == "shp-1")

        assert rect["type"] == "rectangle"
        assert rect["strokeColor"] == "#000000"
        assert rect["strokeWidth"] == 2
        assert rect["fillColor"] == "#ff0000"
        assert rect["fillType"] == 1

    def test_text_is_text_drawing(self, sample_map):
        drawings = to_foundry(sample_map)["drawings"]
        text = next(d for d in drawings if d["_id"] == "txt-1")

        assert text["type"] == "t"
        assert text["text"] == "Entrance"

    def test_exported_scene_is_detected_as_scene(self, sample_map):
        assert looks_like_scene(to_foundry(sample_map))


@pytest.mark.unit
class TestFoundryConverter:
    """Tests for the registry wrapper."""

    def test_round_trip_keeps_geometry(self, sample_map):
        converter = FoundryConverter()

        result = converter.from_format(converter.to_format(sample_map), ImportOptions(preserve_ids=True))
        restored = {o.id: o for o in result.map.objects}

        assert len(restored) == len(sample_map.objects)
        for original in sample_map.objects:
            assert type(restored[original.id]) is type(original)
            assert restored[original.id].position == original.position
        assert restored["shp-2"].shape_type == "circle"
        assert restored["shp-2"].width == 60
        assert restored["shp-3"].points == [0, 0, 10, 0, 10, 10]
        assert result.map.grid.size == sample_map.grid.size

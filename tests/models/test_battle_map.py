"""Tests for the canonical BattleMap model."""

import pytest
from pydantic import ValidationError

from map_exchange.models import (
    BattleMap,
    CoercionLog,
    Grid,
    IdAllocator,
    ImportOptions,
    Point,
    ShapeObject,
    TextObject,
    TokenObject,
    with_default,
)


@pytest.mark.unit
class TestBattleMap:
    """Test BattleMap model."""

    def test_minimal_map_defaults(self):
        """BattleMap with required fields only."""
        battle_map = BattleMap(id="m1", name="Keep", width=800, height=600)

        assert battle_map.grid == Grid()
        assert battle_map.grid.size == 50
        assert battle_map.objects == []
        assert battle_map.background is None

    @pytest.mark.parametrize("field", ["width", "height"])
    def test_dimensions_must_be_positive(self, field):
        data = {"id": "m", "name": "m", "width": 100, "height": 100, field: 0}

        with pytest.raises(ValidationError):
            BattleMap(**data)

    def test_grid_size_must_be_positive(self):
        with pytest.raises(ValidationError):
            Grid(size=0)

    def test_duplicate_object_ids_rejected(self):
        """Object ids must be unique within a map."""
        with pytest.raises(ValidationError, match="Duplicate object id"):
            BattleMap(
                id="m",
                name="m",
                width=100,
                height=100,
                objects=[
                    TokenObject(id="a", position=Point(x=0, y=0)),
                    ShapeObject(id="a", position=Point(x=0, y=0)),
                ],
            )

    def test_immutable(self, sample_map):
        """BattleMap should be frozen."""
        with pytest.raises(ValidationError):
            sample_map.name = "Other"

    def test_camel_case_json(self, sample_map):
        """The JSON form should use camelCase keys."""
        data = sample_map.model_dump(by_alias=True, exclude_none=True)
        shape = data["objects"][1]
        text = data["objects"][4]

        assert shape["shapeType"] == "rect"
        assert shape["strokeWidth"] == 2
        assert text["fontFamily"] == "Arial"

    def test_objects_discriminated_by_type(self):
        """Raw object dicts should validate into the matching model."""
        battle_map = BattleMap.model_validate({
            "id": "m",
            "name": "m",
            "width": 100,
            "height": 100,
            "objects": [
                {"id": "a", "type": "token", "position": {"x": 1, "y": 2}},
                {"id": "b", "type": "shape", "position": {"x": 1, "y": 2}, "shapeType": "circle"},
                {"id": "c", "type": "text", "position": {"x": 1, "y": 2}, "text": "hi"},
            ],
        })

        assert [type(o) for o in battle_map.objects] == [TokenObject, ShapeObject, TextObject]
        assert battle_map.objects[1].shape_type == "circle"

    def test_unknown_object_type_rejected(self):
        with pytest.raises(ValidationError):
            BattleMap.model_validate({
                "id": "m",
                "name": "m",
                "width": 100,
                "height": 100,
                "objects": [{"id": "a", "type": "wall", "position": {"x": 0, "y": 0}}],
            })


@pytest.mark.unit
class TestMapObjects:
    """Test MapObject variants."""

    def test_token_defaults(self):
        token = TokenObject(id="t", position=Point(x=0, y=0))

        assert token.type == "token"
        assert token.layer == 40
        assert token.width == 50
        assert token.visible is True
        assert token.locked is False

    def test_shape_defaults(self):
        shape = ShapeObject(id="s", position=Point(x=0, y=0))

        assert shape.shape_type == "rect"
        assert shape.layer == 30

    def test_shape_type_restricted(self):
        """Shape types outside the four canonical ones are rejected."""
        with pytest.raises(ValidationError):
            ShapeObject(id="s", position=Point(x=0, y=0), shape_type="hexagon")

    def test_odd_points_rejected(self):
        """Flattened points must come in x/y pairs."""
        with pytest.raises(ValidationError, match="even length"):
            ShapeObject(id="s", position=Point(x=0, y=0), shape_type="polygon", points=[0, 0, 1])

    @pytest.mark.parametrize("layer", [-1, 101])
    def test_layer_range(self, layer):
        """Layers must stay inside [0, 100]."""
        with pytest.raises(ValidationError):
            TextObject(id="t", position=Point(x=0, y=0), layer=layer)


@pytest.mark.unit
class TestImportOptions:
    """Test ImportOptions."""

    def test_defaults(self):
        options = ImportOptions()

        assert options.preserve_ids is False
        assert options.strict_shapes is False
        assert options.target_size is None
        assert options.import_background is True

    def test_target_size_must_be_positive(self):
        with pytest.raises(ValidationError):
            ImportOptions(target_size=(0, 100))


@pytest.mark.unit
class TestCoercionLog:
    """Test coercion bookkeeping."""

    def test_with_default_missing(self):
        """Missing values should be replaced and flagged."""
        result = with_default(None, 50, "grid size")

        assert result.value == 50
        assert result.used_default is True
        assert result.message == "Missing grid size, using 50"

    def test_with_default_present(self):
        result = with_default(70, 50, "grid size")

        assert result.value == 70
        assert result.used_default is False

    def test_default_records_message(self):
        log = CoercionLog("roll20")

        assert log.default(None, 50, "graphic g1 width") == 50
        assert log.default(20, 50, "graphic g1 height") == 20
        assert log.messages == ["Missing graphic g1 width, using 50"]

    def test_record_logs_warning(self, caplog):
        """Recorded coercions should also be logged at WARNING."""
        log = CoercionLog("foundry")

        with caplog.at_level("WARNING"):
            log.record("Missing grid, using size 50")

        assert "[foundry] Missing grid, using size 50" in caplog.text


@pytest.mark.unit
class TestIdAllocator:
    """Test IdAllocator."""

    def test_fresh_ids_by_default(self):
        ids = IdAllocator(False, CoercionLog("roll20"))

        first = ids.allocate("g1")
        second = ids.allocate("g1")

        assert first != "g1"
        assert first != second

    def test_preserve_ids(self):
        ids = IdAllocator(True, CoercionLog("roll20"))

        assert ids.allocate("g1") == "g1"

    def test_preserve_ids_replaces_duplicates(self):
        """Repeated source ids should be replaced and recorded."""
        log = CoercionLog("roll20")
        ids = IdAllocator(True, log)

        ids.allocate("g1")
        replacement = ids.allocate("g1")

        assert replacement != "g1"
        assert len(log.messages) == 1
        assert "Duplicate object id 'g1'" in log.messages[0]

    def test_preserve_ids_fills_missing(self):
        log = CoercionLog("roll20")
        ids = IdAllocator(True, log)

        assert ids.allocate(None)
        assert len(log.messages) == 1

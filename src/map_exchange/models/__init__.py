"""Canonical map model and import result types."""

from .battle_map import (
    SHAPE_TYPES,
    BattleMap,
    Grid,
    MapObject,
    Point,
    ShapeObject,
    ShapeType,
    TextObject,
    TokenObject,
)
from .results import (
    Coerced,
    CoercionLog,
    IdAllocator,
    ImportOptions,
    ImportResult,
    with_default,
)

__all__ = [
    # Canonical map
    "BattleMap",
    "Grid",
    "MapObject",
    "Point",
    "ShapeObject",
    "ShapeType",
    "SHAPE_TYPES",
    "TextObject",
    "TokenObject",
    # Import bookkeeping
    "Coerced",
    "CoercionLog",
    "IdAllocator",
    "ImportOptions",
    "ImportResult",
    "with_default",
]

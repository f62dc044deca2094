"""Cross-format map exchange engine.

Converts battle maps between the editor's canonical BattleMap model and
Roll20, Foundry VTT and Universal VTT documents.

Usage:
    from map_exchange import import_map, export_map, MapFormat

    result = import_map("cave.dd2vtt", text)
    scene = export_map(result.map, MapFormat.FOUNDRY)
"""

from .exceptions import (
    ConfigurationError,
    FormatMismatchError,
    MapExchangeError,
    ParseError,
    UnsupportedShapeError,
)
from .models import (
    BattleMap,
    Grid,
    ImportOptions,
    ImportResult,
    MapObject,
    Point,
    ShapeObject,
    TextObject,
    TokenObject,
)
from .registry import ConverterRegistry, MapConverter, registry
from .foundry import FoundryConverter
from .native import NativeConverter
from .roll20 import Roll20Converter
from .universal_vtt import UniversalVTTConverter
from .dispatcher import MapFormat, detect_format, export_map, import_map, parse_document
from .scaling import scale_to_fit

# Auto-register converters
registry.register(UniversalVTTConverter())
registry.register(Roll20Converter())
registry.register(FoundryConverter())
registry.register(NativeConverter())

__version__ = "1.0.0"

__all__ = [
    # Dispatch
    "MapFormat",
    "detect_format",
    "export_map",
    "import_map",
    "parse_document",
    "scale_to_fit",
    # Converters
    "ConverterRegistry",
    "MapConverter",
    "registry",
    "FoundryConverter",
    "NativeConverter",
    "Roll20Converter",
    "UniversalVTTConverter",
    # Model
    "BattleMap",
    "Grid",
    "ImportOptions",
    "ImportResult",
    "MapObject",
    "Point",
    "ShapeObject",
    "TextObject",
    "TokenObject",
    # Errors
    "ConfigurationError",
    "FormatMismatchError",
    "MapExchangeError",
    "ParseError",
    "UnsupportedShapeError",
]

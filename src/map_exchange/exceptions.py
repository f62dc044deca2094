"""Centralized exception hierarchy for the map exchange engine.

Usage:
    from map_exchange.exceptions import ParseError, FormatMismatchError

    raise ParseError("Invalid JSON", format_id="roll20")
    raise FormatMismatchError("No pages found in Roll20 export", format_id="roll20")

Non-fatal coercions are not exceptions; they are collected as strings in
ImportResult.warnings.
"""

from typing import Optional


class MapExchangeError(Exception):
    """Base exception for all map exchange errors."""

    def __init__(self, message: str, format_id: Optional[str] = None):
        super().__init__(message)
        self.format_id = format_id


class ParseError(MapExchangeError):
    """Raised when input is not valid for the chosen format.

    Examples:
        - Malformed JSON text
        - A field holding the wrong type (e.g. graphics is not a list)
    """
    pass


class FormatMismatchError(MapExchangeError):
    """Raised when a document parses but lacks its structurally required root.

    Examples:
        - Roll20 export without any page
        - Universal VTT document without resolution
        - JSON that is not a scene object
    """
    pass


class UnsupportedShapeError(MapExchangeError):
    """Raised for a shape type outside a format's vocabulary.

    Only raised in strict mode; by default the shape degrades to a
    rectangle and a coercion warning is recorded instead.
    """

    def __init__(self, shape_type: str, format_id: Optional[str] = None):
        super().__init__(f"Unsupported shape type '{shape_type}'", format_id)
        self.shape_type = shape_type


class ConfigurationError(MapExchangeError):
    """Raised when configuration is invalid or missing.

    Examples:
        - Malformed MAP_EXCHANGE_TARGET_SIZE
        - Unknown log level
    """
    pass

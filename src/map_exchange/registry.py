"""Strategy registry of map converters, keyed by format id."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from .models import BattleMap, ImportOptions, ImportResult


class MapConverter(ABC):
    """Base class for all format converters."""

    @property
    @abstractmethod
    def format_id(self) -> str:
        """Format id (e.g. "roll20"); the registry key."""
        pass

    @abstractmethod
    def to_format(self, battle_map: BattleMap) -> Dict[str, Any]:
        """Convert a canonical map to a JSON-serializable document."""
        pass

    @abstractmethod
    def from_format(self, doc: Any, options: Optional[ImportOptions] = None) -> ImportResult:
        """Convert a parsed document to a canonical map."""
        pass


class ConverterRegistry:
    """Central registry for all converters."""

    def __init__(self):
        """Initialize empty registry."""
        self.converters: Dict[str, MapConverter] = {}

    def register(self, converter: MapConverter):
        """
        Register a converter.

        Args:
            converter: Converter instance to register
        """
        self.converters[converter.format_id] = converter

    def get(self, format_id: str) -> MapConverter:
        """
        Look up a converter by format id.

        Raises:
            ValueError: If no converter is registered for format_id
        """
        if format_id not in self.converters:
            raise ValueError(f"Unknown map format: {format_id}")
        return self.converters[format_id]

    def formats(self) -> List[str]:
        """Registered format ids."""
        return list(self.converters)


# Global registry instance
registry = ConverterRegistry()

"""Foundry VTT scene support (v9 and v10+ documents)."""

from .converter import FoundryConverter, from_foundry, to_foundry
from .models import FORMAT_ID, FoundryDrawing, FoundryScene, FoundryToken, looks_like_scene

__all__ = [
    "FORMAT_ID",
    "FoundryConverter",
    "FoundryDrawing",
    "FoundryScene",
    "FoundryToken",
    "from_foundry",
    "looks_like_scene",
    "to_foundry",
]

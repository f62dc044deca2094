"""Roll20 campaign export support."""

from .converter import Roll20Converter, from_roll20, to_roll20
from .models import FORMAT_ID, Roll20Graphic, Roll20Page, Roll20Text

__all__ = [
    "FORMAT_ID",
    "Roll20Converter",
    "Roll20Graphic",
    "Roll20Page",
    "Roll20Text",
    "from_roll20",
    "to_roll20",
]

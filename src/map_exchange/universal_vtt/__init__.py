"""Universal VTT (.dd2vtt) support."""

from .converter import UniversalVTTConverter, from_universal_vtt, to_universal_vtt
from .models import FORMAT_ID, UniversalVTTMap, UVTTObject

__all__ = [
    "FORMAT_ID",
    "UniversalVTTConverter",
    "UniversalVTTMap",
    "UVTTObject",
    "from_universal_vtt",
    "to_universal_vtt",
]

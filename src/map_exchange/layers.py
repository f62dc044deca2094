"""Projection of each format's layer vocabulary onto the canonical layer axis.

Canonical layers are integers in [0, 100]: GM-only content around 20,
terrain and drawings around 30, tokens around 40, UI overlays above 40.
"""

import re
from typing import Dict, Optional, Union

from .config import DEFAULT_LAYER, GM_LAYER, MAP_LAYER, MAX_LAYER, MIN_LAYER, TOKEN_LAYER
from .models import Coerced

ROLL20_LAYERS: Dict[str, int] = {
    "gmlayer": GM_LAYER,
    "map": MAP_LAYER,
    "objects": TOKEN_LAYER,
}

# Foundry has no layer token; the collection an object lives in decides
FOUNDRY_LAYERS: Dict[str, int] = {
    "drawings": MAP_LAYER,
    "tokens": TOKEN_LAYER,
}

UNIVERSAL_VTT_LAYERS: Dict[str, int] = {
    "gm": GM_LAYER,
    "gmlayer": GM_LAYER,
    "map": MAP_LAYER,
    "terrain": MAP_LAYER,
    "drawings": MAP_LAYER,
    "objects": TOKEN_LAYER,
    "tokens": TOKEN_LAYER,
    "overlay": 50,
}

LAYER_TABLES: Dict[str, Dict[str, int]] = {
    "roll20": ROLL20_LAYERS,
    "foundry": FOUNDRY_LAYERS,
    "universal-vtt": UNIVERSAL_VTT_LAYERS,
}

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def _table(format_id: str) -> Dict[str, int]:
    try:
        return LAYER_TABLES[format_id]
    except KeyError:
        raise ValueError(f"No layer table for format: {format_id}") from None


def clamp_layer(layer: int) -> int:
    return max(MIN_LAYER, min(MAX_LAYER, layer))


def map_layer_to_canonical(token: Optional[Union[str, int, float]], format_id: str) -> Coerced[int]:
    """Resolve a format layer token to a canonical layer.

    Universal VTT also accepts stringified integers (leading digits, like
    JavaScript's parseInt). A parsed "0" stays layer 0; it is not treated
    as missing, unlike the `parseInt(layer) || 30` idiom which turns it into
    30. Missing or unrecognized tokens resolve to the default mid layer with
    used_default set; never raises for bad input.
    """
    table = _table(format_id)
    if token is None or str(token).strip() == "":
        return Coerced(DEFAULT_LAYER, True, f"Missing layer, using {DEFAULT_LAYER}")

    key = str(token).strip().lower()
    if key in table:
        return Coerced(table[key])

    if format_id == "universal-vtt":
        match = _LEADING_INT.match(key)
        if match:
            value = int(match.group(1))
            clamped = clamp_layer(value)
            if clamped != value:
                return Coerced(clamped, True, f"Layer {value} out of range, clamped to {clamped}")
            return Coerced(value)

    return Coerced(DEFAULT_LAYER, True, f"Unknown layer '{token}', using {DEFAULT_LAYER}")


def canonical_layer_to_format(layer: int, format_id: str) -> str:
    """Pick the format token for a canonical layer.

    Named vocabularies use the nearest bucket (ties go to the lower layer);
    Universal VTT writes the layer number as a string.
    """
    if format_id == "universal-vtt":
        return str(int(layer))
    table = _table(format_id)
    return min(table.items(), key=lambda item: (abs(item[1] - layer), item[1]))[0]

"""Pydantic models for the Foundry VTT scene schema (consumed subset).

Covers v9 documents (top-level drawing type, token img) and v10+ documents
(shape.type codes, token texture.src).
"""

from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..exceptions import FormatMismatchError
from ..validation import require_object, validate_record

FORMAT_ID = "foundry"

GRID_TYPE_SQUARE = 1
GRID_TYPE_HEX = 2  # unverified against Foundry's own docs; see DESIGN.md


class FoundryModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class FoundryGrid(FoundryModel):
    type: int = GRID_TYPE_SQUARE
    size: Optional[float] = None
    color: Optional[str] = None
    alpha: Optional[float] = None


class FoundryBackground(FoundryModel):
    src: Optional[str] = None
    offset_x: float = 0
    offset_y: float = 0
    scale_x: float = 1
    scale_y: float = 1


class FoundryTexture(FoundryModel):
    src: Optional[str] = None
    scale_x: float = 1
    scale_y: float = 1


class FoundryToken(FoundryModel):
    id: Optional[str] = Field(default=None, alias="_id")
    name: Optional[str] = None
    x: float = 0
    y: float = 0
    width: Optional[float] = None
    height: Optional[float] = None
    rotation: float = 0
    hidden: bool = False
    locked: bool = False
    texture: Optional[FoundryTexture] = None
    img: Optional[str] = None  # pre-v10 image path
    actor_id: Optional[str] = None


class FoundryDrawingShape(FoundryModel):
    type: Optional[str] = None
    width: Optional[float] = None
    height: Optional[float] = None
    radius: Optional[float] = None
    points: Optional[List[float]] = None


class FoundryDrawing(FoundryModel):
    id: Optional[str] = Field(default=None, alias="_id")
    type: Optional[str] = None
    x: float = 0
    y: float = 0
    shape: FoundryDrawingShape = FoundryDrawingShape()
    stroke_color: Optional[str] = None
    stroke_width: Optional[float] = None
    fill_color: Optional[str] = None
    fill_type: Optional[int] = None
    hidden: bool = False
    locked: bool = False
    text: Optional[str] = None
    font_family: Optional[str] = None
    font_size: Optional[float] = None
    text_color: Optional[str] = None


class FoundryScene(FoundryModel):
    id: Optional[str] = Field(default=None, alias="_id")
    name: Optional[str] = None
    width: Optional[float] = None
    height: Optional[float] = None
    background: Optional[FoundryBackground] = None
    img: Optional[str] = None  # pre-v10 background path
    grid: Union[FoundryGrid, float, None] = None  # bare number before v10
    tokens: List[FoundryToken] = []
    drawings: List[FoundryDrawing] = []
    walls: List[Dict[str, Any]] = []
    lights: List[Dict[str, Any]] = []
    sounds: List[Dict[str, Any]] = []
    templates: List[Dict[str, Any]] = []


SCENE_KEYS = ("tokens", "drawings", "grid")


def looks_like_scene(doc: Dict[str, Any]) -> bool:
    """True for a bare scene object (as opposed to a native map)."""
    return "objects" not in doc and any(key in doc for key in ("tokens", "drawings")) and "grid" in doc


def parse_foundry_scene(doc: Any) -> FoundryScene:
    """Validate a raw Foundry document and return its scene.

    Accepts a scene object or a world/compendium export with "scenes"
    (first scene is used).

    Raises:
        FormatMismatchError: No recognizable scene shape
        ParseError: Scene fields do not match the schema
    """
    root = require_object(doc, FORMAT_ID)
    if "scenes" in root:
        scenes = root["scenes"]
        if not isinstance(scenes, list) or not scenes:
            raise FormatMismatchError("No scenes found in Foundry export", format_id=FORMAT_ID)
        root = require_object(scenes[0], FORMAT_ID)
    elif not any(key in root for key in SCENE_KEYS):
        raise FormatMismatchError(
            "Document has no scenes, tokens, drawings or grid; not a Foundry scene",
            format_id=FORMAT_ID,
        )
    return validate_record(FoundryScene, root, FORMAT_ID)

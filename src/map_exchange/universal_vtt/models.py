"""Pydantic models for the Universal VTT (.dd2vtt) schema (consumed subset)."""

from typing import Any, List, Optional, Union
from pydantic import BaseModel, ConfigDict

from ..validation import require_keys, require_object, validate_record

FORMAT_ID = "universal-vtt"
FORMAT_NAME = "universal-vtt"
FORMAT_VERSION = "1.0"


class UVTTModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class UVTTPoint(UVTTModel):
    x: float = 0
    y: float = 0


class UVTTSize(UVTTModel):
    """Map or object size.

    The editor writes width/height in pixels; Dungeondraft writes x/y in
    grid squares.
    """

    width: Optional[float] = None
    height: Optional[float] = None
    x: Optional[float] = None
    y: Optional[float] = None


class UVTTResolution(UVTTModel):
    map_origin: UVTTPoint = UVTTPoint()
    map_size: UVTTSize = UVTTSize()
    pixels_per_grid: Optional[float] = None


class UVTTToken(UVTTModel):
    name: Optional[str] = None
    image_url: Optional[str] = None
    size: Optional[UVTTSize] = None


class UVTTShape(UVTTModel):
    shape_type: Optional[str] = None
    fill_color: Optional[str] = None
    stroke_color: Optional[str] = None
    stroke_width: Optional[float] = None
    points: Optional[List[UVTTPoint]] = None
    radius: Optional[float] = None
    size: Optional[UVTTSize] = None


class UVTTText(UVTTModel):
    content: str = ""
    font_family: Optional[str] = None
    font_size: Optional[float] = None
    color: Optional[str] = None
    size: Optional[UVTTSize] = None  # text box, in pixels


class UVTTImage(UVTTModel):
    url: Optional[str] = None
    size: Optional[UVTTSize] = None


class UVTTObject(UVTTModel):
    id: Optional[str] = None
    type: str = "shape"
    position: UVTTPoint = UVTTPoint()
    rotation: Optional[float] = None
    visible: Optional[bool] = None
    locked: Optional[bool] = None
    layer: Optional[Union[str, int, float]] = None
    token: Optional[UVTTToken] = None
    shape: Optional[UVTTShape] = None
    text: Optional[UVTTText] = None
    image: Optional[UVTTImage] = None


class UniversalVTTMap(UVTTModel):
    format: Optional[Union[str, float]] = None
    version: Optional[str] = None
    name: Optional[str] = None
    resolution: UVTTResolution
    image: Optional[str] = None  # base64 PNG in Dungeondraft exports
    objects: List[UVTTObject] = []


def parse_universal_vtt(doc: Any) -> UniversalVTTMap:
    """Validate a raw Universal VTT document.

    Raises:
        FormatMismatchError: Root is not an object or has no resolution
        ParseError: Fields do not match the schema
    """
    root = require_object(doc, FORMAT_ID)
    require_keys(root, ["resolution"], FORMAT_ID)
    return validate_record(UniversalVTTMap, root, FORMAT_ID)

"""Pydantic models for the Roll20 campaign export schema (consumed subset)."""

from typing import Any, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import FormatMismatchError
from ..validation import require_keys, require_object, validate_record

FORMAT_ID = "roll20"


class Roll20Model(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Roll20Graphic(Roll20Model):
    """A graphic: token, map image or drawing. left/top are the box center.

    Drawings carry their outline in path as [["M", x, y], ["L", x, y], ...],
    relative to the top-left of the box. Campaign exports store it as a
    JSON-encoded string.
    """

    id: Optional[str] = Field(default=None, alias="_id")
    type: str = Field(default="graphic", alias="_type")
    name: Optional[str] = None
    imgsrc: Optional[str] = None
    left: float = 0
    top: float = 0
    width: Optional[float] = None
    height: Optional[float] = None
    rotation: float = 0
    layer: Optional[str] = None
    isdrawing: bool = False
    stroke: Optional[str] = None
    stroke_width: Optional[float] = None
    fill: Optional[str] = None
    path: Optional[Union[str, List[List[Any]]]] = None


class Roll20Text(Roll20Model):
    id: Optional[str] = Field(default=None, alias="_id")
    type: str = Field(default="text", alias="_type")
    text: str = ""
    left: float = 0
    top: float = 0
    width: Optional[float] = None
    height: Optional[float] = None
    font_family: Optional[str] = None
    font_size: Optional[float] = None
    color: Optional[str] = None


class Roll20Page(Roll20Model):
    id: Optional[str] = Field(default=None, alias="_id")
    name: Optional[str] = None
    width: Optional[float] = None
    height: Optional[float] = None
    background_color: Optional[str] = None
    grid_opacity: Optional[float] = None
    grid_size: Optional[float] = None
    snapping_increment: Optional[float] = None
    scale_number: Optional[float] = None
    graphics: List[Roll20Graphic] = []
    text: Optional[List[Roll20Text]] = None


def parse_roll20_page(doc: Any) -> Roll20Page:
    """Validate a raw Roll20 export and return its first page.

    Raises:
        FormatMismatchError: Root is not an object or holds no page
        ParseError: The first page does not match the schema
    """
    root = require_object(doc, FORMAT_ID)
    require_keys(root, ["pages"], FORMAT_ID)
    pages = root["pages"]
    if not isinstance(pages, list) or not pages:
        raise FormatMismatchError("No pages found in Roll20 export", format_id=FORMAT_ID)
    return validate_record(Roll20Page, pages[0], FORMAT_ID)

"""Canonical battle map model shared by every converter.

Python attributes are snake_case; the JSON form (native files, to_native())
uses the editor's camelCase keys (shapeType, strokeWidth, fontFamily).
"""

from typing import Annotated, List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from ..config import (
    DEFAULT_GRID_COLOR,
    DEFAULT_GRID_SIZE,
    DEFAULT_LAYER,
    DEFAULT_OBJECT_SIZE,
    MAX_LAYER,
    MIN_LAYER,
    TOKEN_LAYER,
)

ShapeType = Literal["rect", "circle", "polygon", "line"]
GridType = Literal["square", "hex"]

SHAPE_TYPES = ("rect", "circle", "polygon", "line")


class CanonicalModel(BaseModel):
    """Base for canonical records: immutable, camelCase on the wire."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Point(CanonicalModel):
    x: float
    y: float


class Grid(CanonicalModel):
    """Map grid; size is pixels per square."""

    size: float = Field(default=DEFAULT_GRID_SIZE, gt=0)
    type: GridType = "square"
    visible: bool = True
    snap: bool = True
    color: str = DEFAULT_GRID_COLOR


class _MapObjectBase(CanonicalModel):
    id: str
    position: Point  # top-left corner, pixels
    rotation: float = 0
    visible: bool = True
    locked: bool = False
    layer: int = Field(default=DEFAULT_LAYER, ge=MIN_LAYER, le=MAX_LAYER)


class TokenObject(_MapObjectBase):
    type: Literal["token"] = "token"
    layer: int = Field(default=TOKEN_LAYER, ge=MIN_LAYER, le=MAX_LAYER)
    width: float = DEFAULT_OBJECT_SIZE
    height: float = DEFAULT_OBJECT_SIZE
    name: Optional[str] = None
    image: Optional[str] = None


class ShapeObject(_MapObjectBase):
    type: Literal["shape"] = "shape"
    shape_type: ShapeType = "rect"
    width: float = DEFAULT_OBJECT_SIZE
    height: float = DEFAULT_OBJECT_SIZE
    radius: Optional[float] = None
    points: Optional[List[float]] = None  # [x0, y0, x1, y1, ...] relative to position
    fill: Optional[str] = None
    stroke: Optional[str] = None
    stroke_width: Optional[float] = None

    @field_validator("points")
    @classmethod
    def validate_points(cls, v: Optional[List[float]]) -> Optional[List[float]]:
        """Flattened point arrays hold x/y pairs."""
        if v is not None and len(v) % 2 != 0:
            raise ValueError(f"points must have even length, got {len(v)}")
        return v


class TextObject(_MapObjectBase):
    type: Literal["text"] = "text"
    text: str = ""
    font_family: Optional[str] = None
    font_size: Optional[float] = None
    fill: Optional[str] = None
    width: Optional[float] = None
    height: Optional[float] = None


MapObject = Annotated[
    Union[TokenObject, ShapeObject, TextObject],
    Field(discriminator="type"),
]


class BattleMap(CanonicalModel):
    """The editor's in-memory battle map."""

    id: str
    name: str
    width: float = Field(gt=0)
    height: float = Field(gt=0)
    grid: Grid = Grid()
    objects: List[MapObject] = []
    background: Optional[str] = None

    @model_validator(mode="after")
    def validate_unique_ids(self) -> "BattleMap":
        """Object ids must be unique within a map."""
        seen = set()
        for obj in self.objects:
            if obj.id in seen:
                raise ValueError(f"Duplicate object id: {obj.id}")
            seen.add(obj.id)
        return self

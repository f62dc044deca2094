"""Geometry adapters: point encodings, anchoring and shape vocabularies."""

from typing import Dict, Iterable, List, Optional, Sequence

from .exceptions import UnsupportedShapeError
from .models import Coerced, CoercionLog, Point, ShapeType


def array_to_points(flat: Sequence[float]) -> List[Point]:
    """Convert [x0, y0, x1, y1, ...] to a list of points."""
    if len(flat) % 2 != 0:
        raise ValueError(f"Point array must have even length, got {len(flat)}")
    return [Point(x=flat[i], y=flat[i + 1]) for i in range(0, len(flat), 2)]


def points_to_array(points: Iterable[Point]) -> List[float]:
    """Convert a list of points to [x0, y0, x1, y1, ...]."""
    return [coord for p in points for coord in (p.x, p.y)]


def center_to_corner(center: Point, width: float, height: float) -> Point:
    """Top-left corner of a box given its center (Roll20 left/top)."""
    return Point(x=center.x - width / 2, y=center.y - height / 2)


def corner_to_center(corner: Point, width: float, height: float) -> Point:
    """Center of a box given its top-left corner."""
    return Point(x=corner.x + width / 2, y=corner.y + height / 2)


class ShapeVocabulary:
    """Bidirectional mapping between one format's shape names and canonical shape types.

    Args:
        format_id: Format the vocabulary belongs to
        to_canonical: Format token -> canonical shape type (aliases allowed)
        from_canonical: Canonical shape type -> format token, for all four types
    """

    FALLBACK: ShapeType = "rect"

    def __init__(
        self,
        format_id: str,
        to_canonical: Dict[str, ShapeType],
        from_canonical: Dict[ShapeType, str],
    ):
        self.format_id = format_id
        self._to_canonical = to_canonical
        self._from_canonical = from_canonical

    def to_canonical(self, token: Optional[str]) -> Coerced[ShapeType]:
        if token is not None and token.lower() in self._to_canonical:
            return Coerced(self._to_canonical[token.lower()])
        return Coerced(
            self.FALLBACK,
            True,
            f"Unsupported shape type '{token}', using '{self.FALLBACK}'",
        )

    def resolve(
        self,
        token: Optional[str],
        log: CoercionLog,
        strict: bool = False,
        context: Optional[str] = None,
    ) -> ShapeType:
        """Canonical shape type for token; degrades to rect unless strict."""
        coerced = self.to_canonical(token)
        if coerced.used_default and strict:
            raise UnsupportedShapeError(str(token), self.format_id)
        return log.resolve(coerced, context)

    def from_canonical(self, shape_type: ShapeType) -> str:
        return self._from_canonical[shape_type]


UNIVERSAL_VTT_SHAPES = ShapeVocabulary(
    "universal-vtt",
    to_canonical={
        "rectangle": "rect",
        "rect": "rect",
        "circle": "circle",
        "polygon": "polygon",
        "line": "line",
    },
    from_canonical={
        "rect": "rectangle",
        "circle": "circle",
        "polygon": "polygon",
        "line": "line",
    },
)

# Foundry v10+ writes single-letter codes under shape.type
FOUNDRY_SHAPES = ShapeVocabulary(
    "foundry",
    to_canonical={
        "rectangle": "rect",
        "r": "rect",
        "ellipse": "circle",
        "e": "circle",
        "polygon": "polygon",
        "p": "polygon",
        "freehand": "line",
        "f": "line",
    },
    from_canonical={
        "rect": "rectangle",
        "circle": "ellipse",
        "polygon": "polygon",
        "line": "freehand",
    },
)

# Roll20 only distinguishes drawn paths from plain graphics
ROLL20_SHAPES = ShapeVocabulary(
    "roll20",
    to_canonical={
        "rect": "rect",
        "path": "line",
    },
    from_canonical={
        "rect": "rect",
        "circle": "path",
        "polygon": "path",
        "line": "path",
    },
)

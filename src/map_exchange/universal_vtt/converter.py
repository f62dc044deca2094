"""Convert between the canonical BattleMap and Universal VTT documents."""

import logging
import uuid
from typing import Any, Dict, List, Optional, Tuple

from ..config import DEFAULT_GRID_SIZE, DEFAULT_OBJECT_SIZE
from ..exceptions import UnsupportedShapeError
from ..geometry import UNIVERSAL_VTT_SHAPES, array_to_points, points_to_array
from ..importing import finalize_import
from ..layers import canonical_layer_to_format, map_layer_to_canonical
from ..models import (
    BattleMap,
    CoercionLog,
    IdAllocator,
    ImportOptions,
    ImportResult,
    MapObject,
    Point,
    ShapeObject,
    TextObject,
    TokenObject,
)
from ..registry import MapConverter
from .models import (
    FORMAT_ID,
    FORMAT_NAME,
    FORMAT_VERSION,
    UniversalVTTMap,
    UVTTObject,
    UVTTPoint,
    UVTTResolution,
    UVTTShape,
    UVTTSize,
    UVTTText,
    UVTTToken,
    parse_universal_vtt,
)

logger = logging.getLogger(__name__)

DEFAULT_MAP_WIDTH = 1920
DEFAULT_MAP_HEIGHT = 1080


def _object_to_uvtt(obj: MapObject) -> UVTTObject:
    record: Dict[str, Any] = {}
    if isinstance(obj, TokenObject):
        record["token"] = UVTTToken(
            name=obj.name or "Token",
            image_url=obj.image or "",
            size=UVTTSize(width=obj.width, height=obj.height),
        )
    elif isinstance(obj, ShapeObject):
        points = None
        if obj.points:
            points = [UVTTPoint(x=p.x, y=p.y) for p in array_to_points(obj.points)]
        radius = obj.radius
        if obj.shape_type == "circle" and radius is None:
            radius = obj.width / 2
        record["shape"] = UVTTShape(
            shape_type=UNIVERSAL_VTT_SHAPES.from_canonical(obj.shape_type),
            fill_color=obj.fill,
            stroke_color=obj.stroke,
            stroke_width=obj.stroke_width,
            points=points,
            radius=radius,
            size=UVTTSize(width=obj.width, height=obj.height),
        )
    else:
        record["text"] = UVTTText(
            content=obj.text,
            font_family=obj.font_family,
            font_size=obj.font_size,
            color=obj.fill,
            size=(
                UVTTSize(width=obj.width, height=obj.height)
                if obj.width is not None or obj.height is not None else None
            ),
        )

    return UVTTObject(
        id=obj.id,
        type=obj.type,
        position=UVTTPoint(x=obj.position.x, y=obj.position.y),
        rotation=obj.rotation,
        visible=obj.visible,
        locked=obj.locked,
        layer=canonical_layer_to_format(obj.layer, FORMAT_ID),
        **record,
    )


def to_universal_vtt(battle_map: BattleMap) -> Dict[str, Any]:
    """
    Convert a canonical map to a Universal VTT document.

    Each object carries one type-specific sub-record; flat shape point
    arrays are written as lists of {x, y}.

    Returns:
        JSON-serializable dict
    """
    document = UniversalVTTMap(
        format=FORMAT_NAME,
        version=FORMAT_VERSION,
        name=battle_map.name,
        resolution=UVTTResolution(
            map_origin=UVTTPoint(x=0, y=0),
            map_size=UVTTSize(width=battle_map.width, height=battle_map.height),
            pixels_per_grid=battle_map.grid.size,
        ),
        objects=[_object_to_uvtt(obj) for obj in battle_map.objects],
    )
    logger.debug(f"Exported '{battle_map.name}' to Universal VTT: {len(document.objects)} objects")
    return document.model_dump(exclude_none=True)


def _size(size: Optional[UVTTSize], label: str, log: CoercionLog) -> Tuple[float, float]:
    if size is None:
        log.record(f"{label}: Missing size, using {DEFAULT_OBJECT_SIZE}x{DEFAULT_OBJECT_SIZE}")
        return DEFAULT_OBJECT_SIZE, DEFAULT_OBJECT_SIZE
    width = log.default(size.width, DEFAULT_OBJECT_SIZE, f"{label} width")
    height = log.default(size.height, DEFAULT_OBJECT_SIZE, f"{label} height")
    return width, height


def _shape_geometry(shape: UVTTShape, label: str, log: CoercionLog) -> Dict[str, Any]:
    geometry: Dict[str, Any] = {}
    if shape.points:
        geometry["points"] = points_to_array(Point(x=p.x, y=p.y) for p in shape.points)
    if shape.radius is not None:
        geometry["radius"] = shape.radius

    if shape.size is not None:
        geometry["width"], geometry["height"] = _size(shape.size, label, log)
    elif shape.radius is not None:
        geometry["width"] = geometry["height"] = shape.radius * 2
    elif shape.points:
        xs, ys = geometry["points"][0::2], geometry["points"][1::2]
        geometry["width"], geometry["height"] = max(xs) - min(xs), max(ys) - min(ys)
    return geometry


def _object_from_uvtt(
    obj: UVTTObject,
    ids: IdAllocator,
    log: CoercionLog,
    options: ImportOptions,
) -> MapObject:
    label = f"object {obj.id or '<no id>'}"
    common = {
        "id": ids.allocate(obj.id),
        "position": Point(x=obj.position.x, y=obj.position.y),
        "rotation": obj.rotation or 0,
        "visible": obj.visible is not False,
        "locked": bool(obj.locked),
        "layer": log.resolve(map_layer_to_canonical(obj.layer, FORMAT_ID), label),
    }

    if obj.type == "token":
        token = obj.token or UVTTToken()
        width, height = _size(token.size, label, log)
        return TokenObject(**common, width=width, height=height, name=token.name, image=token.image_url or None)

    if obj.type == "text":
        text = obj.text or UVTTText()
        return TextObject(
            **common,
            text=text.content,
            font_family=text.font_family,
            font_size=text.font_size,
            fill=text.color,
            width=text.size.width if text.size else None,
            height=text.size.height if text.size else None,
        )

    if obj.type == "shape":
        shape = obj.shape or UVTTShape()
        shape_type = UNIVERSAL_VTT_SHAPES.resolve(shape.shape_type, log, options.strict_shapes, label)
        return ShapeObject(
            **common,
            **_shape_geometry(shape, label, log),
            shape_type=shape_type,
            fill=shape.fill_color,
            stroke=shape.stroke_color,
            stroke_width=shape.stroke_width,
        )

    # image, wall, light and anything newer degrade to a plain rectangle
    if options.strict_shapes:
        raise UnsupportedShapeError(obj.type, FORMAT_ID)
    log.record(f"{label}: Unsupported object type '{obj.type}', using 'rect' shape")
    size = obj.image.size if obj.image and obj.image.size else UVTTSize()
    return ShapeObject(
        **common,
        shape_type="rect",
        width=size.width or DEFAULT_OBJECT_SIZE,
        height=size.height or DEFAULT_OBJECT_SIZE,
    )


def _map_size(document: UniversalVTTMap, grid_size: float, log: CoercionLog) -> Tuple[float, float]:
    size = document.resolution.map_size
    if size.width and size.height and size.width > 0 and size.height > 0:
        return size.width, size.height
    if size.x and size.y and size.x > 0 and size.y > 0:
        log.record(f"map_size given in grid squares ({size.x}x{size.y}), converted to pixels")
        return size.x * grid_size, size.y * grid_size
    log.record(f"Missing map_size, using {DEFAULT_MAP_WIDTH}x{DEFAULT_MAP_HEIGHT}")
    return DEFAULT_MAP_WIDTH, DEFAULT_MAP_HEIGHT


def _background(image: Optional[str]) -> Optional[str]:
    if not image:
        return None
    if image.startswith(("data:", "http://", "https://")):
        return image
    return f"data:image/png;base64,{image}"


def from_universal_vtt(doc: Any, options: Optional[ImportOptions] = None) -> ImportResult:
    """
    Convert a Universal VTT document to a canonical map.

    Object layers are resolved through the Universal VTT layer table;
    missing or unknown layers fall back to 30 with a warning.

    Args:
        doc: Parsed Universal VTT JSON
        options: Import options (default: fresh ids, lenient shapes)

    Returns:
        ImportResult with the map and any coercion warnings

    Raises:
        FormatMismatchError: Document has no resolution
        ParseError: Fields do not match the Universal VTT schema
    """
    options = options or ImportOptions()
    document = parse_universal_vtt(doc)
    log = CoercionLog(FORMAT_ID, logger)
    ids = IdAllocator(options.preserve_ids, log)

    grid_size = document.resolution.pixels_per_grid
    if grid_size is None or grid_size <= 0:
        log.record(f"Missing pixels_per_grid, using {DEFAULT_GRID_SIZE}")
        grid_size = DEFAULT_GRID_SIZE
    width, height = _map_size(document, grid_size, log)

    objects: List[MapObject] = [_object_from_uvtt(obj, ids, log, options) for obj in document.objects]

    map_data = {
        "id": str(uuid.uuid4()),
        "name": document.name or "Imported Universal VTT Map",
        "width": width,
        "height": height,
        "grid": {"size": grid_size, "type": "square", "visible": True, "snap": True},
        "objects": objects,
        "background": _background(document.image),
    }
    return finalize_import(map_data, log, options)


class UniversalVTTConverter(MapConverter):
    """Universal VTT (.dd2vtt) converter."""

    format_id = FORMAT_ID

    def to_format(self, battle_map: BattleMap) -> Dict[str, Any]:
        return to_universal_vtt(battle_map)

    def from_format(self, doc: Any, options: Optional[ImportOptions] = None) -> ImportResult:
        return from_universal_vtt(doc, options)

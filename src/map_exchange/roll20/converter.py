"""Convert between the canonical BattleMap and Roll20 campaign exports.

Roll20 graphics are center-anchored (left/top is the middle of the box);
canonical positions are top-left corners. Only the first page of a
campaign is imported.
"""

import json
import logging
import uuid
from typing import Any, Dict, List, Optional, Tuple, Union

from ..config import (
    DEFAULT_GRID_SIZE,
    DEFAULT_OBJECT_SIZE,
    TEXT_LAYER,
)
from ..geometry import ROLL20_SHAPES, center_to_corner, corner_to_center
from ..importing import finalize_import
from ..layers import canonical_layer_to_format, map_layer_to_canonical
from ..models import (
    BattleMap,
    CoercionLog,
    IdAllocator,
    ImportOptions,
    ImportResult,
    Point,
    ShapeObject,
    TextObject,
    TokenObject,
)
from ..registry import MapConverter
from .models import FORMAT_ID, Roll20Graphic, Roll20Page, Roll20Text, parse_roll20_page

logger = logging.getLogger(__name__)

GRID_VISIBLE_OPACITY = 0.5
SCALE_NUMBER = 5  # feet per square
DEFAULT_PAGE_WIDTH = 1920
DEFAULT_PAGE_HEIGHT = 1080
DEFAULT_TEXT_WIDTH = 200
DEFAULT_TEXT_HEIGHT = 50
DEFAULT_FONT_FAMILY = "Arial"
DEFAULT_FONT_SIZE = 16


def _path_from_points(points: List[float], closed: bool) -> List[List[Any]]:
    """Encode flat canonical points as Roll20 path commands."""
    commands: List[List[Any]] = [["M", points[0], points[1]]]
    commands.extend(["L", points[i], points[i + 1]] for i in range(2, len(points), 2))
    if closed:
        commands.append(["L", points[0], points[1]])
    return commands


def _graphic_from_object(obj: Union[TokenObject, ShapeObject]) -> Roll20Graphic:
    center = corner_to_center(obj.position, obj.width, obj.height)
    is_shape = isinstance(obj, ShapeObject)
    path = None
    if is_shape and obj.points:
        path = _path_from_points(obj.points, closed=obj.shape_type == "polygon")
    return Roll20Graphic(
        id=obj.id,
        type="graphic",
        name=None if is_shape else obj.name,
        imgsrc=None if is_shape else obj.image,
        left=center.x,
        top=center.y,
        width=obj.width,
        height=obj.height,
        rotation=obj.rotation,
        layer=canonical_layer_to_format(obj.layer, FORMAT_ID),
        isdrawing=is_shape,
        stroke=obj.stroke if is_shape else None,
        stroke_width=obj.stroke_width if is_shape else None,
        fill=obj.fill if is_shape else None,
        path=path,
    )


def _text_from_object(obj: TextObject) -> Roll20Text:
    return Roll20Text(
        id=obj.id,
        type="text",
        text=obj.text,
        left=obj.position.x,
        top=obj.position.y,
        width=obj.width or DEFAULT_TEXT_WIDTH,
        height=obj.height or DEFAULT_TEXT_HEIGHT,
        font_family=obj.font_family or DEFAULT_FONT_FAMILY,
        font_size=obj.font_size or DEFAULT_FONT_SIZE,
        color=obj.fill or "#000000",
    )


def to_roll20(battle_map: BattleMap) -> Dict[str, Any]:
    """
    Convert a canonical map to a single-page Roll20 export.

    Tokens and shapes become graphics (shapes flagged isdrawing), text
    objects become Roll20 text entries. Grid visibility is carried only by
    grid_opacity.

    Returns:
        JSON-serializable dict: {"pages": [page]}
    """
    graphics: List[Roll20Graphic] = []
    texts: List[Roll20Text] = []
    for obj in battle_map.objects:
        if isinstance(obj, TextObject):
            texts.append(_text_from_object(obj))
        else:
            graphics.append(_graphic_from_object(obj))

    page = Roll20Page(
        id=str(uuid.uuid4()),
        name=battle_map.name,
        width=battle_map.width,
        height=battle_map.height,
        background_color=battle_map.background or "#ffffff",
        grid_opacity=GRID_VISIBLE_OPACITY if battle_map.grid.visible else 0,
        grid_size=battle_map.grid.size,
        snapping_increment=battle_map.grid.size,
        scale_number=SCALE_NUMBER,
        graphics=graphics,
        text=texts or None,
    )

    logger.debug(f"Exported '{battle_map.name}' to Roll20: {len(graphics)} graphics, {len(texts)} text")
    return {"pages": [page.model_dump(by_alias=True, exclude_none=True)]}


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _points_from_path(
    path: Union[str, List[List[Any]], None],
    label: str,
    log: CoercionLog,
) -> Optional[Tuple[List[float], bool]]:
    """
    Decode a Roll20 path into flat points and whether the outline is closed.

    Curve commands (Q, C) keep only their end point. A path is closed when
    it ends in Z or returns to its first point; the repeated point is dropped.
    Unreadable paths are recorded and yield None.
    """
    if path is None:
        log.record(f"{label}: Drawing has no path, points not imported")
        return None
    if isinstance(path, str):
        try:
            path = json.loads(path)
        except json.JSONDecodeError:
            path = None
    if not isinstance(path, list):
        log.record(f"{label}: Unreadable path, points not imported")
        return None

    points: List[float] = []
    closed = False
    for command in path:
        if not isinstance(command, list) or not command or not isinstance(command[0], str):
            log.record(f"{label}: Unreadable path, points not imported")
            return None
        if command[0].upper() == "Z":
            closed = True
            continue
        end = command[-2:]
        if len(command) < 3 or not all(_is_number(v) for v in end):
            log.record(f"{label}: Unreadable path command {command[0]!r}, points not imported")
            return None
        points.extend(float(v) for v in end)

    if not points:
        log.record(f"{label}: Empty path, points not imported")
        return None
    if len(points) >= 6 and points[-2:] == points[:2]:
        points = points[:-2]
        closed = True
    return points, closed


def _object_from_graphic(
    graphic: Roll20Graphic,
    ids: IdAllocator,
    log: CoercionLog,
    options: ImportOptions,
) -> Union[TokenObject, ShapeObject]:
    label = f"graphic {graphic.id or '<no id>'}"
    width = log.default(graphic.width, DEFAULT_OBJECT_SIZE, f"{label} width")
    height = log.default(graphic.height, DEFAULT_OBJECT_SIZE, f"{label} height")
    common = {
        "id": ids.allocate(graphic.id),
        "position": center_to_corner(Point(x=graphic.left, y=graphic.top), width, height),
        "rotation": graphic.rotation,
        "layer": log.resolve(map_layer_to_canonical(graphic.layer, FORMAT_ID), label),
        "width": width,
        "height": height,
    }

    if graphic.layer == "objects" and graphic.imgsrc:
        return TokenObject(**common, name=graphic.name, image=graphic.imgsrc)

    shape_token = "path" if graphic.isdrawing else "rect"
    shape_type = ROLL20_SHAPES.resolve(shape_token, log, options.strict_shapes, label)
    points = None
    if graphic.isdrawing:
        outline = _points_from_path(graphic.path, label, log)
        if outline is not None:
            points, closed = outline
            if closed:
                shape_type = "polygon"
    return ShapeObject(
        **common,
        shape_type=shape_type,
        points=points,
        fill=graphic.fill,
        stroke=graphic.stroke,
        stroke_width=graphic.stroke_width,
    )


def _object_from_text(text: Roll20Text, ids: IdAllocator) -> TextObject:
    # Roll20 text keeps left/top as written; no center correction
    return TextObject(
        id=ids.allocate(text.id),
        position=Point(x=text.left, y=text.top),
        layer=TEXT_LAYER,
        text=text.text,
        font_family=text.font_family,
        font_size=text.font_size,
        fill=text.color,
        width=text.width,
        height=text.height,
    )


def _grid_size(page: Roll20Page, log: CoercionLog) -> float:
    if page.grid_size and page.grid_size > 0:
        return page.grid_size
    if page.snapping_increment and page.snapping_increment > 0:
        log.record(f"Missing grid_size, using snapping_increment {page.snapping_increment}")
        return page.snapping_increment
    log.record(f"Missing grid_size, using {DEFAULT_GRID_SIZE}")
    return DEFAULT_GRID_SIZE


def _dimension(value: Optional[float], default: float, field: str, log: CoercionLog) -> float:
    if value is not None and value <= 0:
        log.record(f"Invalid page {field} {value}, using {default}")
        return default
    return log.default(value, default, f"page {field}")


def from_roll20(doc: Any, options: Optional[ImportOptions] = None) -> ImportResult:
    """
    Convert a Roll20 campaign export to a canonical map.

    Graphics on the objects layer with an image become tokens; every other
    graphic becomes a shape: rect, or for isdrawing graphics a line (a
    polygon when the path is closed) with points decoded from path.

    Args:
        doc: Parsed Roll20 JSON ({"pages": [...]})
        options: Import options (default: fresh ids, lenient shapes)

    Returns:
        ImportResult with the map and any coercion warnings

    Raises:
        FormatMismatchError: No pages in the export
        ParseError: First page does not match the Roll20 schema
    """
    options = options or ImportOptions()
    page = parse_roll20_page(doc)
    log = CoercionLog(FORMAT_ID, logger)
    ids = IdAllocator(options.preserve_ids, log)

    objects: List[Any] = [
        _object_from_graphic(graphic, ids, log, options) for graphic in page.graphics
    ]
    objects.extend(_object_from_text(text, ids) for text in page.text or [])

    map_data = {
        "id": page.id if options.preserve_ids and page.id else str(uuid.uuid4()),
        "name": page.name or "Imported Roll20 Map",
        "width": _dimension(page.width, DEFAULT_PAGE_WIDTH, "width", log),
        "height": _dimension(page.height, DEFAULT_PAGE_HEIGHT, "height", log),
        "grid": {
            "size": _grid_size(page, log),
            "type": "square",
            "visible": (page.grid_opacity or 0) > 0,
            "snap": True,
        },
        "objects": objects,
        "background": page.background_color,
    }
    return finalize_import(map_data, log, options)


class Roll20Converter(MapConverter):
    """Roll20 campaign export converter."""

    format_id = FORMAT_ID

    def to_format(self, battle_map: BattleMap) -> Dict[str, Any]:
        return to_roll20(battle_map)

    def from_format(self, doc: Any, options: Optional[ImportOptions] = None) -> ImportResult:
        return from_roll20(doc, options)

"""Convert between the canonical BattleMap and Foundry VTT scenes.

Foundry positions are top-left anchored like the canonical model, so only
the layer and shape vocabularies need translating: tokens sit on canonical
layer 40, drawings on 30.
"""

import logging
import uuid
from typing import Any, Dict, List, Optional, Tuple, Union

from ..config import (
    DEFAULT_GRID_COLOR,
    DEFAULT_GRID_SIZE,
    DEFAULT_OBJECT_SIZE,
    TEXT_LAYER,
)
from ..geometry import FOUNDRY_SHAPES
from ..importing import finalize_import
from ..layers import map_layer_to_canonical
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
from .models import (
    FORMAT_ID,
    GRID_TYPE_HEX,
    GRID_TYPE_SQUARE,
    FoundryBackground,
    FoundryDrawing,
    FoundryDrawingShape,
    FoundryGrid,
    FoundryScene,
    FoundryTexture,
    FoundryToken,
    parse_foundry_scene,
)

logger = logging.getLogger(__name__)

GRID_VISIBLE_ALPHA = 0.5
HEX_GRID_TYPES = (2, 3, 4, 5)  # v10+ splits hex into row/column, odd/even variants
TEXT_DRAWING_TYPES = ("t", "text")
DEFAULT_PAGE_WIDTH = 1920
DEFAULT_PAGE_HEIGHT = 1080
DEFAULT_ELLIPSE_RADIUS = 25


def _token_to_foundry(obj: TokenObject) -> FoundryToken:
    return FoundryToken(
        id=obj.id,
        name=obj.name or "Token",
        x=obj.position.x,
        y=obj.position.y,
        width=obj.width,
        height=obj.height,
        rotation=obj.rotation,
        hidden=not obj.visible,
        locked=obj.locked,
        texture=FoundryTexture(src=obj.image or ""),
    )


def _shape_to_foundry(obj: ShapeObject) -> FoundryDrawing:
    drawing_type = FOUNDRY_SHAPES.from_canonical(obj.shape_type)
    if obj.shape_type == "circle":
        shape = FoundryDrawingShape(radius=obj.width / 2)
    elif obj.shape_type in ("polygon", "line") and obj.points:
        shape = FoundryDrawingShape(width=obj.width, height=obj.height, points=list(obj.points))
    else:
        shape = FoundryDrawingShape(width=obj.width, height=obj.height)

    return FoundryDrawing(
        id=obj.id,
        type=drawing_type,
        x=obj.position.x,
        y=obj.position.y,
        shape=shape,
        stroke_color=obj.stroke or "#000000",
        stroke_width=obj.stroke_width if obj.stroke_width is not None else 1,
        fill_color=obj.fill,
        fill_type=1 if obj.fill else 0,
        hidden=not obj.visible,
        locked=obj.locked,
    )


def _text_to_foundry(obj: TextObject) -> FoundryDrawing:
    return FoundryDrawing(
        id=obj.id,
        type="t",
        x=obj.position.x,
        y=obj.position.y,
        shape=FoundryDrawingShape(width=obj.width, height=obj.height),
        stroke_width=0,
        fill_type=0,
        hidden=not obj.visible,
        locked=obj.locked,
        text=obj.text,
        font_family=obj.font_family,
        font_size=obj.font_size,
        text_color=obj.fill,
    )


def to_foundry(battle_map: BattleMap) -> Dict[str, Any]:
    """
    Convert a canonical map to a Foundry VTT scene document.

    Tokens become scene tokens; shapes and text become drawings. Walls,
    lights, sounds and templates are always empty (the editor has none).

    Returns:
        JSON-serializable scene dict
    """
    tokens: List[FoundryToken] = []
    drawings: List[FoundryDrawing] = []
    for obj in battle_map.objects:
        if isinstance(obj, TokenObject):
            tokens.append(_token_to_foundry(obj))
        elif isinstance(obj, ShapeObject):
            drawings.append(_shape_to_foundry(obj))
        else:
            drawings.append(_text_to_foundry(obj))

    grid = battle_map.grid
    scene = FoundryScene(
        id=str(uuid.uuid4()),
        name=battle_map.name,
        width=battle_map.width,
        height=battle_map.height,
        background=FoundryBackground(src=battle_map.background) if battle_map.background else None,
        grid=FoundryGrid(
            type=GRID_TYPE_HEX if grid.type == "hex" else GRID_TYPE_SQUARE,
            size=grid.size,
            color=grid.color or "#000000",
            alpha=GRID_VISIBLE_ALPHA if grid.visible else 0,
        ),
        tokens=tokens,
        drawings=drawings,
    )

    logger.debug(f"Exported '{battle_map.name}' to Foundry: {len(tokens)} tokens, {len(drawings)} drawings")
    return scene.model_dump(by_alias=True, exclude_none=True)


def _grid_from_scene(scene: FoundryScene, log: CoercionLog) -> Dict[str, Any]:
    grid = scene.grid
    if grid is None:
        log.record(f"Missing grid, using size {DEFAULT_GRID_SIZE}")
        return {"size": DEFAULT_GRID_SIZE}
    if not isinstance(grid, FoundryGrid):
        log.record(f"Legacy numeric grid {grid}, assuming square grid")
        return {"size": grid if grid > 0 else DEFAULT_GRID_SIZE}

    if grid.type in HEX_GRID_TYPES:
        grid_type = "hex"
    else:
        if grid.type != GRID_TYPE_SQUARE:
            log.record(f"Unsupported grid type {grid.type}, using square")
        grid_type = "square"

    size = log.default(grid.size, DEFAULT_GRID_SIZE, "grid size")
    if size <= 0:
        log.record(f"Invalid grid size {size}, using {DEFAULT_GRID_SIZE}")
        size = DEFAULT_GRID_SIZE
    alpha = grid.alpha if grid.alpha is not None else GRID_VISIBLE_ALPHA
    return {
        "size": size,
        "type": grid_type,
        "visible": alpha > 0,
        "snap": True,
        "color": grid.color or DEFAULT_GRID_COLOR,
    }


def _token_from_foundry(token: FoundryToken, ids: IdAllocator, log: CoercionLog) -> TokenObject:
    label = f"token {token.id or '<no id>'}"
    image = token.texture.src if token.texture and token.texture.src else token.img
    return TokenObject(
        id=ids.allocate(token.id),
        position=Point(x=token.x, y=token.y),
        width=log.default(token.width, DEFAULT_OBJECT_SIZE, f"{label} width"),
        height=log.default(token.height, DEFAULT_OBJECT_SIZE, f"{label} height"),
        rotation=token.rotation,
        visible=not token.hidden,
        locked=token.locked,
        layer=log.resolve(map_layer_to_canonical("tokens", FORMAT_ID), label),
        name=token.name,
        image=image or None,
    )


def _points_bounds(points: List[float]) -> Tuple[float, float]:
    xs, ys = points[0::2], points[1::2]
    return max(xs) - min(xs), max(ys) - min(ys)


def _drawing_from_foundry(
    drawing: FoundryDrawing,
    ids: IdAllocator,
    log: CoercionLog,
    options: ImportOptions,
) -> Union[ShapeObject, TextObject]:
    label = f"drawing {drawing.id or '<no id>'}"
    shape = drawing.shape
    token = drawing.type or shape.type
    common = {
        "id": ids.allocate(drawing.id),
        "position": Point(x=drawing.x, y=drawing.y),
        "visible": not drawing.hidden,
        "locked": drawing.locked,
    }

    if token in TEXT_DRAWING_TYPES:
        return TextObject(
            **common,
            layer=TEXT_LAYER,
            text=drawing.text or "",
            font_family=drawing.font_family,
            font_size=drawing.font_size,
            fill=drawing.text_color,
            width=shape.width,
            height=shape.height,
        )

    shape_type = FOUNDRY_SHAPES.resolve(token, log, options.strict_shapes, label)
    geometry: Dict[str, Any] = {}
    if shape_type == "circle":
        if shape.radius is not None:
            geometry = {"width": shape.radius * 2, "height": shape.radius * 2, "radius": shape.radius}
        elif shape.width is not None:
            height = shape.height if shape.height is not None else shape.width
            geometry = {"width": shape.width, "height": height, "radius": shape.width / 2}
        else:
            log.record(f"{label}: Missing ellipse radius, using {DEFAULT_ELLIPSE_RADIUS}")
            diameter = DEFAULT_ELLIPSE_RADIUS * 2
            geometry = {"width": diameter, "height": diameter, "radius": DEFAULT_ELLIPSE_RADIUS}
    elif shape_type in ("polygon", "line") and shape.points:
        points = list(shape.points)
        if len(points) % 2 != 0:
            log.record(f"{label}: Odd-length points array, dropping trailing coordinate")
            points = points[:-1]
        bounds = _points_bounds(points) if points else (DEFAULT_OBJECT_SIZE, DEFAULT_OBJECT_SIZE)
        geometry = {
            "width": shape.width if shape.width is not None else bounds[0],
            "height": shape.height if shape.height is not None else bounds[1],
            "points": points,
        }
    else:
        geometry = {
            "width": log.default(shape.width, DEFAULT_OBJECT_SIZE, f"{label} width"),
            "height": log.default(shape.height, DEFAULT_OBJECT_SIZE, f"{label} height"),
        }

    return ShapeObject(
        **common,
        **geometry,
        layer=log.resolve(map_layer_to_canonical("drawings", FORMAT_ID), label),
        shape_type=shape_type,
        fill=drawing.fill_color,
        stroke=drawing.stroke_color,
        stroke_width=drawing.stroke_width,
    )


def _dimension(value: Optional[float], default: float, field: str, log: CoercionLog) -> float:
    if value is not None and value <= 0:
        log.record(f"Invalid scene {field} {value}, using {default}")
        return default
    return log.default(value, default, f"scene {field}")


def from_foundry(doc: Any, options: Optional[ImportOptions] = None) -> ImportResult:
    """
    Convert a Foundry VTT scene (or a {"scenes": [...]} export) to a canonical map.

    Args:
        doc: Parsed Foundry JSON
        options: Import options (default: fresh ids, lenient shapes)

    Returns:
        ImportResult with the map and any coercion warnings

    Raises:
        FormatMismatchError: No recognizable scene in the document
        ParseError: Scene does not match the Foundry schema
    """
    options = options or ImportOptions()
    scene = parse_foundry_scene(doc)
    log = CoercionLog(FORMAT_ID, logger)
    ids = IdAllocator(options.preserve_ids, log)

    objects: List[Any] = [_token_from_foundry(token, ids, log) for token in scene.tokens]
    objects.extend(_drawing_from_foundry(drawing, ids, log, options) for drawing in scene.drawings)

    background = scene.background.src if scene.background and scene.background.src else scene.img
    map_data = {
        "id": scene.id if options.preserve_ids and scene.id else str(uuid.uuid4()),
        "name": scene.name or "Imported Foundry Scene",
        "width": _dimension(scene.width, DEFAULT_PAGE_WIDTH, "width", log),
        "height": _dimension(scene.height, DEFAULT_PAGE_HEIGHT, "height", log),
        "grid": _grid_from_scene(scene, log),
        "objects": objects,
        "background": background or None,
    }
    return finalize_import(map_data, log, options)


class FoundryConverter(MapConverter):
    """Foundry VTT scene converter."""

    format_id = FORMAT_ID

    def to_format(self, battle_map: BattleMap) -> Dict[str, Any]:
        return to_foundry(battle_map)

    def from_format(self, doc: Any, options: Optional[ImportOptions] = None) -> ImportResult:
        return from_foundry(doc, options)

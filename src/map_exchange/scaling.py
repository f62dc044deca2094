"""Scale an imported map to fit a target canvas."""

import logging
from typing import Any, Dict

from .models.battle_map import BattleMap, MapObject, Point, ShapeObject

logger = logging.getLogger(__name__)


def _scale_object(obj: MapObject, scale: float) -> MapObject:
    update: Dict[str, Any] = {
        "position": Point(x=obj.position.x * scale, y=obj.position.y * scale),
    }
    if obj.width is not None:
        update["width"] = obj.width * scale
    if obj.height is not None:
        update["height"] = obj.height * scale
    if isinstance(obj, ShapeObject):
        if obj.radius is not None:
            update["radius"] = obj.radius * scale
        if obj.points is not None:
            update["points"] = [coord * scale for coord in obj.points]
    return obj.model_copy(update=update)


def scale_to_fit(battle_map: BattleMap, target_width: float, target_height: float) -> BattleMap:
    """
    Uniformly scale a map so it fits inside target_width x target_height.

    scale = min(target_width / width, target_height / height). Object positions,
    sizes, radii, point offsets and the grid size are multiplied by scale; the
    returned map takes the target dimensions. The input map is not modified.

    Raises:
        ValueError: If a target dimension is not positive
    """
    if target_width <= 0 or target_height <= 0:
        raise ValueError(f"Target size must be positive, got {target_width}x{target_height}")

    scale = min(target_width / battle_map.width, target_height / battle_map.height)
    logger.debug(
        f"Scaling map '{battle_map.name}' {battle_map.width}x{battle_map.height} "
        f"by {scale:.4f} to {target_width}x{target_height}"
    )

    return battle_map.model_copy(update={
        "width": float(target_width),
        "height": float(target_height),
        "grid": battle_map.grid.model_copy(update={"size": battle_map.grid.size * scale}),
        "objects": [_scale_object(obj, scale) for obj in battle_map.objects],
    })

"""Shared final step of every fromFormat conversion."""

import logging
from typing import Any, Dict

from .models import BattleMap, CoercionLog, ImportOptions, ImportResult
from .scaling import scale_to_fit
from .validation import validate_record

logger = logging.getLogger(__name__)


def finalize_import(
    map_data: Dict[str, Any],
    log: CoercionLog,
    options: ImportOptions,
) -> ImportResult:
    """
    Validate the assembled canonical map and package it with its warnings.

    Args:
        map_data: BattleMap fields (objects may already be model instances)
        log: Coercions recorded during the conversion
        options: Import options; target_size triggers scale-to-fit and
            import_background=False drops the background image

    Returns:
        ImportResult for the converted map

    Raises:
        ParseError: If the assembled map violates a canonical invariant
    """
    if not options.import_background and map_data.get("background"):
        map_data = {**map_data, "background": None}
        log.record("Background image was not imported")

    battle_map = validate_record(BattleMap, map_data, log.format_id)
    if options.target_size:
        battle_map = scale_to_fit(battle_map, *options.target_size)

    logger.info(
        f"Imported '{battle_map.name}' from {log.format_id}: "
        f"{len(battle_map.objects)} object(s), {len(log.messages)} warning(s)"
    )
    return ImportResult(map=battle_map, source_format=log.format_id, warnings=list(log.messages))

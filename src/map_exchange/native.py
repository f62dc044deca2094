"""Native format: the editor's own BattleMap JSON, passed through unchanged."""

import logging
from typing import Any, Dict, Optional

from .importing import finalize_import
from .models import BattleMap, CoercionLog, ImportOptions, ImportResult
from .registry import MapConverter
from .validation import require_object

logger = logging.getLogger(__name__)

FORMAT_ID = "native"
SUPPORTED_MAJOR_VERSION = "1"


def to_native(battle_map: BattleMap) -> Dict[str, Any]:
    """Serialize a map to its camelCase JSON form."""
    return battle_map.model_dump(mode="json", by_alias=True, exclude_none=True)


def from_native(doc: Any, options: Optional[ImportOptions] = None) -> ImportResult:
    """
    Load a native map document.

    Accepts a bare BattleMap object or the editor's save-file envelope
    {"version", "exportDate", "map"}. Ids are always kept as written, since
    the native format performs no transformation.

    Raises:
        FormatMismatchError: Root is not a JSON object
        ParseError: Document is not a valid BattleMap
    """
    options = options or ImportOptions()
    root = require_object(doc, FORMAT_ID)
    log = CoercionLog(FORMAT_ID, logger)

    if isinstance(root.get("map"), dict):
        version = str(root.get("version", SUPPORTED_MAJOR_VERSION))
        if version.split(".")[0] != SUPPORTED_MAJOR_VERSION:
            log.record(f"Map file version {version} may not be fully compatible")
        root = root["map"]

    return finalize_import(root, log, options)


class NativeConverter(MapConverter):
    """Passthrough converter for the editor's own format."""

    format_id = FORMAT_ID

    def to_format(self, battle_map: BattleMap) -> Dict[str, Any]:
        return to_native(battle_map)

    def from_format(self, doc: Any, options: Optional[ImportOptions] = None) -> ImportResult:
        return from_native(doc, options)

"""Select a converter for an incoming file and run imports/exports through it.

Selection is deterministic, in priority order:
    1. Explicit format hint from the caller
    2. File extension (.dd2vtt, .db, images)
    3. Peeking at parsed JSON content (resolution / pages / scenes / bare scene)
    4. Native passthrough
"""

import json
import logging
from enum import Enum
from pathlib import PurePath
from typing import Any, Dict, Optional, Union

from .exceptions import FormatMismatchError, ParseError
from .foundry.models import looks_like_scene
from .models import BattleMap, ImportOptions, ImportResult
from .registry import registry

logger = logging.getLogger(__name__)


class MapFormat(str, Enum):
    """Formats the dispatcher can select."""

    UNIVERSAL_VTT = "universal-vtt"
    ROLL20 = "roll20"
    FOUNDRY = "foundry"
    NATIVE = "native"
    IMAGE = "image"


FORMAT_ALIASES = {
    "dd2vtt": MapFormat.UNIVERSAL_VTT,
    "uvtt": MapFormat.UNIVERSAL_VTT,
    "mapmaker": MapFormat.NATIVE,
}

EXTENSION_FORMATS = {
    ".dd2vtt": MapFormat.UNIVERSAL_VTT,
    ".db": MapFormat.FOUNDRY,
}

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".webp")

Content = Union[str, bytes, Dict[str, Any], list]


def resolve_format(value: Union[str, MapFormat]) -> MapFormat:
    """Turn a format name or alias into a MapFormat.

    Raises:
        ValueError: Unknown format name
    """
    if isinstance(value, MapFormat):
        return value
    key = value.strip().lower()
    if key in FORMAT_ALIASES:
        return FORMAT_ALIASES[key]
    try:
        return MapFormat(key)
    except ValueError:
        raise ValueError(f"Unknown map format: {value}") from None


def _peek(doc: Any) -> MapFormat:
    if isinstance(doc, dict):
        if "resolution" in doc:
            return MapFormat.UNIVERSAL_VTT
        if "pages" in doc:
            return MapFormat.ROLL20
        if "scenes" in doc or looks_like_scene(doc):
            return MapFormat.FOUNDRY
    return MapFormat.NATIVE


def detect_format(
    file_name: str,
    content: Optional[Content] = None,
    format_hint: Optional[str] = None,
) -> MapFormat:
    """
    Pick the format of an incoming file.

    Args:
        file_name: Name (or path) of the file; only the extension is used
        content: Raw text or already-parsed JSON, used when the extension is
            not conclusive
        format_hint: Caller's explicit choice; "auto" or None means detect

    Returns:
        Detected MapFormat

    Raises:
        FormatMismatchError: Nothing to go on (no known extension, no content)
        ParseError: Content had to be peeked at and is not valid JSON
        ValueError: Unknown format hint
    """
    if format_hint and format_hint.strip().lower() != "auto":
        return resolve_format(format_hint)

    extension = PurePath(file_name).suffix.lower()
    if extension in EXTENSION_FORMATS:
        return EXTENSION_FORMATS[extension]
    if extension in IMAGE_EXTENSIONS:
        return MapFormat.IMAGE

    if content is None:
        raise FormatMismatchError(f"Cannot detect map format of '{file_name}' without content")

    doc = content if isinstance(content, (dict, list)) else parse_document(content, MapFormat.NATIVE)
    detected = _peek(doc)
    logger.debug(f"Detected {detected.value} for '{file_name}'")
    return detected


def _parse_nedb(text: str) -> Optional[Dict[str, Any]]:
    # Foundry .db files are NeDB: one JSON document per line
    for line in text.splitlines():
        line = line.strip()
        if not line:
            continue
        try:
            record = json.loads(line)
        except json.JSONDecodeError:
            continue
        if isinstance(record, dict):
            return record
    return None


def parse_document(text: Union[str, bytes], fmt: Union[str, MapFormat]) -> Any:
    """
    Decode JSON text for the given format.

    Foundry text that is not a single JSON document is retried as NeDB
    (line-delimited) and the first record is used.

    Raises:
        ParseError: Bytes are not UTF-8, or text is not valid JSON for the format
    """
    fmt = resolve_format(fmt)
    if isinstance(text, bytes):
        try:
            text = text.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ParseError(f"Invalid UTF-8: {e.reason}", format_id=fmt.value) from e
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        if fmt == MapFormat.FOUNDRY:
            record = _parse_nedb(text)
            if record is not None:
                return record
        raise ParseError(f"Invalid JSON: {e.msg} (line {e.lineno}, column {e.colno})", format_id=fmt.value) from e


def import_map(
    file_name: str,
    content: Content,
    options: Optional[ImportOptions] = None,
    format_hint: Optional[str] = None,
) -> ImportResult:
    """
    Detect the format of a file and convert it to a canonical map.

    Args:
        file_name: File name, used for extension-based detection
        content: Raw text or already-parsed JSON
        options: Import options (ids, strict shapes, target size)
        format_hint: Explicit format, overriding detection

    Returns:
        ImportResult with the map, source format and coercion warnings

    Raises:
        FormatMismatchError: Image files, or documents missing their root
        ParseError: Malformed JSON or schema violations
        UnsupportedShapeError: Unknown shape type with strict_shapes set
    """
    fmt = detect_format(file_name, content, format_hint)
    if fmt == MapFormat.IMAGE:
        raise FormatMismatchError(
            f"'{file_name}' is an image; build a background tile instead of converting",
            format_id=fmt.value,
        )

    doc = content if isinstance(content, (dict, list)) else parse_document(content, fmt)
    logger.info(f"Importing '{file_name}' as {fmt.value}")
    return registry.get(fmt.value).from_format(doc, options)


def export_map(battle_map: BattleMap, fmt: Union[str, MapFormat]) -> Dict[str, Any]:
    """
    Convert a canonical map to a JSON-serializable document.

    Raises:
        ValueError: Unknown format, or the image pseudo-format
    """
    fmt = resolve_format(fmt)
    if fmt == MapFormat.IMAGE:
        raise ValueError("Maps cannot be exported as images")
    logger.info(f"Exporting '{battle_map.name}' as {fmt.value}")
    return registry.get(fmt.value).to_format(battle_map)

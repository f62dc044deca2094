"""Parse-boundary helpers: untyped JSON -> validated format records."""

from typing import Any, Dict, Iterable, Type, TypeVar
from pydantic import BaseModel, ValidationError

from .exceptions import FormatMismatchError, ParseError

M = TypeVar("M", bound=BaseModel)


def require_object(doc: Any, format_id: str) -> Dict[str, Any]:
    """Ensure the document root is a JSON object."""
    if not isinstance(doc, dict):
        raise FormatMismatchError(
            f"Expected a JSON object at the document root, got {type(doc).__name__}",
            format_id=format_id,
        )
    return doc


def require_keys(doc: Dict[str, Any], keys: Iterable[str], format_id: str) -> None:
    """Raise FormatMismatchError unless every root key is present."""
    missing = [key for key in keys if key not in doc]
    if missing:
        raise FormatMismatchError(
            f"Document is missing required field(s): {', '.join(missing)}",
            format_id=format_id,
        )


def validate_record(model: Type[M], data: Any, format_id: str) -> M:
    """Validate data against a format model, wrapping failures as ParseError."""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"]) or "<root>"
        raise ParseError(
            f"Invalid {format_id} document at {location}: {first['msg']} "
            f"({e.error_count()} error(s))",
            format_id=format_id,
        ) from e

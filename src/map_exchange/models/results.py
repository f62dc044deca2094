"""Import options, results and the field-coercion bookkeeping used by converters."""

import logging
import uuid
from dataclasses import dataclass
from typing import Generic, List, Optional, Set, Tuple, TypeVar
from pydantic import BaseModel, ConfigDict, field_validator

from .battle_map import BattleMap

T = TypeVar("T")


class ImportOptions(BaseModel):
    """Caller-selected import behaviour."""

    model_config = ConfigDict(frozen=True)

    preserve_ids: bool = False
    strict_shapes: bool = False  # raise UnsupportedShapeError instead of degrading to rect
    target_size: Optional[Tuple[int, int]] = None  # scale-to-fit (width, height)
    import_background: bool = True

    @field_validator("target_size")
    @classmethod
    def validate_target_size(cls, v: Optional[Tuple[int, int]]) -> Optional[Tuple[int, int]]:
        if v is not None and (v[0] <= 0 or v[1] <= 0):
            raise ValueError(f"target_size must be positive, got {v}")
        return v


class ImportResult(BaseModel):
    """A converted map plus the coercions applied while building it."""

    model_config = ConfigDict(frozen=True)

    map: BattleMap
    source_format: str
    warnings: List[str] = []


@dataclass(frozen=True)
class Coerced(Generic[T]):
    """A resolved field value, flagged when a documented default replaced the input."""

    value: T
    used_default: bool = False
    message: Optional[str] = None


class CoercionLog:
    """Collects field coercions for one conversion.

    Every recorded message is logged at WARNING and returned to the caller
    through ImportResult.warnings.
    """

    def __init__(self, format_id: str, logger: Optional[logging.Logger] = None):
        self.format_id = format_id
        self.logger = logger or logging.getLogger(__name__)
        self.messages: List[str] = []

    def record(self, message: str) -> None:
        self.messages.append(message)
        self.logger.warning(f"[{self.format_id}] {message}")

    def resolve(self, coerced: Coerced[T], context: Optional[str] = None) -> T:
        """Unwrap a Coerced value, recording its message if a default was used."""
        if coerced.used_default:
            message = coerced.message or "Field replaced with default"
            self.record(f"{context}: {message}" if context else message)
        return coerced.value

    def default(self, value: Optional[T], default: T, field: str) -> T:
        """Return value, or default (recorded) when value is missing."""
        return self.resolve(with_default(value, default, field))


def with_default(value: Optional[T], default: T, field: str) -> Coerced[T]:
    """Wrap an optional input value, substituting default when it is None."""
    if value is None:
        return Coerced(default, True, f"Missing {field}, using {default!r}")
    return Coerced(value)


class IdAllocator:
    """Assigns canonical object ids during import.

    Without preserve_ids every object gets a fresh uuid4. With it, source
    ids are kept; missing or repeated ones are replaced and recorded.
    """

    def __init__(self, preserve_ids: bool, log: CoercionLog):
        self.preserve_ids = preserve_ids
        self.log = log
        self._seen: Set[str] = set()

    def allocate(self, source_id: Optional[str]) -> str:
        if not self.preserve_ids:
            new_id = str(uuid.uuid4())
        elif not source_id:
            new_id = str(uuid.uuid4())
            self.log.record(f"Object without id assigned {new_id}")
        elif source_id in self._seen:
            new_id = str(uuid.uuid4())
            self.log.record(f"Duplicate object id '{source_id}' replaced with {new_id}")
        else:
            new_id = source_id
        self._seen.add(new_id)
        return new_id

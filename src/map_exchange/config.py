"""Centralized configuration for the map exchange engine.

This module provides:
- PACKAGE_DIR and PROJECT_ROOT paths
- Format constants shared by every converter
- Environment variable access with get_env()
- Automatic .env loading

Usage:
    from map_exchange.config import DEFAULT_GRID_SIZE, get_env

    level = get_env("MAP_EXCHANGE_LOG_LEVEL", default="INFO")
"""

import os
from pathlib import Path
from typing import Optional, Tuple
from dotenv import load_dotenv

from .exceptions import ConfigurationError

# Calculate paths once at import time
PACKAGE_DIR = Path(__file__).parent.resolve()
PROJECT_ROOT = PACKAGE_DIR.parent.parent.resolve()

# Load .env from project root
_env_path = PROJECT_ROOT / ".env"
if _env_path.exists():
    load_dotenv(_env_path)

# 5-foot-per-square convention used by every supported VTT
FEET_PER_SQUARE = 5

DEFAULT_GRID_SIZE = 50
DEFAULT_GRID_COLOR = "#666666"
DEFAULT_OBJECT_SIZE = 50

# Canonical layer axis
MIN_LAYER = 0
MAX_LAYER = 100
GM_LAYER = 20
MAP_LAYER = 30
TEXT_LAYER = 35
TOKEN_LAYER = 40
DEFAULT_LAYER = MAP_LAYER

DEFAULT_TARGET_SIZE = "1920x1080"


def get_env(key: str, default: Optional[str] = None) -> str:
    """Get environment variable value.

    Args:
        key: Environment variable name
        default: Default value if not set. If None and key not found, raises KeyError.

    Returns:
        Environment variable value or default

    Raises:
        KeyError: If key not found and no default provided
    """
    value = os.environ.get(key)
    if value is not None:
        return value
    if default is not None:
        return default
    raise KeyError(f"Environment variable '{key}' not set and no default provided")


def parse_size(value: str) -> Tuple[int, int]:
    """Parse a "WIDTHxHEIGHT" string into a (width, height) tuple.

    Raises:
        ConfigurationError: If the value is malformed or not positive
    """
    parts = value.lower().replace(" ", "").split("x")
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        raise ConfigurationError(f"Invalid size '{value}', expected WIDTHxHEIGHT")
    width, height = int(parts[0]), int(parts[1])
    if width <= 0 or height <= 0:
        raise ConfigurationError(f"Size must be positive, got {value}")
    return width, height


def get_log_level() -> str:
    """Get log level name for the CLI."""
    return get_env("MAP_EXCHANGE_LOG_LEVEL", default="INFO").upper()


def get_target_size() -> Tuple[int, int]:
    """Get the default scale-to-fit canvas size."""
    return parse_size(get_env("MAP_EXCHANGE_TARGET_SIZE", default=DEFAULT_TARGET_SIZE))


def get_log_file() -> Optional[Path]:
    """Get the optional CLI log file path (unset means console only)."""
    value = os.environ.get("MAP_EXCHANGE_LOG_FILE")
    return Path(value) if value else None

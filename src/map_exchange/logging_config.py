"""
Logging setup for map_exchange entry points.

Library modules only call logging.getLogger(__name__); the CLI attaches
handlers once through setup_logging().
Log levels:
    DEBUG: Per-conversion details (object counts per exported document)
    INFO: Import/export summaries (format, object and warning counts)
    WARNING: Field coercions (defaulted layers, grid sizes, unknown shapes)
    ERROR: Fatal parse or format mismatch errors reported by the CLI

Usage:
    from map_exchange.logging_config import setup_logging

    logger = setup_logging("map_exchange", level="DEBUG")
    logger.info("Conversion started")
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _attach(logger: logging.Logger, handler: logging.Handler, level: Union[int, str]) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)


def setup_logging(
    name: str,
    level: Union[int, str] = logging.INFO,
    log_file: Optional[Path] = None,
    console_output: bool = True
) -> logging.Logger:
    """
    Configure and return a logger instance.

    Console output goes to stderr so converted documents written to stdout
    stay valid JSON.

    Args:
        name: Logger name (the package name, so every module inherits it)
        level: Logging level as int or level name (default: INFO)
        log_file: Optional path to append logs to
        console_output: Whether to log to stderr (default: True)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Repeated CLI invocations in one process must not stack handlers
    logger.handlers.clear()

    if console_output:
        _attach(logger, logging.StreamHandler(sys.stderr), level)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        _attach(logger, logging.FileHandler(log_file, mode='a', encoding='utf-8'), level)

    return logger

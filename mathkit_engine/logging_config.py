"""
Logging configuration for the math engine.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from mathkit_engine.config import DEFAULT_CONFIG

ROOT_LOGGER = "mathkit_engine"


def setup_logging(
    level: int = DEFAULT_CONFIG.log_level,
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None
) -> logging.Logger:
    """
    Set up logging configuration.

    Args:
        level: Logging level (default: from DEFAULT_CONFIG).
        log_file: Optional file to write logs to.
        format_string: Optional custom format string.

    Returns:
        Configured logger instance.
    """
    if format_string is None:
        format_string = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    formatter = logging.Formatter(format_string)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Logger name (typically __name__).

    Returns:
        Logger instance under the engine's root logger.
    """
    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f'{ROOT_LOGGER}.{name}')

# utils/logger.py
"""
Logging utility for the Progress Tracker API.

Every module logger writes to the console and to one shared, timestamped log
file under ``Config.LOGS_DIR``.
"""

import logging
import os
from datetime import datetime
from typing import Optional, Union

from config import Config

LOG_DIR = Config.LOGS_DIR
LOG_FILE = os.path.join(
    LOG_DIR,
    f"progress_tracker_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
)

DETAILED_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'
SIMPLE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

_file_handler: Optional[logging.FileHandler] = None


def _shared_file_handler() -> logging.FileHandler:
    """One file handle for the whole process, opened on first use."""
    global _file_handler
    if _file_handler is None:
        os.makedirs(LOG_DIR, exist_ok=True)
        _file_handler = logging.FileHandler(LOG_FILE, encoding='utf-8')
        _file_handler.setLevel(logging.DEBUG)
        _file_handler.setFormatter(logging.Formatter(DETAILED_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
    return _file_handler


def resolve_level(level: Union[int, str, None]) -> int:
    """Accept a logging constant or a name like "debug"; fall back to Config.LOG_LEVEL."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName((level or Config.LOG_LEVEL).upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def get_logger(name: str, level: Union[int, str, None] = None) -> logging.Logger:
    """
    Get or create a logger with both file and console handlers.

    Args:
        name: Logger name (usually the component name)
        level: Console level; defaults to Config.LOG_LEVEL

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Only configure if not already configured
    if not logger.handlers:
        console_level = resolve_level(level)
        logger.setLevel(min(console_level, logging.DEBUG))

        console_handler = logging.StreamHandler()
        console_handler.setLevel(console_level)
        console_handler.setFormatter(logging.Formatter(SIMPLE_FORMAT, datefmt='%H:%M:%S'))

        logger.addHandler(_shared_file_handler())
        logger.addHandler(console_handler)

        # Prevent propagation to root logger
        logger.propagate = False

    return logger

"""
Logging Configuration
Sets up the 'focuscloud' logger for the application and the command line.
"""
import logging
import os
import sys
from typing import Optional, Union

LOG_LEVEL_ENV = "FOCUSCLOUD_LOG_LEVEL"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def level_from_env(default: int = logging.INFO) -> int:
    """Read the level name (DEBUG, INFO, ...) from FOCUSCLOUD_LOG_LEVEL."""
    name = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    level = logging.getLevelName(name) if name else default
    return level if isinstance(level, int) else default


def setup_logging(level: Union[int, str, None] = None, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the package logger.

    Args:
        level: Logging level or its name; None reads FOCUSCLOUD_LOG_LEVEL.
        log_file: Optional path to save logs to a file.

    Returns:
        The configured 'focuscloud' logger.
    """
    if level is None:
        level = level_from_env()
    elif isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger("focuscloud")
    logger.setLevel(level)

    # Re-running setup (e.g. a second window in tests) must not duplicate output
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S')

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.info(f"Logging initialized at {logging.getLevelName(level)}.")
    return logger

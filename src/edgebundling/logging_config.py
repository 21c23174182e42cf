"""
Logging Configuration
Sets up the package logger for the application.

Every module logs through `logging.getLogger(__name__)`, so configuring the
`edgebundling` logger here covers the model, the store and the views. The
root logger is left alone; libraries keep their own defaults.
"""
import logging
import sys
from typing import Optional, Union

PACKAGE_LOGGER = "edgebundling"

# Format: Time - Module - Level - Message
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%H:%M:%S'


def level_from_name(name: str) -> int:
    """Translate a CLI level name ("debug", "INFO", ...) into a logging level."""
    level = logging.getLevelName(name.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level '{name}'.")
    return level


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> int:
    """
    Route the package log to stdout and, optionally, a file.

    Args:
        level: Logging level, numeric or by name ("debug", "INFO", ...).
        log_file: Optional path to save logs to a file (overwritten).

    Returns:
        The numeric level in effect.

    Raises:
        ValueError: If `level` names no logging level.
    """
    if isinstance(level, str):
        level = level_from_name(level)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    # Repeated calls (CLI + interactive window) must not duplicate output
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.info(f"Logging initialized at {logging.getLevelName(level)}"
                + (f", also writing to {log_file}." if log_file else "."))
    return level

"""Logging setup for the docshape package logger."""

import logging
import sys
from typing import Optional, Union

PACKAGE_LOGGER = "docshape"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(threadName)s] %(message)s"

# Parser libraries that log per-token or per-tag detail at DEBUG
NOISY_LIBRARIES = ("markdown_it", "bs4")


def _resolve_level(level: Union[str, int]) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, level.upper(), logging.INFO)


def setup_logging(
    level: Union[str, int] = "INFO",
    log_file: Optional[str] = None,
    format_string: Optional[str] = None,
    force: bool = False,
    quiet_libraries: bool = True,
) -> logging.Logger:
    """
    Configure the "docshape" logger.

    Extraction layers and the structural validator log at DEBUG under
    "docshape.*"; terminal page failures log at WARNING. Records carry the
    thread name because pages are usually processed by a worker pool.

    Args:
        level: Level name (DEBUG, INFO, ...) or numeric level
        log_file: Also write records to this file
        format_string: Custom format (defaults to DEFAULT_FORMAT)
        force: Rebuild handlers even if some are already attached
        quiet_libraries: Cap markdown_it and bs4 loggers at WARNING

    Returns:
        The configured "docshape" logger
    """
    numeric_level = _resolve_level(level)
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(numeric_level)

    if force or not logger.handlers:
        logger.handlers.clear()
        formatter = logging.Formatter(format_string or DEFAULT_FORMAT)

        handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
        if log_file:
            handlers.append(logging.FileHandler(log_file))

        for handler in handlers:
            handler.setLevel(numeric_level)
            handler.setFormatter(formatter)
            logger.addHandler(handler)

    if quiet_libraries:
        for name in NOISY_LIBRARIES:
            logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))

    logger.propagate = False
    return logger

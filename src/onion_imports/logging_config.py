"""
Logging for onion-imports.

Everything is logged under the ``onion_imports`` logger. The console handler
writes to stderr through rich so json and github output on stdout stay
parseable; an optional log file always receives DEBUG records.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "onion_imports"

VERBOSITY_LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}

LOG_FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(
    verbosity: str = "normal", log_file: Optional[Union[str, Path]] = None
) -> logging.Logger:
    """
    Attach handlers to the package logger, replacing any from a previous call.

    Args:
        verbosity: "quiet", "normal" or "verbose" (console level)
        log_file: Optional file appended to at DEBUG level

    Returns:
        The ``onion_imports`` logger

    Raises:
        ValueError: If verbosity is not recognized
    """
    if verbosity not in VERBOSITY_LEVELS:
        raise ValueError(f"Unknown verbosity {verbosity!r}")
    console_level = VERBOSITY_LEVELS[verbosity]
    verbose = verbosity == "verbose"

    console_handler = RichHandler(
        console=Console(stderr=True),
        level=console_level,
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        markup=False,
        show_time=verbose,
        show_path=verbose,
    )
    handlers: list[logging.Handler] = [console_handler]

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FILE_FORMAT))
        handlers.append(file_handler)

    logger = logging.getLogger(PACKAGE_LOGGER)
    reset_logging()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if log_file is not None else console_level)
    logger.propagate = False
    return logger


def reset_logging() -> None:
    """Detach and close every handler on the package logger."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the package logger, or a child of it for module ``name``."""
    if name is None:
        return logging.getLogger(PACKAGE_LOGGER)
    if not name.startswith(PACKAGE_LOGGER):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)

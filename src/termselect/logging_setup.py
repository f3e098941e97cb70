"""Logging configuration for the termselect CLI."""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAMESPACE = "termselect"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(debug: bool = False, log_file: Path | None = None) -> logging.Logger:
    """Attach a single handler to the ``termselect`` logger namespace.

    Args:
        debug: Log every decoded key and state transition at DEBUG level.
        log_file: Write records to this file instead of stderr. The menu
            redraws the whole screen on each key, so console records are
            wiped by the next frame; a file keeps them.
    """
    level = logging.DEBUG if debug else logging.WARNING
    logger = logging.getLogger(LOGGER_NAMESPACE)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    else:
        handler = RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=False)

    handler.setLevel(level)
    logger.addHandler(handler)
    logger.propagate = False
    return logger

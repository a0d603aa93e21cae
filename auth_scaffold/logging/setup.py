"""Logging system setup: stderr handler with secret redaction."""

import logging
import sys
from typing import Optional, TextIO

from .filters import RedactionFilter

APP_LOGGER = "auth_scaffold"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "INFO", stream: Optional[TextIO] = None) -> logging.Logger:
    """Configure the application logger.

    Safe to call more than once; existing handlers are replaced.
    """
    app_logger = logging.getLogger(APP_LOGGER)
    app_logger.setLevel(level)
    app_logger.propagate = False

    if app_logger.hasHandlers():
        app_logger.handlers.clear()

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(RedactionFilter())
    app_logger.addHandler(handler)

    app_logger.debug(f"Logging initialized at level {level}")
    return app_logger

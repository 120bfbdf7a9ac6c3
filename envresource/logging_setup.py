"""Logging for a provisioning run: the envresource logger to stderr, optionally a file."""

import logging
from typing import List, Optional, Tuple

from envresource.config import Settings, get_settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _handlers(log_file: str) -> Tuple[List[logging.Handler], Optional[OSError]]:
    """Stderr handler, plus a file handler when log_file is set. Returns the open error, if any."""
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if not log_file.strip():
        return handlers, None
    try:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    except OSError as e:
        return handlers, e
    return handlers, None


def setup_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """Attach handlers to the envresource logger; replaces handlers from an earlier call."""
    settings = settings or get_settings()
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    fmt = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    logger = logging.getLogger("envresource")
    logger.setLevel(level)
    for old in logger.handlers:
        old.close()
    logger.handlers.clear()
    handlers, file_error = _handlers(settings.log_file)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(fmt)
        logger.addHandler(handler)
    if file_error is not None:
        logger.warning("Could not open log file %s: %s", settings.log_file, file_error)
    return logger

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler

from .settings import Settings

LOGGER_NAME = "todo_terminal"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


# PUBLIC_INTERFACE
def configure_logging(settings: Settings) -> logging.Logger:
    """
    Attach a rotating file handler to the package logger.

    The terminal belongs to the prompts, so records never go to stdout/stderr.
    Existing handlers are replaced so repeated calls do not duplicate output.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = False

    if not settings.log_enabled:
        logger.addHandler(logging.NullHandler())
        return logger

    os.makedirs(os.path.dirname(settings.log_file) or ".", exist_ok=True)
    logger.setLevel(logging.DEBUG)
    fh = RotatingFileHandler(settings.log_file, maxBytes=2_000_000, backupCount=2, encoding="utf-8")
    fh.setLevel(settings.log_level)
    fh.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(fh)
    return logger

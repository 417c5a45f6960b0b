from __future__ import annotations

import logging
import sys

LOGGER_NAME = "recipeflow"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str = "WARNING", stream=None) -> logging.Logger:
    """Attach one stream handler to the package logger.

    Safe to call repeatedly: the handler installed by an earlier call is
    replaced rather than duplicated.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, str(level).upper(), logging.WARNING))
    for handler in list(logger.handlers):
        if getattr(handler, "_recipeflow", False):
            logger.removeHandler(handler)
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._recipeflow = True
    logger.addHandler(handler)
    logger.propagate = False
    return logger

from __future__ import annotations

import io
import logging

import pytest

from recipeflow.log import LOGGER_NAME, configure_logging


@pytest.fixture(autouse=True)
def _restore_logger():
    logger = logging.getLogger(LOGGER_NAME)
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield
    logger.handlers = handlers
    logger.setLevel(level)
    logger.propagate = propagate


# Purpose: verify module loggers write through the configured handler.
def test_configure_logging_writes() -> None:
    stream = io.StringIO()
    configure_logging("info", stream=stream)
    logging.getLogger("recipeflow.timers").info("Started %s", "timer-1")
    logging.getLogger("recipeflow.timers").debug("hidden")
    text = stream.getvalue()
    assert "[INFO] recipeflow.timers: Started timer-1" in text
    assert "hidden" not in text


# Purpose: verify repeated configuration replaces the handler.
def test_configure_logging_idempotent() -> None:
    first = io.StringIO()
    second = io.StringIO()
    configure_logging("warning", stream=first)
    logger = configure_logging("debug", stream=second)
    ours = [handler for handler in logger.handlers if getattr(handler, "_recipeflow", False)]
    assert len(ours) == 1
    logger.debug("after")
    assert first.getvalue() == ""
    assert "after" in second.getvalue()


# Purpose: verify unknown level names fall back to WARNING.
def test_configure_logging_bad_level() -> None:
    logger = configure_logging("loud", stream=io.StringIO())
    assert logger.level == logging.WARNING

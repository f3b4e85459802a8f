"""Logging setup for the command-line entry points."""

from __future__ import annotations

import logging

_LOGGER_NAME = "code_snippets"


def configure_logging(*, verbose: bool = False) -> logging.Logger:
    """Attach a single stderr handler to the package logger."""
    level = logging.DEBUG if verbose else logging.WARNING
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("[code-snippets] %(levelname)s %(message)s"))
    logger.addHandler(handler)
    return logger

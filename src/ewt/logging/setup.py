"""Structured logging configuration."""

import logging
import sys

from ewt.logging.formatter import JSONLogFormatter
from ewt.settings import get_settings


def configure_logging(service: str = "ewt", level: str | int | None = None) -> None:
    """Set up structured JSON logging on the root logger.

    *level* defaults to ``EWT_LOG_LEVEL``.
    """
    root = logging.getLogger()
    root.setLevel(level if level is not None else get_settings().EWT_LOG_LEVEL.upper())
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONLogFormatter(service=service))
    root.addHandler(handler)

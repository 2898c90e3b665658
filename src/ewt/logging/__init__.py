"""Structured logging: JSON formatter and setup."""

from ewt.logging.formatter import JSONLogFormatter
from ewt.logging.setup import configure_logging

__all__ = ["JSONLogFormatter", "configure_logging"]

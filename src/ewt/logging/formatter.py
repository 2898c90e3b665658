"""JSON log formatter for EWT diagnostics."""

import json
import logging
from datetime import UTC, datetime

from ewt.exceptions import EWTError

UNKNOWN_REASON = "unknown"


def _reason_names(cls: type[EWTError] = EWTError) -> frozenset[str]:
    names = {cls.__name__}
    for sub in cls.__subclasses__():
        names |= _reason_names(sub)
    return frozenset(names)


class JSONLogFormatter(logging.Formatter):
    """Emit log records as single-line JSON objects.

    Output format::

        {"timestamp": "...", "level": "WARNING", "service": "ewt",
         "logger": "ewt.codec", "message": "EWT rejected", "reason": "AuthenticationFailure"}

    ``reason`` is limited to EWT exception class names. Any other value is
    written as ``"unknown"`` so arbitrary text never rides along in it.
    """

    def __init__(self, service: str = "ewt") -> None:
        super().__init__()
        self._service = service
        self._reasons = _reason_names()

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "service": self._service,
            "logger": record.name,
            "message": record.getMessage(),
        }

        reason = getattr(record, "reason", None)
        if reason:
            entry["reason"] = reason if reason in self._reasons else UNKNOWN_REASON

        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)

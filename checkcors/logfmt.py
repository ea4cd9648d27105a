"""
Key-value ("logfmt") log output on stderr.

Structured fields are passed with ``extra=`` and rendered after the message:

    time=2026-01-01T00:00:00+00:00 level=ERROR msg="header mismatch" url=https://a.example header=Access-Control-Allow-Origin expected=* got=""
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone

# Attributes every LogRecord carries; anything else came in through ``extra=``.
_RESERVED = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__.keys()
) | {"message", "asctime", "taskName"}


def format_value(value: object) -> str:
    text = str(value)
    if text == "" or any(c in text for c in ' "=\t\n'):
        escaped = text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
        return f'"{escaped}"'
    return text


class LogfmtFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        pairs = [
            ("time", ts),
            ("level", record.levelname),
            ("msg", record.getMessage()),
        ]
        for key, value in record.__dict__.items():
            if key in _RESERVED or key.startswith("_"):
                continue
            pairs.append((key, value))
        if record.exc_info:
            pairs.append(("exc", self.formatException(record.exc_info)))
        return " ".join(f"{key}={format_value(value)}" for key, value in pairs)


def setup_logging(level: str | int = logging.INFO) -> logging.Logger:
    logger = logging.getLogger("checkcors")
    logger.setLevel(level)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(LogfmtFormatter())
    logger.addHandler(handler)
    return logger

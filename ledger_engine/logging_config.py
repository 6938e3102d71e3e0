"""
Structured logging configuration.

Log records are emitted as single-line JSON so operators can
ship them to any log aggregator. Storage error details are only
ever written here, never returned to API clients.
"""

import json
import logging
from datetime import datetime, timezone

ROOT_LOGGER = "ledger_engine"


class JSONFormatter(logging.Formatter):
    """Render a log record as a JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Install the JSON handler on the package logger.

    Safe to call more than once: existing handlers are replaced
    rather than stacked.
    """
    logger = logging.getLogger(ROOT_LOGGER)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    return logger

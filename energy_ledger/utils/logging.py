"""
Logging setup for Energy Ledger.

One place to configure the root logger for the CLI and the ledger core:
a readable console format by default, JSON lines on request.

Usage:
    from energy_ledger.utils.logging import configure_logging, get_logger

    configure_logging(level="INFO", json_logs=False)
    log = get_logger(__name__)
    log.info("Billing run complete", extra={"bills": 12})
"""

import json
import logging
import logging.config
from typing import Any, Dict, Optional

LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

# Attributes every LogRecord has; anything else arrived through ``extra``.
_RESERVED = set(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


def _json_formatter(record: logging.LogRecord) -> str:
    """Render a log record as a JSON line, promoting ``extra`` fields."""
    payload: Dict[str, Any] = {
        "time": logging.Formatter().formatTime(record, "%Y-%m-%dT%H:%M:%S"),
        "level": record.levelname,
        "logger": record.name,
        "message": record.getMessage(),
    }
    for key, value in vars(record).items():
        if key not in _RESERVED and not key.startswith("_"):
            payload[key] = value
    if record.exc_info:
        payload["exc_info"] = logging.Formatter().formatException(record.exc_info)
    return json.dumps(payload, default=str)


class JsonFormatter(logging.Formatter):
    """JSON-lines formatter for machine-readable logs."""

    def format(self, record: logging.LogRecord) -> str:
        return _json_formatter(record)


def configure_logging(level: str = "INFO", json_logs: bool = False) -> None:
    """Configure root logging for the application.

    Args:
        level: Logging level name ("DEBUG", "INFO", ...)
        json_logs: Emit JSON lines instead of the console format

    Raises:
        ValueError: If level is not a known level name
    """
    level = level.upper()
    if level not in LEVELS:
        raise ValueError(f"Unknown log level: {level}")

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": {
                "format": "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "json": {
                "()": JsonFormatter,
            },
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "json" if json_logs else "console",
                "level": level,
            }
        },
        "root": {
            "handlers": ["default"],
            "level": level,
        },
    })


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger", "JsonFormatter", "LEVELS"]

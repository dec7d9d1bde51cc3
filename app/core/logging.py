"""Structured JSON Logging Configuration"""

import logging
import sys
from pythonjsonlogger import jsonlogger

from app.config import settings

# Never emitted, even when passed through ``extra``
REDACTED_FIELDS = frozenset({"password", "hashed_password", "access_token", "refresh_token", "authorization"})

_HANDLER_NAME = "carepoint"


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON records stamped with service identity; credentials are masked."""

    def add_fields(self, log_record: dict, record: logging.LogRecord, message_dict: dict) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["environment"] = settings.ENVIRONMENT
        log_record["service"] = settings.APP_NAME
        log_record["version"] = settings.APP_VERSION

        if hasattr(record, "correlation_id"):
            log_record["correlation_id"] = record.correlation_id

        for key in REDACTED_FIELDS.intersection(log_record):
            log_record[key] = "***"


def setup_logging() -> None:
    """
    Install the stdout handler on the root logger.
    Safe to call more than once (app import, scripts, tests).
    """
    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root_logger.removeHandler(existing)

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)

    if settings.LOG_FORMAT == "json":
        handler.setFormatter(CustomJsonFormatter(
            fmt="%(asctime)s %(level)s %(name)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S%z"
        ))
    else:
        handler.setFormatter(logging.Formatter(
            fmt="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
            datefmt="%H:%M:%S"
        ))

    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper()))
    root_logger.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Module logger; pass structured context through ``extra={...}``."""
    return logging.getLogger(name)

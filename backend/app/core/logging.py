"""Structured JSON logging for the question sync service."""

import logging
import sys
from typing import Any

from pythonjsonlogger import jsonlogger

from app.core.config import settings

# Request-level chatter from the client libraries
QUIET_LOGGERS = ("elastic_transport", "urllib3", "uvicorn.access")


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """One envelope for every record: timestamp, level, logger, env, event.

    Sync code logs a snake_case event name as the message and repeats it in
    extra={"event": ...} with domain/question_id context. Records without an
    event (library logs, plain messages) use the message text as the event.
    """

    def add_fields(self, log_record: dict[str, Any], record: logging.LogRecord, message_dict: dict) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = self.formatTime(record, self.datefmt)
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["env"] = settings.ENV

        if not log_record.get("event"):
            log_record["event"] = record.getMessage()
        if log_record.get("message") == log_record["event"]:
            log_record.pop("message", None)

        log_record.pop("asctime", None)


def setup_logging(level: str | None = None) -> None:
    """Install the JSON handler on the root logger, replacing any existing ones."""
    root_logger = logging.getLogger()
    resolved = (level or settings.LOG_LEVEL).upper()
    root_logger.setLevel(getattr(logging, resolved, logging.INFO))
    root_logger.handlers.clear()

    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(logger)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)

"""
Structured JSON logging configuration for PropertyHub.
Emits JSON records with request correlation and service metadata.
"""

import logging
import sys
import traceback
from datetime import datetime
from typing import Any

from pythonjsonlogger.json import JsonFormatter

from .middleware import get_transaction_id

SERVICE_NAME = "propertyhub-backend"
SERVICE_VERSION = "0.1.0"

JSON_FORMAT = "%(timestamp)s %(level)s %(transaction_id)s %(message)s"


class StructuredFormatter(JsonFormatter):
    """JSON formatter that adds standard fields for observability."""

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        """Add custom fields to every log record."""
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = datetime.now().astimezone().isoformat()
        log_record["transaction_id"] = getattr(
            record, "transaction_id", get_transaction_id()
        )
        log_record["level"] = record.levelname
        log_record["logger_name"] = record.name
        log_record["module"] = record.module
        log_record["function"] = record.funcName
        log_record["line"] = record.lineno

        log_record["service"] = {
            "name": SERVICE_NAME,
            "version": SERVICE_VERSION,
        }

        if record.exc_info and record.exc_info[0] is not None:
            log_record["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "stacktrace": traceback.format_exception(*record.exc_info),
            }

        for field in ["msg", "args", "created", "msecs", "relativeCreated", "pathname"]:
            log_record.pop(field, None)


def build_formatter(use_json_format: bool = True) -> logging.Formatter:
    """Return the JSON formatter or a plain one for local terminals."""
    if use_json_format:
        return StructuredFormatter(fmt=JSON_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S")
    return logging.Formatter(
        "%(asctime)s | %(levelname)s | %(transaction_id)s | "
        "%(filename)s:%(lineno)d | %(message)s"
    )


def setup_structured_logging(
    log_level: str = "INFO", use_json_format: bool = True
) -> logging.Logger:
    """
    Set up console logging for the application.

    Args:
        log_level: The logging level (DEBUG, INFO, WARNING, ERROR)
        use_json_format: Whether to emit JSON records

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger("propertyhub_backend")
    logger.setLevel(getattr(logging, log_level.upper()))

    logger.handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, log_level.upper()))
    console_handler.setFormatter(build_formatter(use_json_format))

    logger.addHandler(console_handler)

    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("fastapi").setLevel(logging.INFO)

    return logger

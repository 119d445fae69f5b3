"""Logging infrastructure for PropertyHub backend."""

from .logger_config import get_logger, log_event, setup_logging, shutdown_logging
from .middleware import (
    RequestIdMiddleware,
    TransactionIdFilter,
    get_transaction_id,
    set_transaction_id,
)

__all__ = [
    "get_logger",
    "log_event",
    "setup_logging",
    "shutdown_logging",
    "RequestIdMiddleware",
    "TransactionIdFilter",
    "get_transaction_id",
    "set_transaction_id",
]

"""
Request tracking middleware for logging correlation.
"""

import logging
import uuid
from collections.abc import Callable
from contextvars import ContextVar

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

_transaction_id: ContextVar[str | None] = ContextVar("transaction_id", default=None)


def generate_transaction_id() -> str:
    """Generate a unique transaction ID for request tracking."""
    return str(uuid.uuid4())[:8]


def get_transaction_id() -> str:
    """Get the current transaction ID or generate a new one."""
    txn_id = _transaction_id.get()
    if txn_id is None:
        txn_id = generate_transaction_id()
        _transaction_id.set(txn_id)
    return txn_id


def set_transaction_id(txn_id: str) -> None:
    """Set the transaction ID for the current context."""
    _transaction_id.set(txn_id)


class TransactionIdFilter(logging.Filter):
    """Logging filter that adds transaction ID to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.transaction_id = get_transaction_id()
        return True


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Sets the transaction ID for each request and echoes it back."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        txn_id = request.headers.get("x-transaction-id")
        if not txn_id:
            txn_id = generate_transaction_id()

        set_transaction_id(txn_id)

        response = await call_next(request)
        response.headers["x-transaction-id"] = txn_id

        return response

"""
Custom exception classes for consistent error handling across all modules.
"""

from typing import Any


class PropertyHubException(Exception):
    """Base exception for all PropertyHub related errors."""

    status_code: int = 400

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class CallError(PropertyHubException):
    """Raised when a call cannot be completed.

    Distinct from a validation outcome of ``valid: False``: the latter is a
    successful call that reports input problems, this one means no result
    could be produced. ``code`` is one of the short codes below.
    """

    STATUS_CODES = {
        "invalid-argument": 400,
        "unauthenticated": 401,
        "permission-denied": 403,
        "not-found": 404,
        "internal": 500,
    }

    def __init__(
        self,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)
        self.code = code
        self.status_code = self.STATUS_CODES.get(code, 500)


class ResourceNotFoundError(PropertyHubException):
    """Raised when a requested resource is not found."""

    status_code = 404

    def __init__(
        self,
        resource_type: str,
        identifier: Any,
        details: dict[str, Any] | None = None,
    ):
        message = f"{resource_type} with identifier '{identifier}' not found"
        super().__init__(message, details)
        self.resource_type = resource_type
        self.identifier = identifier


class IdentityNotFoundError(ResourceNotFoundError):
    """Raised by an identity provider when no account matches a lookup."""

    def __init__(self, email: str, details: dict[str, Any] | None = None):
        super().__init__("Identity", email, details)
        self.email = email


class DatabaseError(PropertyHubException):
    """Raised when database operations fail."""

    status_code = 500


class ExternalServiceError(PropertyHubException):
    """Raised when external service integration fails."""

    status_code = 502

    def __init__(
        self,
        service_name: str,
        operation: str,
        details: dict[str, Any] | None = None,
    ):
        message = f"External service '{service_name}' failed during '{operation}'"
        super().__init__(message, details)
        self.service_name = service_name
        self.operation = operation

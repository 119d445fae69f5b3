"""Validation entry point: input-shape checks, dispatch and result assembly."""

import asyncio
from collections.abc import Awaitable, Callable
from datetime import datetime

from ...core.exceptions import CallError
from ...core.logging import get_logger, log_event
from ...core.utils import utc_now
from ..auth.schemas import CallerContext
from ..auth.services import IdentityProvider
from ..documents.schemas import DOCUMENT_TYPES
from ..properties.schemas import PROPERTY_TYPES
from ..records import Collection, RecordRepository
from ..users.schemas import USER_ROLES
from . import referential
from .field_validators import (
    is_present,
    validate_document_fields,
    validate_property_fields,
    validate_user_fields,
)
from .schemas import (
    DocumentInput,
    EntityInput,
    FieldError,
    Operation,
    PropertyInput,
    SchemaCatalog,
    UserInput,
    ValidationRequest,
    ValidationResult,
    build_input,
)

logger = get_logger(__name__)

Check = Awaitable[FieldError | None]


def _parse_request(payload: ValidationRequest) -> tuple[Collection, Operation, dict]:
    """Reject malformed calls before any validation runs.

    Raises:
        CallError: ``invalid-argument`` for a missing or unknown part
    """
    if not payload.collection or payload.data is None or not payload.operation:
        raise CallError(
            "invalid-argument", "Collection, data, and operation are required"
        )

    try:
        collection = Collection(payload.collection)
    except ValueError:
        raise CallError(
            "invalid-argument",
            "Invalid collection name",
            details={"collection": payload.collection},
        ) from None

    try:
        operation = Operation(payload.operation)
    except ValueError:
        raise CallError(
            "invalid-argument",
            "Invalid operation",
            details={"operation": payload.operation},
        ) from None

    if not isinstance(payload.data, dict):
        raise CallError("invalid-argument", "Data must be an object")

    return collection, operation, payload.data


def _user_checks(
    entity: UserInput, operation: Operation, identity: IdentityProvider
) -> list[Check]:
    checks = []
    if (
        operation == Operation.CREATE
        and is_present(entity.email)
        and isinstance(entity.email, str)
    ):
        checks.append(referential.check_email_unique(identity, entity.email))
    return checks


def _property_checks(
    entity: PropertyInput, repository: RecordRepository
) -> list[Check]:
    checks = []
    if is_present(entity.owner_id) and isinstance(entity.owner_id, str):
        checks.append(referential.check_property_owner(repository, entity.owner_id))
    return checks


def _document_checks(
    entity: DocumentInput, repository: RecordRepository
) -> list[Check]:
    checks = []
    if is_present(entity.property_id) and isinstance(entity.property_id, str):
        checks.append(referential.check_property_exists(repository, entity.property_id))
    if is_present(entity.owner_id) and isinstance(entity.owner_id, str):
        checks.append(referential.check_owner_exists(repository, entity.owner_id))
    return checks


async def run_validators(
    entity: EntityInput,
    operation: Operation,
    repository: RecordRepository,
    identity: IdentityProvider,
    clock: Callable[[], datetime] = utc_now,
) -> list[FieldError]:
    """Field checks first, then referential checks awaited together."""
    if isinstance(entity, UserInput):
        errors = validate_user_fields(entity, operation)
        checks = _user_checks(entity, operation, identity)
    elif isinstance(entity, PropertyInput):
        errors = validate_property_fields(entity, operation, clock=clock)
        checks = _property_checks(entity, repository)
    elif isinstance(entity, DocumentInput):
        errors = validate_document_fields(entity, operation)
        checks = _document_checks(entity, repository)
    else:
        raise TypeError(f"Unsupported input type: {type(entity).__name__}")

    if checks:
        results = await asyncio.gather(*checks)
        errors += [error for error in results if error is not None]
    return errors


async def validate_data(
    payload: ValidationRequest,
    caller: CallerContext | None,
    repository: RecordRepository,
    identity: IdentityProvider,
    clock: Callable[[], datetime] = utc_now,
) -> ValidationResult:
    """Validate a record before it is written.

    Args:
        payload: Collection, raw record data and operation
        caller: Authenticated caller, None when the call carries no identity
        repository: Record store used for reference lookups
        identity: Identity provider used for email uniqueness
        clock: Source of "now" for date rules

    Returns:
        ValidationResult; ``valid`` is False when any rule failed

    Raises:
        CallError: ``unauthenticated`` without a caller, ``invalid-argument``
            for a malformed call, ``internal`` for unexpected failures
    """
    if caller is None:
        raise CallError("unauthenticated", "User must be authenticated")

    collection, operation, data = _parse_request(payload)

    try:
        entity = build_input(collection, data)
        errors = await run_validators(entity, operation, repository, identity, clock)
    except Exception as e:
        logger.exception(
            "Error validating data",
            extra={
                "collection": collection.value,
                "operation": operation.value,
                "uid": caller.uid,
                "error_type": type(e).__name__,
            },
        )
        raise CallError("internal", "Data validation failed") from e

    result = ValidationResult.from_errors(errors)
    log_event(
        "data_validation_completed",
        {
            "collection": collection.value,
            "operation": operation.value,
            "uid": caller.uid,
            "valid": result.valid,
            "error_count": len(result.errors),
        },
        logger=logger,
    )
    return result


def describe_schemas() -> SchemaCatalog:
    """Collections, operations and allowed values accepted by ``validate_data``."""
    return SchemaCatalog(
        collections=[collection.value for collection in Collection],
        operations=[operation.value for operation in Operation],
        enums={
            "users.role": USER_ROLES,
            "properties.type": PROPERTY_TYPES,
            "documents.type": DOCUMENT_TYPES,
        },
    )

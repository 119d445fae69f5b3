"""Referential checks against the record store and identity provider.

Each check returns a ``FieldError`` or ``None``. A missing referenced
record and a failed lookup are reported with different messages so that
infrastructure outages are not mistaken for data problems.
"""

from typing import Any

from ...core.exceptions import IdentityNotFoundError
from ...core.logging import get_logger
from ..auth.services import IdentityProvider
from ..records import Collection, RecordRepository
from ..users.schemas import UserRole
from .schemas import FieldError

logger = get_logger(__name__)

OWNER_ROLES = (UserRole.OWNER.value, UserRole.ADMIN.value)


async def _lookup(
    repository: RecordRepository, collection: Collection, record_id: str
) -> dict[str, Any] | None:
    return await repository.get_by_id(collection.value, record_id)


def _lookup_failed(field: str, message: str, exc: Exception, **context) -> FieldError:
    logger.warning(
        message,
        extra={"field": field, "error_type": type(exc).__name__, **context},
        exc_info=True,
    )
    return FieldError(field=field, code="lookup_failed", message=message)


async def check_owner_exists(
    repository: RecordRepository, owner_id: str, field: str = "ownerId"
) -> FieldError | None:
    """The referenced user must exist."""
    try:
        owner = await _lookup(repository, Collection.USERS, owner_id)
    except Exception as e:
        return _lookup_failed(field, "Error validating owner", e, owner_id=owner_id)

    if owner is None:
        return FieldError(field=field, code="not_found", message="Owner does not exist")
    return None


def check_owner_role(owner: dict[str, Any], field: str = "ownerId") -> FieldError | None:
    """A property owner must hold the owner or admin role."""
    if owner.get("role") not in OWNER_ROLES:
        return FieldError(
            field=field,
            code="invalid_role",
            message="Assigned user must have owner or admin role",
        )
    return None


async def check_property_owner(
    repository: RecordRepository, owner_id: str
) -> FieldError | None:
    """Existence plus role constraint for a property's owner."""
    try:
        owner = await _lookup(repository, Collection.USERS, owner_id)
    except Exception as e:
        return _lookup_failed(
            "ownerId", "Error validating owner", e, owner_id=owner_id
        )

    if owner is None:
        return FieldError(
            field="ownerId", code="not_found", message="Owner does not exist"
        )
    return check_owner_role(owner)


async def check_property_exists(
    repository: RecordRepository, property_id: str
) -> FieldError | None:
    """The referenced property must exist."""
    try:
        record = await _lookup(repository, Collection.PROPERTIES, property_id)
    except Exception as e:
        return _lookup_failed(
            "propertyId", "Error validating property", e, property_id=property_id
        )

    if record is None:
        return FieldError(
            field="propertyId", code="not_found", message="Property does not exist"
        )
    return None


async def check_email_unique(
    identity: IdentityProvider, email: str
) -> FieldError | None:
    """No identity may already use ``email``.

    A not-found answer is the success case. Any other failure is reported as
    an error so the check cannot be bypassed by an unavailable provider.
    """
    try:
        await identity.get_user_by_email(email)
    except IdentityNotFoundError:
        return None
    except Exception as e:
        return _lookup_failed("email", "Error checking email uniqueness", e)

    return FieldError(field="email", code="duplicate", message="Email already exists")

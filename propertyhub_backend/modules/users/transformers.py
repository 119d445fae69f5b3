"""Conversions between stored user records, ``User`` and form data."""

from typing import Any

from ...core.utils import clean_text
from .schemas import UI_ONLY_FIELDS, User, UserCreate, UserFormData


def from_store(record: dict[str, Any]) -> User:
    """Widen a stored user record into a ``User``."""
    return User.model_validate(record)


def to_store(user: User | UserCreate) -> dict[str, Any]:
    """Narrow a user back to its stored shape.

    Timestamps become ISO strings; ``isActive`` defaults to true; password
    fields are dropped.
    """
    record = user.model_dump(
        mode="json", by_alias=True, exclude_none=True, exclude=UI_ONLY_FIELDS
    )
    record.setdefault("isActive", True)
    return record


def from_form(form: UserFormData) -> UserCreate:
    """Build a write payload from submitted form values."""
    email = clean_text(form.email)
    return UserCreate(
        email=email.lower() if email else None,
        name=clean_text(form.name),
        phone=clean_text(form.phone),
        role=clean_text(form.role),
        password=form.password or None,
        confirm_password=form.confirm_password or None,
        is_active=form.is_active,
    )


def to_form(user: User) -> UserFormData:
    """Populate the user form; passwords are never pre-filled."""
    return UserFormData(
        name=user.name or "",
        email=user.email or "",
        phone=user.phone or "",
        role=user.role,
        is_active=user.is_active if user.is_active is not None else True,
        password="",
        confirm_password="",
    )


def users_from_store(records: list[dict[str, Any]]) -> list[User]:
    """Convert a batch of stored user records."""
    return [from_store(record) for record in records]

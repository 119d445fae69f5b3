"""User schemas.

``User`` is the application model, ``UserCreate`` the write payload and
``UserFormData`` the string-valued shape bound to the user form. All of
them read and write camelCase aliases, the field names used in storage.
"""

import enum
from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from ...core.utils import coerce_enum, parse_timestamp


class UserRole(str, enum.Enum):
    """Portal roles."""

    ADMIN = "admin"
    OWNER = "owner"
    TENANT = "tenant"


class UserBase(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        validate_default=True,
    )


class User(UserBase):
    """User as held by the application."""

    id: str | None = None
    uid: str | None = None
    email: str | None = None
    name: str | None = None
    phone: str | None = None
    role: UserRole = UserRole.TENANT
    is_active: bool | None = None
    last_login_at: datetime | None = None
    profile_image_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("role", mode="before")
    @classmethod
    def coerce_role(cls, value):
        return coerce_enum(UserRole, value, UserRole.TENANT)

    @field_validator("last_login_at", "created_at", "updated_at", mode="before")
    @classmethod
    def widen_timestamps(cls, value):
        return parse_timestamp(value)


class UserCreate(UserBase):
    """Write payload for a new user; password fields never persist."""

    uid: str | None = None
    email: str | None = None
    name: str | None = None
    phone: str | None = None
    role: str | None = None
    password: str | None = None
    confirm_password: str | None = None
    is_active: bool | None = None
    profile_image_url: str | None = None


class UserFormData(UserBase):
    """Values bound to the user form."""

    name: str = ""
    email: str = ""
    phone: str = ""
    role: str = ""
    password: str = ""
    confirm_password: str = ""
    is_active: bool = True


# Fields that exist only in forms and must never reach storage
UI_ONLY_FIELDS = {"password", "confirm_password"}

USER_ROLES: list[str] = [role.value for role in UserRole]

"""Authentication schemas."""

from pydantic import BaseModel, ConfigDict


class CallerContext(BaseModel):
    """Authenticated caller passed explicitly into service calls."""

    uid: str
    email: str | None = None
    role: str | None = None


class IdentityRecord(BaseModel):
    """Identity as returned by an identity provider."""

    model_config = ConfigDict(from_attributes=True)

    uid: str
    email: str
    display_name: str | None = None
    role: str | None = None
    disabled: bool = False

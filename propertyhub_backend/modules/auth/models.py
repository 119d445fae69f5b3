"""Identity models.

Mirrors the accounts known to the authentication service: one row per
sign-in identity, looked up by email for uniqueness checks.
"""

from sqlalchemy import Boolean, Index, String
from sqlalchemy.orm import Mapped, mapped_column, validates

from ...database import Base, TimestampMixin


def normalize_email(email: str) -> str:
    return email.strip().lower()


class Identity(TimestampMixin, Base):
    """Sign-in identity. ``email`` is always stored lowercased."""

    __tablename__ = "identities"

    uid: Mapped[str] = mapped_column(String(128), primary_key=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    display_name: Mapped[str | None] = mapped_column(String(120), nullable=True)
    role: Mapped[str | None] = mapped_column(String(32), nullable=True)
    disabled: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    __table_args__ = (Index("ix_identities_email", "email", unique=True),)

    @validates("email")
    def _normalize_email(self, key, value):
        return normalize_email(value)

    def __repr__(self) -> str:
        return f"<Identity(uid={self.uid}, email={self.email})>"

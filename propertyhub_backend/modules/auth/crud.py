"""CRUD operations for identities."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Identity, normalize_email


async def get_identity_by_email(db: AsyncSession, email: str) -> Identity | None:
    """Get an identity by email. Emails are stored normalized, so this hits the unique index."""
    result = await db.execute(select(Identity).where(Identity.email == normalize_email(email)))
    return result.scalar_one_or_none()

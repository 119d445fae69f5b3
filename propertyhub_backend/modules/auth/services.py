"""Identity provider access."""

from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ...core.exceptions import ExternalServiceError, IdentityNotFoundError
from . import crud
from .schemas import IdentityRecord


class IdentityProvider(Protocol):
    """Lookups against the authentication service."""

    async def get_user_by_email(self, email: str) -> IdentityRecord:
        """Return the identity for ``email``.

        Raises:
            IdentityNotFoundError: No identity uses this email
        """
        ...


class SqlIdentityProvider:
    """``IdentityProvider`` backed by the ``identities`` table.

    Opens a session per lookup so it can run alongside record lookups.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def get_user_by_email(self, email: str) -> IdentityRecord:
        try:
            async with self.session_factory() as session:
                identity = await crud.get_identity_by_email(session, email)
                record = IdentityRecord.model_validate(identity) if identity else None
        except SQLAlchemyError as e:
            raise ExternalServiceError(
                "identity", "get_user_by_email", details={"error": str(e)}
            ) from e

        if record is None:
            raise IdentityNotFoundError(email)
        return record

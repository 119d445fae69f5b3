"""Authentication dependencies for FastAPI."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ...core.logging import get_logger
from ...database import get_sessionmaker
from .jwt_service import decode_access_token
from .schemas import CallerContext
from .services import IdentityProvider, SqlIdentityProvider

logger = get_logger(__name__)

security = HTTPBearer(auto_error=False)


async def get_caller(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> CallerContext | None:
    """Resolve the caller from a bearer token.

    Returns None for a missing or invalid token; services that require a
    caller reject the call themselves, so the decision is made in one place.
    """
    if credentials is None:
        return None

    payload = decode_access_token(credentials.credentials)
    if payload is None or not payload.get("sub"):
        logger.info("Rejected bearer token")
        return None

    return CallerContext(
        uid=str(payload["sub"]),
        email=payload.get("email"),
        role=payload.get("role"),
    )


# Type alias for dependency injection
OptionalCaller = Annotated[CallerContext | None, Depends(get_caller)]


def get_identity_provider() -> IdentityProvider:
    return SqlIdentityProvider(get_sessionmaker())


Identities = Annotated[IdentityProvider, Depends(get_identity_provider)]

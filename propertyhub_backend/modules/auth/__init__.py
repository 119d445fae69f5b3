"""Authentication module: caller identity and identity lookups."""

from .dependencies import Identities, OptionalCaller, get_caller, get_identity_provider
from .models import Identity
from .schemas import CallerContext, IdentityRecord
from .services import IdentityProvider, SqlIdentityProvider

__all__ = [
    "Identity",
    "CallerContext",
    "IdentityRecord",
    "IdentityProvider",
    "SqlIdentityProvider",
    "Identities",
    "OptionalCaller",
    "get_caller",
    "get_identity_provider",
]

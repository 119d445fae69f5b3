"""User module: user model, form shapes and transformers."""

from .schemas import USER_ROLES, User, UserCreate, UserFormData, UserRole

__all__ = [
    "User",
    "UserCreate",
    "UserFormData",
    "UserRole",
    "USER_ROLES",
]

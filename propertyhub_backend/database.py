"""
Database configuration for the PropertyHub portal backend.

Backs the record store (JSON documents grouped by collection) and the
identity table used for email lookups.
"""

import logging
from datetime import datetime
from functools import lru_cache

from sqlalchemy import DateTime
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import Mapped, declarative_base, mapped_column
from sqlalchemy.sql import func

from .config import settings

logger = logging.getLogger(__name__)

# Base class
Base = declarative_base()


class TimestampMixin:
    """Mixin to add created and updated timestamps to models."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )


def _connect_args(database_url: str) -> dict:
    """SSL options for MySQL connections."""
    if database_url.startswith("mysql+asyncmy"):
        return {
            "ssl": {
                "ssl_check_hostname": settings.database_ssl_check_hostname,
                "ssl_verify_cert": settings.database_ssl_verify_cert,
                "ssl_verify_identity": settings.database_ssl_verify_identity,
            },
        }
    return {}


@lru_cache
def get_engine() -> AsyncEngine:
    """Create the async engine on first use."""
    logger.info("Creating database engine")
    return create_async_engine(
        settings.database_url,
        echo=settings.app_debug,
        connect_args=_connect_args(settings.database_url),
        pool_pre_ping=True,
        pool_recycle=3600,
    )


@lru_cache
def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    """Async session factory bound to the engine."""
    return async_sessionmaker(get_engine(), class_=AsyncSession, expire_on_commit=False)


async def init_db():
    """Initialize database tables."""
    from .modules.auth import models as auth_models  # noqa: F401
    from .modules.records import models as record_models  # noqa: F401

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

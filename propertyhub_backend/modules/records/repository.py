"""Record store access.

Referential checks depend only on the ``RecordRepository`` protocol so the
backing store can be swapped (SQL here, an in-memory fake in tests).
"""

from typing import Any, Protocol

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ...core.exceptions import DatabaseError
from ...core.logging import get_logger
from .models import StoredRecord

logger = get_logger(__name__)


class RecordRepository(Protocol):
    """Access to records grouped by collection."""

    async def get_by_id(
        self, collection: str, record_id: str
    ) -> dict[str, Any] | None: ...

    async def get_by_field(
        self, collection: str, field: str, value: Any
    ) -> list[dict[str, Any]]: ...

    async def delete(self, collection: str, record_ids: list[str]) -> int: ...


def _field_matches(field: str, value: Any):
    """Typed comparison of a top-level JSON field."""
    element = StoredRecord.data[field]
    if isinstance(value, bool):
        return element.as_boolean() == value
    if isinstance(value, int):
        return element.as_integer() == value
    if isinstance(value, float):
        return element.as_float() == value
    return element.as_string() == str(value)


class SqlRecordRepository:
    """``RecordRepository`` backed by the ``records`` table.

    Every call opens its own session, so lookups issued concurrently for one
    request never share a connection.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def get_by_id(self, collection: str, record_id: str) -> dict[str, Any] | None:
        """Get a record by id within a collection."""
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(StoredRecord).where(
                        StoredRecord.collection == collection,
                        StoredRecord.record_id == record_id,
                    )
                )
                row = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(
                "Record lookup failed",
                extra={"collection": collection, "record_id": record_id},
                exc_info=True,
            )
            raise DatabaseError(
                f"Failed to load {collection}/{record_id}",
                details={"error_type": type(e).__name__},
            ) from e

        return row.as_record() if row else None

    async def get_by_field(
        self, collection: str, field: str, value: Any
    ) -> list[dict[str, Any]]:
        """Get records of a collection whose top-level ``field`` equals ``value``."""
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(StoredRecord)
                    .where(
                        StoredRecord.collection == collection,
                        _field_matches(field, value),
                    )
                    .order_by(StoredRecord.record_id)
                )
                rows = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error(
                "Record query failed",
                extra={"collection": collection, "field": field},
                exc_info=True,
            )
            raise DatabaseError(
                f"Failed to query {collection} by {field}",
                details={"error_type": type(e).__name__},
            ) from e

        return [row.as_record() for row in rows]

    async def delete(self, collection: str, record_ids: list[str]) -> int:
        """Delete records by id; returns the number of rows removed."""
        if not record_ids:
            return 0
        try:
            async with self.session_factory() as session, session.begin():
                result = await session.execute(
                    delete(StoredRecord).where(
                        StoredRecord.collection == collection,
                        StoredRecord.record_id.in_(record_ids),
                    )
                )
        except SQLAlchemyError as e:
            logger.error(
                "Record delete failed",
                extra={"collection": collection, "count": len(record_ids)},
                exc_info=True,
            )
            raise DatabaseError(
                f"Failed to delete from {collection}",
                details={"error_type": type(e).__name__},
            ) from e

        logger.info(
            "Records deleted",
            extra={"collection": collection, "count": result.rowcount},
        )
        return result.rowcount

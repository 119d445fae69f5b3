"""Record store dependencies for FastAPI."""

from typing import Annotated

from fastapi import Depends

from ...database import get_sessionmaker
from .repository import RecordRepository, SqlRecordRepository


def get_record_repository() -> RecordRepository:
    return SqlRecordRepository(get_sessionmaker())


# Type alias for dependency injection
Records = Annotated[RecordRepository, Depends(get_record_repository)]

"""Record store models.

Application entities live in a document store: schemaless JSON records
grouped by collection name and addressed by a string id.
"""

import enum
from typing import Any

from sqlalchemy import JSON, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from ...database import Base, TimestampMixin


class Collection(str, enum.Enum):
    """Known record collections."""

    USERS = "users"
    PROPERTIES = "properties"
    DOCUMENTS = "documents"


class StoredRecord(TimestampMixin, Base):
    """A single JSON record within a collection."""

    __tablename__ = "records"

    collection: Mapped[str] = mapped_column(String(64), primary_key=True)
    record_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    data: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    __table_args__ = (Index("ix_records_collection", "collection"),)

    def as_record(self) -> dict[str, Any]:
        """Return the stored data with its id attached."""
        return {**(self.data or {}), "id": self.record_id}

    def __repr__(self) -> str:
        return f"<StoredRecord(collection={self.collection}, id={self.record_id})>"

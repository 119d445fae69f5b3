"""Record store module: JSON records grouped by collection."""

from .dependencies import Records, get_record_repository
from .models import Collection, StoredRecord
from .repository import RecordRepository, SqlRecordRepository

__all__ = [
    "Collection",
    "StoredRecord",
    "RecordRepository",
    "SqlRecordRepository",
    "Records",
    "get_record_repository",
]

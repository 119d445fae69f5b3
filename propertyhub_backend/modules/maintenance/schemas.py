"""Integrity sweep schemas."""

import enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class IntegrityScope(str, enum.Enum):
    """Which references a sweep follows."""

    ORPHANED_DOCUMENTS = "orphaned_documents"
    ORPHANED_PROPERTIES = "orphaned_properties"
    ALL = "all"


class MaintenanceBase(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class IntegrityRequest(MaintenanceBase):
    """Sweep request; nothing is deleted unless ``dryRun`` is false."""

    type: str | None = None
    dry_run: bool = True


class OrphanedRecord(MaintenanceBase):
    collection: str
    record_id: str
    reason: str


class IntegrityReport(MaintenanceBase):
    """Outcome of a sweep.

    ``items_orphaned`` counts records with a dangling reference;
    ``items_deleted`` stays 0 on a dry run.
    """

    success: bool = True
    dry_run: bool = True
    items_processed: int = 0
    items_orphaned: int = 0
    items_deleted: int = 0
    orphans: list[OrphanedRecord] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)

    def flag(self, collection: str, record_id: str, reason: str) -> None:
        self.orphans.append(
            OrphanedRecord(collection=collection, record_id=record_id, reason=reason)
        )
        self.items_orphaned += 1

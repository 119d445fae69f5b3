"""Referential integrity sweep over stored records.

Documents must point at an existing property and owner, properties at an
existing owner. Dangling references are reported, and removed only when the
sweep is not a dry run. A failed lookup is reported as an error and never
causes a deletion.
"""

from ...core.exceptions import CallError
from ...core.logging import get_logger, log_event
from ..auth.schemas import CallerContext
from ..records import Collection, RecordRepository
from ..users.schemas import UserRole
from ..validation import referential
from ..validation.field_validators import is_present
from .schemas import IntegrityReport, IntegrityRequest, IntegrityScope

logger = get_logger(__name__)


async def _active_records(repository: RecordRepository, collection: Collection):
    # Inactive records are already soft-deleted
    return await repository.get_by_field(collection.value, "isActive", True)


def _reference(record: dict, field: str) -> str | None:
    value = record.get(field)
    return value if is_present(value) and isinstance(value, str) else None


async def _sweep_documents(repository: RecordRepository, report: IntegrityReport) -> None:
    for document in await _active_records(repository, Collection.DOCUMENTS):
        report.items_processed += 1
        document_id = document["id"]

        property_id = _reference(document, "propertyId")
        if property_id:
            error = await referential.check_property_exists(repository, property_id)
            if error is not None and error.code == "not_found":
                report.flag(
                    Collection.DOCUMENTS.value,
                    document_id,
                    f"Document {document_id} references non-existent property {property_id}",
                )
                continue
            if error is not None:
                report.errors.append(
                    f"Error checking property {property_id} for document {document_id}"
                )

        owner_id = _reference(document, "ownerId")
        if owner_id:
            error = await referential.check_owner_exists(repository, owner_id)
            if error is not None and error.code == "not_found":
                report.flag(
                    Collection.DOCUMENTS.value,
                    document_id,
                    f"Document {document_id} references non-existent owner {owner_id}",
                )
            elif error is not None:
                report.errors.append(
                    f"Error checking owner {owner_id} for document {document_id}"
                )


async def _sweep_properties(repository: RecordRepository, report: IntegrityReport) -> None:
    for prop in await _active_records(repository, Collection.PROPERTIES):
        report.items_processed += 1
        property_id = prop["id"]

        owner_id = _reference(prop, "ownerId")
        if not owner_id:
            continue
        error = await referential.check_owner_exists(repository, owner_id)
        if error is not None and error.code == "not_found":
            report.flag(
                Collection.PROPERTIES.value,
                property_id,
                f"Property {property_id} references non-existent owner {owner_id}",
            )
        elif error is not None:
            report.errors.append(
                f"Error checking owner {owner_id} for property {property_id}"
            )


async def check_integrity(
    repository: RecordRepository,
    dry_run: bool = True,
    scope: IntegrityScope = IntegrityScope.ALL,
) -> IntegrityReport:
    """Sweep stored records for dangling references.

    Args:
        repository: Record store to sweep
        dry_run: Report only; when False the orphans are deleted
        scope: Which collections to sweep

    Returns:
        IntegrityReport with the orphans found and lookup errors
    """
    report = IntegrityReport(dry_run=dry_run)

    if scope in (IntegrityScope.ORPHANED_DOCUMENTS, IntegrityScope.ALL):
        await _sweep_documents(repository, report)
    if scope in (IntegrityScope.ORPHANED_PROPERTIES, IntegrityScope.ALL):
        await _sweep_properties(repository, report)

    if not dry_run:
        for collection in (Collection.DOCUMENTS, Collection.PROPERTIES):
            record_ids = [
                orphan.record_id
                for orphan in report.orphans
                if orphan.collection == collection.value
            ]
            report.items_deleted += await repository.delete(collection.value, record_ids)

    return report


async def run_integrity_check(
    payload: IntegrityRequest,
    caller: CallerContext | None,
    repository: RecordRepository,
) -> IntegrityReport:
    """Admin entry point for the integrity sweep.

    Raises:
        CallError: ``unauthenticated`` without a caller, ``permission-denied``
            for non-admins, ``invalid-argument`` for a missing or unknown
            type, ``internal`` when the sweep itself fails
    """
    if caller is None:
        raise CallError("unauthenticated", "User must be authenticated")
    if caller.role != UserRole.ADMIN.value:
        raise CallError("permission-denied", "Admin access required")

    if not payload.type:
        raise CallError("invalid-argument", "Integrity check type is required")
    try:
        scope = IntegrityScope(payload.type)
    except ValueError:
        raise CallError(
            "invalid-argument",
            "Invalid integrity check type",
            details={"type": payload.type},
        ) from None

    log_event(
        "integrity_check_started",
        {"type": scope.value, "dry_run": payload.dry_run, "uid": caller.uid},
        logger=logger,
    )

    try:
        report = await check_integrity(repository, dry_run=payload.dry_run, scope=scope)
    except Exception as e:
        logger.exception(
            "Integrity check failed",
            extra={"type": scope.value, "uid": caller.uid, "error_type": type(e).__name__},
        )
        raise CallError("internal", "Integrity check failed") from e

    log_event(
        "integrity_check_completed",
        {
            "type": scope.value,
            "uid": caller.uid,
            "processed": report.items_processed,
            "orphaned": report.items_orphaned,
            "deleted": report.items_deleted,
            "error_count": len(report.errors),
            "dry_run": report.dry_run,
        },
        logger=logger,
    )
    return report

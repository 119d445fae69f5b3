"""Maintenance API routes."""

from fastapi import APIRouter

from ..auth import OptionalCaller
from ..commons import ErrorResponse
from ..records import Records
from . import services
from .schemas import IntegrityReport, IntegrityRequest

router = APIRouter(prefix="/maintenance", tags=["Maintenance"])


@router.post(
    "/integrity",
    response_model=IntegrityReport,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def integrity(
    payload: IntegrityRequest,
    caller: OptionalCaller,
    repository: Records,
):
    """Report (and optionally delete) records with dangling references. Admin only."""
    return await services.run_integrity_check(payload, caller, repository)

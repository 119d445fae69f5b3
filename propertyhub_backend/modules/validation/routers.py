"""Validation API routes."""

from fastapi import APIRouter

from ..auth import Identities, OptionalCaller
from ..commons import BaseResponse, ErrorResponse
from ..records import Records
from . import services
from .schemas import SchemaCatalog, ValidationRequest, ValidationResponse

router = APIRouter(prefix="/validation", tags=["Validation"])


@router.post(
    "/validate",
    response_model=ValidationResponse,
    response_model_exclude_none=True,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def validate(
    payload: ValidationRequest,
    caller: OptionalCaller,
    repository: Records,
    identity: Identities,
):
    """Validate a user, property or document record before it is written."""
    result = await services.validate_data(payload, caller, repository, identity)
    return result.to_response()


@router.get("/schemas", response_model=BaseResponse[SchemaCatalog])
async def list_schemas():
    """List the collections, operations and enum values accepted by /validate."""
    return BaseResponse(
        success=True,
        message="Validation schemas retrieved successfully",
        data=services.describe_schemas(),
    )

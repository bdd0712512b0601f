"""Facebook data deletion callback endpoint."""

from typing import Annotated

from fastapi import APIRouter, Body, Depends, Request
from structlog import get_logger

from deletion_service.plugins.facebook.data_deletion.models import (
    DeletionConfirmation,
    DeletionRequest,
    ErrorResponse,
)
from deletion_service.plugins.facebook.data_deletion.service import (
    DataDeletionService,
    get_data_deletion_service,
)

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "/fb-data-deletion",
    response_model=DeletionConfirmation,
    summary="Facebook data deletion callback",
    description=(
        "Called by Facebook when a user removes the app and asks for their data "
        "to be deleted. Deletes everything stored for `user_id` and echoes "
        "`challenge` back as `confirmation_code`."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Missing required fields"},
        500: {"model": ErrorResponse, "description": "Data deletion failed"},
    },
)
async def facebook_data_deletion(
    request: Request,
    service: Annotated[DataDeletionService, Depends(get_data_deletion_service)],
    payload: Annotated[DeletionRequest | None, Body()] = None,
) -> DeletionConfirmation:
    """
    Handle a deletion callback. Errors are raised as ServiceError subclasses
    and rendered by the global handler.
    """
    logger.info(
        "Facebook data deletion request received",
        user_id=payload.user_id if payload else None,
    )
    return await service.handle(payload, str(request.url))

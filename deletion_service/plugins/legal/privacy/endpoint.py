"""Privacy policy route required by the Facebook app review."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse

from deletion_service.config import AppConfig
from deletion_service.utils.dependencies import get_settings

router = APIRouter()


@router.get(
    "/privacy-policy",
    response_class=RedirectResponse,
    status_code=status.HTTP_302_FOUND,
    summary="Privacy policy",
    description="Redirects to the static privacy policy page.",
)
def privacy_policy(
    settings: Annotated[AppConfig, Depends(get_settings)],
) -> RedirectResponse:
    return RedirectResponse(settings.privacy_policy_url, status_code=status.HTTP_302_FOUND)

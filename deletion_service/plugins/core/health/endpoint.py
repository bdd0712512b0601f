from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Depends

from deletion_service.context import ServiceContext
from deletion_service.plugins.core.health.models import HealthResponse
from deletion_service.utils.dependencies import get_service_context

HEALTH_MESSAGE = "Facebook Data Deletion Service is running"

router = APIRouter()


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a ``Z`` suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Always succeeds while the process is serving requests.",
)
def health_check(
    context: Annotated[ServiceContext, Depends(get_service_context)],
) -> HealthResponse:
    return HealthResponse(
        status="OK",
        message=HEALTH_MESSAGE,
        timestamp=utc_timestamp(),
        uptime=context.uptime(),
    )

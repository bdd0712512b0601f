from typing import Annotated

from fastapi import APIRouter, Depends

from deletion_service import __version__
from deletion_service.plugins import PluginManager
from deletion_service.plugins.core.info.models import ServiceInfo
from deletion_service.utils.dependencies import get_plugin_manager

SERVICE_TITLE = "Facebook Data Deletion Callback"
SERVICE_DESCRIPTION = "This service handles Facebook data deletion requests"

router = APIRouter()


@router.get(
    "/",
    response_model=ServiceInfo,
    summary="Service information",
    description="Describes the service and lists the routes it exposes.",
)
def service_info(
    plugin_manager: Annotated[PluginManager, Depends(get_plugin_manager)],
) -> ServiceInfo:
    return ServiceInfo(
        service=SERVICE_TITLE,
        version=__version__,
        description=SERVICE_DESCRIPTION,
        endpoints=plugin_manager.public_endpoints(),
    )

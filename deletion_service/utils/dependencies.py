from typing import Annotated

from fastapi import Depends, Request

from deletion_service.config import AppConfig
from deletion_service.context import ServiceContext
from deletion_service.plugins import PluginManager
from deletion_service.plugins.facebook.data_deletion.backend import DeletionBackend


def get_service_context(request: Request) -> ServiceContext:
    """Dependency to get the ServiceContext from the application state."""
    return request.app.state.context


def get_settings(
    context: Annotated[ServiceContext, Depends(get_service_context)],
) -> AppConfig:
    """Dependency to get the application's settings."""
    return context.settings


def get_deletion_backend(
    context: Annotated[ServiceContext, Depends(get_service_context)],
) -> DeletionBackend:
    """Dependency to get the injected deletion backend."""
    return context.deletion_backend


def get_plugin_manager(request: Request) -> PluginManager:
    """Dependency to get the PluginManager that registered the app's routes."""
    return request.app.state.plugin_manager

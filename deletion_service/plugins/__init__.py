"""Plugin system for autodiscovery and dynamic route registration."""

import importlib
from pathlib import Path
from typing import Any

import structlog
from fastapi import APIRouter, FastAPI

logger = structlog.get_logger(__name__)


class PluginManager:
    """
    Handles the discovery and registration of all plugins.

    A plugin is any package below ``plugins/`` that has an ``endpoint.py``
    exposing a ``router``. Its ``__init__.py`` may define ``PLUGIN_METADATA``
    with ``prefix``, ``tags``, ``version`` and the public ``endpoints`` it
    serves.
    """

    def __init__(self, excluded_plugins: list[str] | None = None):
        self.plugins_dir = Path(__file__).parent
        self.package = __name__
        self.excluded_plugins = set(excluded_plugins or [])
        self.discovered_routers: dict[str, APIRouter] = {}
        self.metadata: dict[str, dict[str, Any]] = {}
        self._discovery_has_run = False

    def discover(self):
        """Discovers all plugin routers and their metadata."""
        if self._discovery_has_run:
            logger.debug("Plugin discovery has already run. Skipping.")
            return

        logger.info("Starting plugin discovery...")
        for endpoint_file in sorted(self.plugins_dir.rglob("endpoint.py")):
            plugin_path = endpoint_file.parent
            relative_path = plugin_path.relative_to(self.plugins_dir)
            if any(part.startswith(("_", ".")) for part in relative_path.parts):
                continue

            plugin_name = relative_path.as_posix()
            if plugin_name in self.excluded_plugins:
                logger.info(f"Skipping excluded plugin: {plugin_name}")
                continue

            self._load_plugin(plugin_name)

        self._discovery_has_run = True

    def _module_path(self, plugin_name: str, module: str | None = None) -> str:
        parts = [self.package, *plugin_name.split("/")]
        if module:
            parts.append(module)
        return ".".join(parts)

    def _load_plugin(self, plugin_name: str):
        """Loads the router and metadata of a single plugin."""
        endpoint_module = self._import_module(self._module_path(plugin_name, "endpoint"))
        router = getattr(endpoint_module, "router", None)
        if not isinstance(router, APIRouter):
            logger.warning(f"No valid router found in {plugin_name}/endpoint.py")
            return

        package_module = self._import_module(self._module_path(plugin_name))
        metadata = dict(getattr(package_module, "PLUGIN_METADATA", {}))
        metadata.setdefault("version", "1.0.0")

        self.discovered_routers[plugin_name] = router
        self.metadata[plugin_name] = metadata
        logger.debug(f"Discovered router for plugin: {plugin_name}")

    def _import_module(self, module_path: str):
        """Dynamically imports a module using its full path."""
        try:
            return importlib.import_module(module_path)
        except ImportError as e:
            logger.error(
                f"Failed to import module '{module_path}'", error=str(e), exc_info=True
            )
            return None

    def public_endpoints(self) -> dict[str, str]:
        """All ``"METHOD /path": description`` entries advertised by plugins."""
        endpoints: dict[str, str] = {}
        for plugin_name in sorted(self.metadata):
            endpoints.update(self.metadata[plugin_name].get("endpoints", {}))
        return endpoints

    def register_routers(self, app: FastAPI):
        """Registers all discovered routers with the FastAPI application."""
        if not self.discovered_routers:
            logger.warning("No plugin routers were discovered to register.")
            return

        for plugin_name, router in sorted(self.discovered_routers.items()):
            metadata = self.metadata.get(plugin_name, {})
            prefix = metadata.get("prefix", f"/{plugin_name}")
            tags = metadata.get("tags") or [plugin_name.replace("/", " ").title()]
            app.include_router(router, prefix=prefix, tags=tags)
            logger.info(
                f"Registered plugin routes for '{plugin_name}' at prefix '{prefix}'"
            )

from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from deletion_service import __version__
from deletion_service.config import AppConfig
from deletion_service.context import ServiceContext
from deletion_service.logging_config import setup_structlog
from deletion_service.plugins import PluginManager
from deletion_service.plugins.facebook.data_deletion.backend import (
    DeletionBackend,
    SimulatedDeletionBackend,
)
from deletion_service.tracing import instrument_app
from deletion_service.utils.exceptions import NotFoundError, ServiceError, ValidationError
from deletion_service.utils.middleware import (
    INTERNAL_ERROR_CONTENT,
    structured_logging_middleware,
)

logger = structlog.get_logger(__name__)

CORS_ALLOW_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_ALLOW_HEADERS = ["Origin", "X-Requested-With", "Content-Type", "Accept"]


def log_startup_banner(settings: AppConfig):
    base_url = f"http://localhost:{settings.port}"
    logger.info("=" * 50)
    logger.info("Facebook Data Deletion Service started")
    logger.info("=" * 50)
    logger.info("Server running", port=settings.port)
    logger.info("Health check", url=f"{base_url}/health")
    logger.info("Data deletion", url=f"{base_url}/fb-data-deletion")
    logger.info("Privacy policy", url=f"{base_url}/privacy-policy")
    logger.info("=" * 50)

    if not settings.is_production:
        logger.warning("This is a development server. For production, make sure to:")
        logger.warning("1. Use HTTPS (required by Facebook)")
        logger.warning("2. Configure proper environment variables")
        logger.warning("3. Implement actual database deletion logic")
        logger.warning("4. Set up proper logging and monitoring")
        logger.info("=" * 50)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage the application's lifespan.
    Nothing is held in process between requests, so shutdown only logs.
    """
    context: ServiceContext = app.state.context
    logger.info(
        "Application starting up...",
        service=context.settings.service_name,
        backend=type(context.deletion_backend).__name__,
    )
    log_startup_banner(context.settings)

    yield

    logger.info("Application shutting down...", uptime=round(context.uptime(), 3))


async def service_exception_handler(request: Request, exc: ServiceError):
    log_event = logger.warning if exc.status_code < 500 else logger.error
    log_event(
        "Service error occurred, returning HTTP response",
        error=exc.error,
        detail=exc.message,
        status_code=exc.status_code,
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_content())


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # Unknown paths and unsupported methods on known paths both read as "not found".
    if exc.status_code in (404, 405):
        not_found = NotFoundError(request.method, request.url.path)
        return JSONResponse(status_code=404, content=not_found.to_content())
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail), "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
):
    # Only where and why; the rejected input may carry user data.
    logger.warning(
        "Rejected malformed request body",
        errors=[
            {"loc": list(error.get("loc", ())), "type": error.get("type")}
            for error in exc.errors()
        ],
    )
    invalid = ValidationError(
        "Request body must be a JSON object with string user_id and challenge",
        error="Invalid request body",
    )
    return JSONResponse(status_code=invalid.status_code, content=invalid.to_content())


async def generic_exception_handler(request: Request, exc: Exception):
    # Last resort for failures outside structured_logging_middleware.
    logger.exception("An unhandled exception occurred", error=str(exc))
    return JSONResponse(status_code=500, content=INTERNAL_ERROR_CONTENT)


def create_app(
    settings: AppConfig | None = None,
    deletion_backend: DeletionBackend | None = None,
    excluded_plugins: list[str] | None = None,
) -> FastAPI:
    """Build a fully wired application.

    Args:
        settings: Configuration; read from the environment when omitted.
        deletion_backend: Backend to purge subject data with. Defaults to the
            simulated backend configured by ``settings``.
        excluded_plugins: Plugin names (e.g. ``"legal/privacy"``) to skip.
    """
    settings = settings or AppConfig()
    setup_structlog(
        json_logs=settings.json_logs,
        log_level=settings.log_level,
        service_name=settings.service_name,
        environment=settings.environment,
    )

    if deletion_backend is None:
        deletion_backend = SimulatedDeletionBackend(
            delay_scale=settings.simulated_deletion_delay_scale,
            failing_subjects=settings.simulated_deletion_failures,
        )

    app = FastAPI(
        version=__version__,
        title="Facebook Data Deletion Callback",
        description="Handles Facebook user data deletion callbacks.",
        lifespan=lifespan,
    )
    app.state.context = ServiceContext(
        settings=settings, deletion_backend=deletion_backend
    )

    app.add_exception_handler(ServiceError, service_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(
        RequestValidationError, request_validation_exception_handler
    )
    app.add_exception_handler(Exception, generic_exception_handler)

    app.middleware("http")(structured_logging_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=CORS_ALLOW_METHODS,
        allow_headers=CORS_ALLOW_HEADERS,
    )

    plugin_manager = PluginManager(excluded_plugins=excluded_plugins)
    plugin_manager.discover()
    plugin_manager.register_routers(app)
    app.state.plugin_manager = plugin_manager

    # Mounted last so that every plugin route takes precedence.
    app.mount(
        "/",
        StaticFiles(directory=settings.resolved_static_dir),
        name="static",
    )

    if settings.otel_enabled:
        instrument_app(app, settings.service_name)

    return app


def run():
    """Console entry point: serve a fresh app with uvicorn until SIGINT/SIGTERM."""
    settings = AppConfig()
    uvicorn.run(
        "deletion_service.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        proxy_headers=True,
        forwarded_allow_ips=settings.forwarded_allow_ips,
        log_config=None,
    )


if __name__ == "__main__":
    run()

import time
import uuid

import structlog
import structlog.contextvars
from fastapi import Request
from fastapi.responses import JSONResponse

logger = structlog.get_logger(__name__)

INTERNAL_ERROR_CONTENT = {
    "error": "Internal server error",
    "message": "Something went wrong!",
}

EXCLUDED_ENDPOINTS = [
    "/health",
    "/docs",
    "/redoc",
    "/openapi.json",
    "/favicon.ico",
]


async def structured_logging_middleware(request: Request, call_next):
    structlog.contextvars.clear_contextvars()
    start_time = time.time()
    correlation_id = request.headers.get("x-correlation-id") or str(uuid.uuid4())
    structlog.contextvars.bind_contextvars(
        correlation_id=correlation_id,
        remote_addr=request.client.host if request.client else None,
        request_path=request.url.path,
        request_method=request.method,
        user_agent=request.headers.get("user-agent"),
    )
    try:
        response = await call_next(request)
        process_time = time.time() - start_time
        status_code = response.status_code
        log_event = logger.info if 200 <= status_code < 400 else logger.warning
        if request.url.path in EXCLUDED_ENDPOINTS and status_code < 400:
            log_event = logger.debug
        log_event(
            "Request completed",
            status_code=status_code,
            processing_time_ms=round(process_time * 1000, 2),
        )
        response.headers["X-Correlation-ID"] = correlation_id
        response.headers["X-Process-Time"] = f"{process_time:.4f}s"
        return response
    except Exception as e:
        process_time = time.time() - start_time
        logger.exception(
            "Request failed with unhandled exception",
            error=str(e),
            processing_time_ms=round(process_time * 1000, 2),
        )
        # Answered here, inside CORS, so the error still carries every header.
        response = JSONResponse(status_code=500, content=INTERNAL_ERROR_CONTENT)
        response.headers["X-Correlation-ID"] = correlation_id
        response.headers["X-Process-Time"] = f"{process_time:.4f}s"
        return response
    finally:
        structlog.contextvars.clear_contextvars()

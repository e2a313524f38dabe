"""
Request/Response logging middleware.
"""

import time
import uuid
from typing import Callable

import structlog
from fastapi import FastAPI, Request, Response

from booking_service.config.logging import get_logger

logger = get_logger(__name__)

# Health probes and scrapes would drown the booking traffic
_UNLOGGED_SUFFIXES = ("/health/live", "/health/ready", "/health/metrics")


def add_logging_middleware(app: FastAPI) -> None:
    """Log every booking request, tagged with request and caller ids."""

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        start_time = time.perf_counter()

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id, caller_id=request.headers.get("X-User-Id")
        )
        quiet = request.url.path.endswith(_UNLOGGED_SUFFIXES)

        if not quiet:
            logger.info("Request started", method=request.method, path=request.url.path)

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "Request failed",
                method=request.method,
                path=request.url.path,
                error=str(e),
                duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
            )
            raise

        duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
        if not quiet:
            logger.info(
                "Request completed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=duration_ms,
            )

        response.headers["X-Request-ID"] = request_id
        return response

"""
Error handling for the booking API.
"""

import traceback

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from booking_service.config.logging import get_logger
from booking_service.domain.exceptions.conflict_error import ConflictError
from booking_service.domain.exceptions.gateway_error import GatewayError
from booking_service.domain.exceptions.not_found_error import NotFoundError
from booking_service.domain.exceptions.validation_error import ValidationError
from booking_service.infrastructure.monitoring.metrics import record_error

logger = get_logger(__name__)


def _error_body(error: str, message, error_type: str, **extra) -> dict:
    return {"error": error, "message": message, "type": error_type, **extra}


def add_error_handlers(app: FastAPI) -> None:
    """Map domain exceptions to JSON error responses."""

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        logger.warning("Validation error", errors=exc.errors, path=request.url.path)
        return JSONResponse(
            status_code=400,
            content=_error_body(
                "Validation Error", str(exc), "validation_error", errors=exc.errors
            ),
        )

    @app.exception_handler(ConflictError)
    async def conflict_error_handler(request: Request, exc: ConflictError):
        logger.info("Conflict", reason=exc.reason, path=request.url.path)
        return JSONResponse(
            status_code=409,
            content=_error_body("Conflict", exc.reason, "conflict_error"),
        )

    @app.exception_handler(NotFoundError)
    async def not_found_error_handler(request: Request, exc: NotFoundError):
        logger.info("Not found", error=str(exc), path=request.url.path)
        return JSONResponse(
            status_code=404,
            content=_error_body("Not Found", str(exc), "not_found_error"),
        )

    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError):
        logger.error("Gateway error", error=str(exc), path=request.url.path)
        record_error("gateway_error", exc.gateway)
        return JSONResponse(
            status_code=502,
            content=_error_body("Gateway Error", str(exc), "gateway_error"),
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error("Database error", error=str(exc), path=request.url.path)
        record_error("database_error", "api")
        return JSONResponse(
            status_code=500,
            content=_error_body(
                "Database Error", "A database error occurred", "database_error"
            ),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body("HTTP Error", exc.detail, "http_error"),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception",
            error=str(exc),
            path=request.url.path,
            traceback=traceback.format_exc(),
        )
        record_error("internal_error", "api")
        return JSONResponse(
            status_code=500,
            content=_error_body(
                "Internal Server Error", "An unexpected error occurred", "internal_error"
            ),
        )

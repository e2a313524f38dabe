"""
FastAPI application factory.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from booking_service.api.middleware.error_handler import add_error_handlers
from booking_service.api.middleware.logging import add_logging_middleware
from booking_service.api.routes import (
    bookings_router,
    distance_router,
    health_router,
    job_status_router,
    notifications_router,
)
from booking_service.config.logging import configure_logging, get_logger
from booking_service.config.settings import settings

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application startup", environment=settings.ENVIRONMENT)
    yield
    logger.info("Application shutdown")


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    configure_logging()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Interpreter booking lifecycle service",
        openapi_url=f"{settings.API_PREFIX}/openapi.json" if settings.DEBUG else None,
        docs_url=f"{settings.API_PREFIX}/docs" if settings.DEBUG else None,
        redoc_url=f"{settings.API_PREFIX}/redoc" if settings.DEBUG else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    add_error_handlers(app)
    add_logging_middleware(app)

    app.include_router(health_router, prefix=settings.API_PREFIX)
    app.include_router(bookings_router, prefix=settings.API_PREFIX)
    app.include_router(job_status_router, prefix=settings.API_PREFIX)
    app.include_router(notifications_router, prefix=settings.API_PREFIX)
    app.include_router(distance_router, prefix=settings.API_PREFIX)

    return app

"""
Structured logging for the booking service.

Everything goes through structlog on top of the stdlib root handler. Booking
audit entries use their own "audit" logger so they can be shipped apart
from application logs.
"""

import logging
import sys
from typing import Any, Optional

import structlog

from booking_service.config.settings import settings

AUDIT_LOGGER = "audit"

# Libraries that are chatty at INFO
_QUIET_LOGGERS = (
    "sqlalchemy.engine",
    "sqlalchemy.pool",
    "asyncio",
    "httpx",
    "httpcore",
    "celery.app.trace",
)


def add_service_context(logger: Any, method_name: str, event_dict: dict) -> dict:
    """Stamp every event with the service name and environment."""
    event_dict.setdefault("service", settings.APP_NAME)
    event_dict.setdefault("environment", settings.ENVIRONMENT)
    return event_dict


def configure_logging() -> None:
    """Configure structlog and the stdlib root handler."""
    renderer = (
        structlog.processors.JSONRenderer()
        if settings.ENVIRONMENT == "production"
        else structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            add_service_context,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.LOG_LEVEL.upper()),
    )

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    # Audit trail is kept even when the service runs at WARNING
    logging.getLogger(AUDIT_LOGGER).setLevel(logging.INFO)


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger."""
    return structlog.get_logger(name)


def get_audit_logger(**context: Any) -> structlog.stdlib.BoundLogger:
    """Audit logger bound to the booking and actor of one call."""
    return structlog.get_logger(AUDIT_LOGGER).bind(**context)

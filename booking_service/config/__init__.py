"""
Configuration package: settings, logging and database sessions.
"""

from .database import get_async_session_factory, get_db_session, worker_session
from .logging import configure_logging, get_audit_logger, get_logger
from .settings import Settings, settings

__all__ = [
    "Settings",
    "settings",
    "configure_logging",
    "get_audit_logger",
    "get_logger",
    "get_async_session_factory",
    "get_db_session",
    "worker_session",
]

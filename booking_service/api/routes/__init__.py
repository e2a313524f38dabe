"""
API routes package.
"""

from .bookings import router as bookings_router
from .distance import router as distance_router
from .health import router as health_router
from .job_status import router as job_status_router
from .notifications import router as notifications_router

__all__ = [
    "bookings_router",
    "distance_router",
    "health_router",
    "job_status_router",
    "notifications_router",
]

"""
Domain package.
"""

from .entities import *
from .events import *
from .exceptions import *
from .value_objects import *

__all__ = [
    # Entities
    "Distance",
    "Job",
    "Language",
    "TranslatorAssignment",
    "User",

    # Events
    "JobCancelled",
    "JobCreated",
    "SessionEnded",

    # Exceptions
    "ConflictError",
    "GatewayError",
    "NotFoundError",
    "ValidationError",

    # Value Objects
    "JobStatus",
    "JobType",
    "NotificationType",
    "SessionTime",
    "UserType",
]

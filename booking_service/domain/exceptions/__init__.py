"""
Domain exceptions package.
"""

from .conflict_error import ConflictError, InvalidTransitionError, JobAlreadyTakenError
from .gateway_error import GatewayError
from .not_found_error import NotFoundError
from .validation_error import ValidationError

__all__ = [
    "ConflictError",
    "GatewayError",
    "InvalidTransitionError",
    "JobAlreadyTakenError",
    "NotFoundError",
    "ValidationError",
]

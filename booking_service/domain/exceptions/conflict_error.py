"""
Conflict-related domain exceptions.
"""

from typing import Optional


class ConflictError(Exception):
    """Raised when an operation clashes with the booking's current state."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class InvalidTransitionError(ConflictError):
    """Raised when a status change is not allowed from the current status."""

    def __init__(self, current_status: str, requested_status: str):
        self.current_status = current_status
        self.requested_status = requested_status
        super().__init__(
            f"Cannot change status from '{current_status}' to '{requested_status}'"
        )


class JobAlreadyTakenError(ConflictError):
    """Raised when a booking is no longer open for acceptance."""

    def __init__(self, job_id, reason: Optional[str] = None):
        self.job_id = job_id
        super().__init__(reason or f"Job {job_id} is no longer available")

"""
Job status value object.
"""

from enum import Enum


class JobStatus(str, Enum):
    """Booking lifecycle status enumeration."""

    PENDING = "pending"
    ASSIGNED = "assigned"
    STARTED = "started"
    COMPLETED = "completed"
    WITHDRAW_BEFORE_24 = "withdrawbefore24"
    WITHDRAW_AFTER_24 = "withdrawafter24"
    TIMEDOUT = "timedout"
    NOT_CARRIED_OUT_CUSTOMER = "not_carried_out_customer"

    def can_be_cancelled(self) -> bool:
        """Check if the booking can still be withdrawn."""
        return self in [self.PENDING, self.ASSIGNED]

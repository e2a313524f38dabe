"""
Notification intent value object.
"""

from enum import Enum


class NotificationType(str, Enum):
    """Message intent of a push notification."""

    SUITABLE_JOB = "suitable_job"
    JOB_ACCEPTED = "job_accepted"
    JOB_CANCELLED = "job_cancelled"
    JOB_EXPIRED = "job_expired"
    SESSION_START_REMIND = "session_start_remind"

"""
Time-based booking rules.
"""

from datetime import datetime, timedelta

from booking_service.domain.value_objects.job_status import JobStatus


def will_expire_at(due: datetime, created_at: datetime) -> datetime:
    """When an unaccepted booking times out, based on how far ahead it was made."""
    lead = due - created_at
    if lead <= timedelta(minutes=90):
        return due
    if lead <= timedelta(hours=24):
        return created_at + timedelta(minutes=90)
    if lead <= timedelta(hours=72):
        return created_at + timedelta(hours=16)
    return due - timedelta(hours=48)


def customer_withdrawal_status(hours_until_due: float, window_hours: int = 24) -> JobStatus:
    if hours_until_due >= window_hours:
        return JobStatus.WITHDRAW_BEFORE_24
    return JobStatus.WITHDRAW_AFTER_24

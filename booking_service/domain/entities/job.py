"""Job domain entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from booking_service.domain.value_objects.certification import (
    TranslatorLevel,
    levels_for_certification,
)
from booking_service.domain.value_objects.job_status import JobStatus
from booking_service.domain.value_objects.job_type import JobType


@dataclass
class Job:
    """Interpreter booking, the aggregate root of the lifecycle."""

    user_id: UUID
    from_language_id: UUID
    due: datetime
    duration: int
    job_type: JobType
    id: UUID = field(default_factory=uuid4)
    status: JobStatus = JobStatus.PENDING
    immediate: bool = False
    gender: Optional[str] = None
    certified: Optional[str] = None
    customer_phone_type: bool = False
    customer_physical_type: bool = False

    admin_comments: Optional[str] = None
    reference: Optional[str] = None
    session_time: Optional[str] = None
    user_email: Optional[str] = None
    address: Optional[str] = None
    instructions: Optional[str] = None
    town: Optional[str] = None

    # Earmarked for a single translator
    specific_translator_id: Optional[UUID] = None

    created_at: Optional[datetime] = None
    end_at: Optional[datetime] = None
    will_expire_at: Optional[datetime] = None
    withdraw_at: Optional[datetime] = None

    ignore: bool = False
    ignore_expired: bool = False
    ignore_feedback: bool = False
    flagged: bool = False
    manually_handled: bool = False
    by_admin: bool = False
    cust_16_hour_email: int = 0
    cust_48_hour_email: int = 0

    def __post_init__(self):
        """Validate job data."""
        if self.duration is None or self.duration <= 0:
            raise ValueError("Job duration must be a positive number of minutes")
        if self.due.tzinfo is None:
            raise ValueError("Job due time must be timezone-aware")
        if isinstance(self.status, str):
            self.status = JobStatus(self.status)
        if isinstance(self.job_type, str):
            self.job_type = JobType(self.job_type)

        if not self.created_at:
            self.created_at = datetime.now(timezone.utc)

    @property
    def is_physical(self) -> bool:
        """On-site booking that cannot be handled by phone."""
        return bool(self.customer_physical_type and not self.customer_phone_type)

    @property
    def acceptable_levels(self) -> frozenset[TranslatorLevel]:
        return levels_for_certification(self.certified)

    def hours_until_due(self, now: datetime) -> float:
        """Hours left until the booking starts (negative once it has begun)."""
        return (self.due - now).total_seconds() / 3600

    def is_due_in_future(self, now: datetime) -> bool:
        return self.due > now

    def reset_for_repost(self, now: datetime, will_expire_at: datetime) -> None:
        """Put the booking back in the pending pool with fresh timestamps."""
        self.status = JobStatus.PENDING
        self.created_at = now
        self.will_expire_at = will_expire_at
        self.cust_16_hour_email = 0
        self.cust_48_hour_email = 0

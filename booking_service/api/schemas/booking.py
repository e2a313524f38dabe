"""
Booking API schemas.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from booking_service.domain.entities.job import Job
from booking_service.domain.value_objects.job_status import JobStatus

from .common import BaseResponse, YesNo


class BookingCreateRequest(BaseModel):
    """Booking form submitted by a customer."""

    from_language_id: Optional[UUID] = None
    immediate: YesNo = False
    due_date: Optional[str] = Field(None, description="MM/DD/YYYY")
    due_time: Optional[str] = Field(None, description="HH:MM")
    customer_phone_type: YesNo = False
    customer_physical_type: YesNo = False
    duration: Optional[int] = None
    job_for: List[str] = Field(default_factory=list)
    specific_translator_id: Optional[UUID] = None
    by_admin: YesNo = False


class BookingConfirmRequest(BaseModel):
    """Contact details sent after the booking form."""

    user_email: Optional[str] = Field(None, max_length=255)
    reference: Optional[str] = Field(None, max_length=255)
    address: Optional[str] = None
    instructions: Optional[str] = None
    town: Optional[str] = Field(None, max_length=100)


class BookingUpdateRequest(BaseModel):
    """Admin edit of a booking."""

    status: Optional[JobStatus] = None
    due: Optional[datetime] = None
    from_language_id: Optional[UUID] = None
    translator_id: Optional[UUID] = None
    translator_email: Optional[str] = None
    admin_comments: Optional[str] = None
    reference: Optional[str] = None
    session_time: Optional[str] = None

    @field_validator("due")
    @classmethod
    def validate_due(cls, v):
        if v is not None and v.tzinfo is None:
            raise ValueError("due must include a timezone offset")
        return v


class DistanceUpdateRequest(BaseModel):
    """Travel details and admin flags for a booking."""

    distance: Optional[str] = None
    time: Optional[str] = None
    admin_comments: Optional[str] = None
    session_time: Optional[str] = None
    flagged: YesNo = False
    manually_handled: YesNo = False
    by_admin: YesNo = False


class JobResponse(BaseModel):
    """Booking as returned by the API."""

    id: UUID
    user_id: UUID
    status: JobStatus
    job_type: str
    from_language_id: UUID
    due: datetime
    duration: int
    immediate: bool
    gender: Optional[str] = None
    certified: Optional[str] = None
    customer_phone_type: bool
    customer_physical_type: bool
    admin_comments: Optional[str] = None
    reference: Optional[str] = None
    session_time: Optional[str] = None
    user_email: Optional[str] = None
    address: Optional[str] = None
    instructions: Optional[str] = None
    town: Optional[str] = None
    created_at: Optional[datetime] = None
    end_at: Optional[datetime] = None
    will_expire_at: Optional[datetime] = None
    withdraw_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, job: Job) -> "JobResponse":
        return cls(
            id=job.id,
            user_id=job.user_id,
            status=job.status,
            job_type=job.job_type.value,
            from_language_id=job.from_language_id,
            due=job.due,
            duration=job.duration,
            immediate=job.immediate,
            gender=job.gender,
            certified=job.certified,
            customer_phone_type=job.customer_phone_type,
            customer_physical_type=job.customer_physical_type,
            admin_comments=job.admin_comments,
            reference=job.reference,
            session_time=job.session_time,
            user_email=job.user_email,
            address=job.address,
            instructions=job.instructions,
            town=job.town,
            created_at=job.created_at,
            end_at=job.end_at,
            will_expire_at=job.will_expire_at,
            withdraw_at=job.withdraw_at,
        )


class BookingCreatedResponse(BaseModel):
    """Summary echoed back after a booking is created."""

    id: UUID
    type: str
    job_for: List[str]
    customer_town: Optional[str] = None
    customer_type: Optional[str] = None


class BookingUpdatedResponse(BaseResponse):
    job: JobResponse
    status_changed: bool
    changes: List[Dict[str, Any]] = Field(default_factory=list)


class AcceptJobResponse(BaseResponse):
    job: JobResponse
    potential_jobs: List[JobResponse] = Field(default_factory=list)


class CancelJobResponse(BaseResponse):
    job: JobResponse
    reopened: bool


class SessionClosedResponse(BaseResponse):
    job: JobResponse
    changed: bool
    session_time: Optional[str] = None


class ReopenJobResponse(BaseResponse):
    job: JobResponse
    original_job_id: UUID
    cloned: bool


class DispatchResponse(BaseResponse):
    immediate: int = 0
    delayed: int = 0
    suppressed: int = 0
    failed_batches: int = 0


class SmsResponse(BaseResponse):
    attempted: int


class DistanceResponse(BaseResponse):
    job: JobResponse
    distance: Optional[str] = None
    time: Optional[str] = None

"""Booking endpoints: create, confirm, update and potential jobs."""

from typing import List
from uuid import UUID

from fastapi import APIRouter, status

from booking_service.api.dependencies import (
    CallerIdDep,
    ConfirmBookingDep,
    CreateBookingDep,
    PotentialJobsDep,
    UpdateBookingDep,
)
from booking_service.api.schemas.booking import (
    BookingConfirmRequest,
    BookingCreatedResponse,
    BookingCreateRequest,
    BookingUpdatedResponse,
    BookingUpdateRequest,
    JobResponse,
)
from booking_service.application.use_cases import (
    ConfirmBookingRequest,
    CreateBookingRequest,
    UpdateBookingRequest,
)
from booking_service.config.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.post("/", response_model=BookingCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_booking(
    payload: BookingCreateRequest, caller_id: CallerIdDep, use_case: CreateBookingDep
):
    """Create an immediate or scheduled booking for the calling customer."""
    result = await use_case.execute(
        CreateBookingRequest(
            customer_id=caller_id,
            from_language_id=payload.from_language_id,
            immediate=payload.immediate,
            duration=payload.duration,
            due_date=payload.due_date,
            due_time=payload.due_time,
            customer_phone_type=payload.customer_phone_type,
            customer_physical_type=payload.customer_physical_type,
            job_for=payload.job_for,
            specific_translator_id=payload.specific_translator_id,
            by_admin=payload.by_admin,
        )
    )
    return BookingCreatedResponse(
        id=result.job.id,
        type=result.booking_type,
        job_for=result.job_for,
        customer_town=result.customer_town,
        customer_type=result.customer_type,
    )


@router.post("/{job_id}/confirm", response_model=JobResponse)
async def confirm_booking(
    job_id: UUID, payload: BookingConfirmRequest, use_case: ConfirmBookingDep
):
    """Store contact details, email the receipt and queue the translator broadcast."""
    job = await use_case.execute(
        ConfirmBookingRequest(job_id=job_id, **payload.model_dump())
    )
    return JobResponse.from_entity(job)


@router.patch("/{job_id}", response_model=BookingUpdatedResponse)
async def update_booking(
    job_id: UUID,
    payload: BookingUpdateRequest,
    caller_id: CallerIdDep,
    use_case: UpdateBookingDep,
):
    """Edit translator, time, language, comments and status of a booking."""
    result = await use_case.execute(
        UpdateBookingRequest(job_id=job_id, caller_id=caller_id, **payload.model_dump())
    )
    return BookingUpdatedResponse(
        message=result.transition_note,
        job=JobResponse.from_entity(result.job),
        status_changed=result.status_changed,
        changes=result.changes,
    )


@router.get("/potential", response_model=List[JobResponse])
async def potential_jobs(caller_id: CallerIdDep, use_case: PotentialJobsDep):
    """Pending bookings the calling translator may accept."""
    jobs = await use_case.execute(caller_id)
    return [JobResponse.from_entity(job) for job in jobs]

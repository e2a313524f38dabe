"""Booking lifecycle endpoints: accept, cancel, end, not-called and reopen."""

from uuid import UUID

from fastapi import APIRouter

from booking_service.api.dependencies import (
    AcceptJobByIdDep,
    AcceptJobDep,
    CallerIdDep,
    CancelJobDep,
    CustomerNotCallDep,
    EndJobDep,
    ReopenJobDep,
)
from booking_service.api.schemas.booking import (
    AcceptJobResponse,
    CancelJobResponse,
    JobResponse,
    ReopenJobResponse,
    SessionClosedResponse,
)

router = APIRouter(prefix="/bookings", tags=["job-status"])


@router.post("/{job_id}/accept", response_model=AcceptJobResponse)
async def accept_job(job_id: UUID, caller_id: CallerIdDep, use_case: AcceptJobDep):
    """Take a pending booking from the job list."""
    result = await use_case.execute(job_id, caller_id)
    return AcceptJobResponse(
        job=JobResponse.from_entity(result.job),
        potential_jobs=[JobResponse.from_entity(job) for job in result.potential_jobs],
    )


@router.post("/{job_id}/accept-from-notification", response_model=AcceptJobResponse)
async def accept_job_by_id(job_id: UUID, caller_id: CallerIdDep, use_case: AcceptJobByIdDep):
    """Take a booking straight from a push notification."""
    result = await use_case.execute(job_id, caller_id)
    return AcceptJobResponse(message=result.message, job=JobResponse.from_entity(result.job))


@router.post("/{job_id}/cancel", response_model=CancelJobResponse)
async def cancel_job(job_id: UUID, caller_id: CallerIdDep, use_case: CancelJobDep):
    """Withdraw a booking as its customer or its translator."""
    result = await use_case.execute(job_id, caller_id)
    return CancelJobResponse(job=JobResponse.from_entity(result.job), reopened=result.reopened)


@router.post("/{job_id}/end", response_model=SessionClosedResponse)
async def end_job(job_id: UUID, caller_id: CallerIdDep, use_case: EndJobDep):
    """Close a started session."""
    result = await use_case.execute(job_id, caller_id)
    return SessionClosedResponse(
        job=JobResponse.from_entity(result.job),
        changed=result.changed,
        session_time=result.job.session_time if result.changed else None,
    )


@router.post("/{job_id}/customer-not-call", response_model=SessionClosedResponse)
async def customer_not_call(job_id: UUID, caller_id: CallerIdDep, use_case: CustomerNotCallDep):
    """Record that the customer never called."""
    result = await use_case.execute(job_id, caller_id)
    return SessionClosedResponse(
        job=JobResponse.from_entity(result.job),
        changed=result.changed,
        session_time=result.job.session_time if result.changed else None,
    )


@router.post("/{job_id}/reopen", response_model=ReopenJobResponse)
async def reopen_job(job_id: UUID, caller_id: CallerIdDep, use_case: ReopenJobDep):
    """Put a booking back in the pending pool."""
    result = await use_case.execute(job_id, caller_id)
    return ReopenJobResponse(
        job=JobResponse.from_entity(result.job),
        original_job_id=result.original_job_id,
        cloned=result.cloned,
    )

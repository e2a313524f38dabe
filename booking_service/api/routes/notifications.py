"""Endpoints for resending booking notifications."""

from uuid import UUID

from fastapi import APIRouter

from booking_service.api.dependencies import ResendPushDep, ResendSmsDep
from booking_service.api.schemas.booking import DispatchResponse, SmsResponse

router = APIRouter(prefix="/bookings", tags=["notifications"])


@router.post("/{job_id}/notifications/push", response_model=DispatchResponse)
async def resend_push(job_id: UUID, use_case: ResendPushDep):
    report = await use_case.execute(job_id)
    return DispatchResponse(
        message="Push sent",
        immediate=report.immediate,
        delayed=report.delayed,
        suppressed=report.suppressed,
        failed_batches=report.failed_batches,
    )


@router.post("/{job_id}/notifications/sms", response_model=SmsResponse)
async def resend_sms(job_id: UUID, use_case: ResendSmsDep):
    attempted = await use_case.execute(job_id)
    return SmsResponse(message="SMS sent", attempted=attempted)

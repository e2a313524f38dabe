"""Distance and admin flag endpoint."""

from uuid import UUID

from fastapi import APIRouter

from booking_service.api.dependencies import CallerIdDep, UpdateDistanceDep
from booking_service.api.schemas.booking import (
    DistanceResponse,
    DistanceUpdateRequest,
    JobResponse,
)
from booking_service.application.use_cases import UpdateDistanceRequest

router = APIRouter(prefix="/bookings", tags=["distance"])


@router.put("/{job_id}/distance", response_model=DistanceResponse)
async def update_distance(
    job_id: UUID,
    payload: DistanceUpdateRequest,
    caller_id: CallerIdDep,
    use_case: UpdateDistanceDep,
):
    result = await use_case.execute(
        UpdateDistanceRequest(job_id=job_id, caller_id=caller_id, **payload.model_dump())
    )
    return DistanceResponse(
        message="Record updated!",
        job=JobResponse.from_entity(result.job),
        distance=result.distance.distance if result.distance else None,
        time=result.distance.time if result.distance else None,
    )

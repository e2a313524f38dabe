"""Update distance and admin flags use case."""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from booking_service.application.interfaces.repositories import (
    DistanceRepositoryInterface,
    JobRepositoryInterface,
)
from booking_service.application.services import texts
from booking_service.application.services.audit_log import BookingAuditLog
from booking_service.application.use_cases.lookups import load_job
from booking_service.config.logging import get_logger
from booking_service.domain.entities.distance import Distance
from booking_service.domain.entities.job import Job
from booking_service.domain.exceptions.validation_error import ValidationError
from booking_service.domain.value_objects.session_time import SessionTime
from booking_service.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)

logger = get_logger(__name__)


@dataclass
class UpdateDistanceRequest:
    """Travel details and admin flags for a booking."""

    job_id: UUID
    caller_id: Optional[UUID] = None
    distance: Optional[str] = None
    time: Optional[str] = None
    admin_comments: Optional[str] = None
    session_time: Optional[str] = None
    flagged: bool = False
    manually_handled: bool = False
    by_admin: bool = False


@dataclass
class UpdateDistanceResult:
    job: Job
    distance: Optional[Distance]


class UpdateDistanceUseCase:
    """Use case for recording travel distance and admin follow-up on a booking."""

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        distance_repo: DistanceRepositoryInterface,
        transaction_service: TransactionService,
    ):
        self.job_repo = job_repo
        self.distance_repo = distance_repo
        self.transaction_service = transaction_service

    async def execute(self, request: UpdateDistanceRequest) -> UpdateDistanceResult:
        if request.flagged and not (request.admin_comments or "").strip():
            raise ValidationError.for_field("admin_comments", texts.FLAG_COMMENT_MESSAGE)

        session_time = None
        if request.session_time:
            try:
                session_time = str(SessionTime.parse(request.session_time))
            except ValueError as e:
                raise ValidationError.for_field("session_time", str(e)) from e

        return await self.transaction_service.execute_in_transaction(
            lambda: self._apply(request, session_time)
        )

    async def _apply(
        self, request: UpdateDistanceRequest, session_time: Optional[str]
    ) -> UpdateDistanceResult:
        job = await load_job(self.job_repo, request.job_id)
        audit = BookingAuditLog(job_id=job.id, actor_id=request.caller_id)

        distance = None
        if request.distance or request.time:
            distance = await self.distance_repo.save(
                Distance(job_id=job.id, distance=request.distance, time=request.time)
            )
            audit.event("distance_recorded", distance=request.distance, time=request.time)
        else:
            distance = await self.distance_repo.get_by_job_id(job.id)

        updates = {
            "admin_comments": request.admin_comments
            if request.admin_comments is not None
            else job.admin_comments,
            "session_time": session_time or job.session_time,
            "flagged": request.flagged,
            "manually_handled": request.manually_handled,
            "by_admin": request.by_admin,
        }
        changed = False
        for name, value in updates.items():
            if getattr(job, name) != value:
                audit.record(name, getattr(job, name), value)
                setattr(job, name, value)
                changed = True

        if changed:
            job = await self.job_repo.update(job)

        logger.info(
            "Booking distance and flags updated",
            job_id=str(job.id),
            distance_saved=bool(request.distance or request.time),
            job_changed=changed,
        )
        return UpdateDistanceResult(job=job, distance=distance)

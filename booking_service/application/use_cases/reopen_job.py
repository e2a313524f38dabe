"""Reopen job use case."""

from dataclasses import dataclass, replace
from datetime import datetime
from uuid import UUID, uuid4

from booking_service.application.interfaces.gateways import ClockInterface
from booking_service.application.interfaces.repositories import (
    JobRepositoryInterface,
    TranslatorAssignmentRepositoryInterface,
)
from booking_service.application.services.audit_log import BookingAuditLog
from booking_service.application.services.booking_notifier import BookingNotifier
from booking_service.application.services.booking_rules import will_expire_at
from booking_service.application.use_cases.lookups import load_job
from booking_service.config.logging import get_logger
from booking_service.domain.entities.job import Job
from booking_service.domain.entities.translator_assignment import TranslatorAssignment
from booking_service.domain.value_objects.job_status import JobStatus
from booking_service.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)
from booking_service.infrastructure.monitoring.metrics import (
    record_status_change,
    track_duration,
)

logger = get_logger(__name__)

REOPENING_COMMENT = "This booking is a reopening of booking #{job_id}"


@dataclass
class ReopenJobResult:
    """Result of reopening a booking."""

    job: Job
    original_job_id: UUID
    cloned: bool


class ReopenJobUseCase:
    """
    Use case for putting a booking back in the pending pool.

    A timed out booking is cloned into a fresh pending booking, anything
    else is reset in place. Either way the original booking's open
    assignments are closed and a cancelled placeholder row records who
    reopened it.
    """

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        assignment_repo: TranslatorAssignmentRepositoryInterface,
        notifier: BookingNotifier,
        clock: ClockInterface,
        transaction_service: TransactionService,
    ):
        self.job_repo = job_repo
        self.assignment_repo = assignment_repo
        self.notifier = notifier
        self.clock = clock
        self.transaction_service = transaction_service

    @track_duration("reopen_job")
    async def execute(self, job_id: UUID, user_id: UUID) -> ReopenJobResult:
        result = await self.transaction_service.execute_in_transaction(
            lambda: self._reopen(job_id, user_id)
        )
        await self.notifier.broadcast_suitable_job(result.job)
        return result

    async def _reopen(self, job_id: UUID, user_id: UUID) -> ReopenJobResult:
        original = await load_job(self.job_repo, job_id)
        now = self.clock.now()
        audit = BookingAuditLog(job_id=original.id, actor_id=user_id)
        previous_status = original.status

        if original.status == JobStatus.TIMEDOUT:
            job = await self.job_repo.create(self._clone(original, now))
            audit.event("reopened_as_clone", new_job_id=str(job.id))
        else:
            original.reset_for_repost(now, will_expire_at(original.due, now))
            job = await self.job_repo.update(original)
            audit.record("status", previous_status, job.status)

        for assignment in await self.assignment_repo.find_open_for_job(original.id):
            assignment.cancel(now)
            await self.assignment_repo.update(assignment)

        await self.assignment_repo.create(
            TranslatorAssignment(
                job_id=original.id, user_id=user_id, created_at=now, cancel_at=now
            )
        )

        record_status_change(previous_status.value, JobStatus.PENDING.value)
        cloned = job.id != original.id
        logger.info(
            "Booking reopened",
            original_job_id=str(original.id),
            job_id=str(job.id),
            cloned=cloned,
        )
        return ReopenJobResult(job=job, original_job_id=original.id, cloned=cloned)

    @staticmethod
    def _clone(original: Job, now: datetime) -> Job:
        return replace(
            original,
            id=uuid4(),
            status=JobStatus.PENDING,
            created_at=now,
            will_expire_at=will_expire_at(original.due, now),
            end_at=None,
            withdraw_at=None,
            session_time=None,
            cust_16_hour_email=0,
            cust_48_hour_email=0,
            admin_comments=REOPENING_COMMENT.format(job_id=original.id),
        )

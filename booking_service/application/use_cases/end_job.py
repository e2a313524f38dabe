"""End job and customer-not-call use cases."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID

from booking_service.application.interfaces.gateways import ClockInterface
from booking_service.application.interfaces.repositories import (
    JobRepositoryInterface,
    TranslatorAssignmentRepositoryInterface,
    UserRepositoryInterface,
)
from booking_service.application.services.audit_log import BookingAuditLog
from booking_service.application.services.booking_mailer import BookingMailer
from booking_service.application.services.transactional_outbox import (
    OutboxEventType,
    TransactionalOutbox,
)
from booking_service.application.use_cases.lookups import find_user, load_job
from booking_service.config.logging import get_logger
from booking_service.domain.entities.job import Job
from booking_service.domain.events.session_ended import SessionEnded
from booking_service.domain.value_objects.job_status import JobStatus
from booking_service.domain.value_objects.session_time import SessionTime
from booking_service.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)
from booking_service.infrastructure.monitoring.metrics import (
    record_status_change,
    track_duration,
)

logger = get_logger(__name__)


@dataclass
class SessionClosedResult:
    """Result of closing an interpreting session."""

    job: Job
    changed: bool
    session_time: Optional[SessionTime] = None
    translator_id: Optional[UUID] = None


class _SessionCloser:
    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        assignment_repo: TranslatorAssignmentRepositoryInterface,
        clock: ClockInterface,
        transaction_service: TransactionService,
    ):
        self.job_repo = job_repo
        self.assignment_repo = assignment_repo
        self.clock = clock
        self.transaction_service = transaction_service

    async def _close(
        self,
        job: Job,
        new_status: JobStatus,
        now: datetime,
        actor_id: Optional[UUID],
        completed_by: Optional[UUID] = None,
    ) -> SessionClosedResult:
        """Stamp end time and session length, complete the active assignment."""
        previous_status = job.status
        session = SessionTime.from_timedelta(abs(now - job.due))
        job.status = new_status
        job.end_at = now
        job.session_time = str(session)

        active = await self.assignment_repo.get_active_for_job(job.id)
        translator_id = None
        if active is not None:
            translator_id = active.user_id
            active.complete(completed_by=completed_by or active.user_id, completed_at=now)
            await self.assignment_repo.update(active)

        job = await self.job_repo.update(job)

        audit = BookingAuditLog(job_id=job.id, actor_id=actor_id)
        audit.record("status", previous_status, new_status)
        audit.record("session_time", None, job.session_time)
        record_status_change(previous_status.value, new_status.value)
        return SessionClosedResult(
            job=job, changed=True, session_time=session, translator_id=translator_id
        )


class EndJobUseCase(_SessionCloser):
    """Use case for closing a started session and recording its length."""

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        assignment_repo: TranslatorAssignmentRepositoryInterface,
        user_repo: UserRepositoryInterface,
        mailer: BookingMailer,
        outbox: TransactionalOutbox,
        clock: ClockInterface,
        transaction_service: TransactionService,
    ):
        super().__init__(job_repo, assignment_repo, clock, transaction_service)
        self.user_repo = user_repo
        self.mailer = mailer
        self.outbox = outbox

    @track_duration("end_job")
    async def execute(self, job_id: UUID, user_id: UUID) -> SessionClosedResult:
        result = await self.transaction_service.execute_in_transaction(
            lambda: self._end(job_id, user_id)
        )
        if not result.changed:
            return result

        job = result.job
        customer = await self.user_repo.get_by_id(job.user_id)
        translator = await find_user(self.user_repo, result.translator_id)
        if customer is not None:
            await self.mailer.session_ended(
                job, customer, translator, result.session_time.to_display()
            )
        logger.info(
            "Session ended",
            job_id=str(job.id),
            session_time=job.session_time,
            ended_by=str(user_id),
        )
        return result

    async def _end(self, job_id: UUID, user_id: UUID) -> SessionClosedResult:
        job = await load_job(self.job_repo, job_id)
        if job.status != JobStatus.STARTED:
            logger.info(
                "End job ignored, session not started",
                job_id=str(job.id),
                status=job.status.value,
            )
            return SessionClosedResult(job=job, changed=False)

        now = self.clock.now()
        result = await self._close(
            job, JobStatus.COMPLETED, now, user_id, completed_by=user_id
        )

        event = SessionEnded(
            job_id=job.id,
            ended_by=user_id,
            ended_at=now,
            session_time=result.job.session_time,
            translator_id=result.translator_id,
        )
        await self.outbox.create_event(
            OutboxEventType.SESSION_ENDED, str(job.id), event.to_dict()
        )
        return result


class CustomerNotCallUseCase(_SessionCloser):
    """Use case for recording that the customer never made the call."""

    @track_duration("customer_not_call")
    async def execute(self, job_id: UUID, caller_id: Optional[UUID] = None) -> SessionClosedResult:
        result = await self.transaction_service.execute_in_transaction(
            lambda: self._mark(job_id, caller_id)
        )
        if result.changed:
            logger.info(
                "Booking marked as not carried out by customer",
                job_id=str(result.job.id),
                translator_id=str(result.translator_id) if result.translator_id else None,
            )
        return result

    async def _mark(self, job_id: UUID, caller_id: Optional[UUID]) -> SessionClosedResult:
        job = await load_job(self.job_repo, job_id)
        if job.status not in (JobStatus.ASSIGNED, JobStatus.STARTED):
            logger.info(
                "Customer-not-call ignored",
                job_id=str(job.id),
                status=job.status.value,
            )
            return SessionClosedResult(job=job, changed=False)

        # Assignment is completed by its own translator
        return await self._close(
            job, JobStatus.NOT_CARRIED_OUT_CUSTOMER, self.clock.now(), caller_id
        )

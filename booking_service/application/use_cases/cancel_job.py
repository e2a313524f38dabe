"""Cancel job use case."""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from booking_service.application.interfaces.gateways import ClockInterface
from booking_service.application.interfaces.repositories import (
    JobRepositoryInterface,
    TranslatorAssignmentRepositoryInterface,
    UserRepositoryInterface,
)
from booking_service.application.services import texts
from booking_service.application.services.audit_log import BookingAuditLog
from booking_service.application.services.booking_notifier import BookingNotifier
from booking_service.application.services.booking_rules import (
    customer_withdrawal_status,
    will_expire_at,
)
from booking_service.application.services.transactional_outbox import (
    OutboxEventType,
    TransactionalOutbox,
)
from booking_service.application.use_cases.lookups import find_user, load_job, load_user
from booking_service.config.logging import get_logger
from booking_service.config.settings import settings
from booking_service.domain.entities.job import Job
from booking_service.domain.entities.user import User
from booking_service.domain.events.job_cancelled import JobCancelled
from booking_service.domain.exceptions.conflict_error import ConflictError
from booking_service.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)
from booking_service.infrastructure.monitoring.metrics import (
    record_status_change,
    track_duration,
)

logger = get_logger(__name__)


@dataclass
class CancelJobResult:
    """Result of a withdrawal."""

    job: Job
    reopened: bool
    translator_id: Optional[UUID] = None


class CancelJobUseCase:
    """Use case for a customer or the assigned translator withdrawing from a booking."""

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        assignment_repo: TranslatorAssignmentRepositoryInterface,
        user_repo: UserRepositoryInterface,
        notifier: BookingNotifier,
        outbox: TransactionalOutbox,
        clock: ClockInterface,
        transaction_service: TransactionService,
        window_hours: int = settings.WITHDRAWAL_WINDOW_HOURS,
        support_phone: str = settings.SUPPORT_PHONE_NUMBER,
    ):
        self.job_repo = job_repo
        self.assignment_repo = assignment_repo
        self.user_repo = user_repo
        self.notifier = notifier
        self.outbox = outbox
        self.clock = clock
        self.transaction_service = transaction_service
        self.window_hours = window_hours
        self.support_phone = support_phone

    @track_duration("cancel_job")
    async def execute(self, job_id: UUID, caller_id: UUID) -> CancelJobResult:
        caller = await load_user(self.user_repo, caller_id)

        if caller.is_customer:
            result = await self.transaction_service.execute_in_transaction(
                lambda: self._customer_withdraw(job_id, caller)
            )
            translator = await find_user(self.user_repo, result.translator_id)
            if translator is not None:
                await self.notifier.customer_cancelled(result.job, translator)
            return result

        result = await self.transaction_service.execute_in_transaction(
            lambda: self._translator_withdraw(job_id, caller)
        )
        customer = await self.user_repo.get_by_id(result.job.user_id)
        if customer is not None:
            await self.notifier.translator_cancelled(result.job, customer)
        await self.notifier.broadcast_suitable_job(
            result.job, exclude_ids=[result.translator_id]
        )
        return result

    async def _customer_withdraw(self, job_id: UUID, customer: User) -> CancelJobResult:
        job = await load_job(self.job_repo, job_id)
        if not job.status.can_be_cancelled():
            raise ConflictError(f"Booking in status '{job.status.value}' cannot be withdrawn")

        now = self.clock.now()
        previous_status = job.status
        job.status = customer_withdrawal_status(job.hours_until_due(now), self.window_hours)
        job.withdraw_at = now

        active = await self.assignment_repo.get_active_for_job(job.id)
        if active is not None:
            active.cancel(now)
            await self.assignment_repo.update(active)

        job = await self.job_repo.update(job)
        event = JobCancelled(
            job_id=job.id,
            cancelled_by=customer.id,
            status=job.status.value,
            cancelled_at=now,
            translator_id=active.user_id if active else None,
        )
        await self.outbox.create_event(
            OutboxEventType.JOB_CANCELLED, str(job.id), event.to_dict()
        )

        BookingAuditLog(job_id=job.id, actor_id=customer.id).record(
            "status", previous_status, job.status
        )
        record_status_change(previous_status.value, job.status.value)
        logger.info(
            "Booking withdrawn by customer",
            job_id=str(job.id),
            status=job.status.value,
            hours_until_due=round(job.hours_until_due(now), 2),
        )
        return CancelJobResult(
            job=job,
            reopened=False,
            translator_id=active.user_id if active else None,
        )

    async def _translator_withdraw(self, job_id: UUID, caller: User) -> CancelJobResult:
        job = await load_job(self.job_repo, job_id)
        active = await self.assignment_repo.get_active_for_job(job.id)
        if active is None:
            raise ConflictError("Booking has no assigned translator to withdraw")
        if caller.is_translator and active.user_id != caller.id:
            raise ConflictError("Booking is assigned to another translator")

        now = self.clock.now()
        hours = job.hours_until_due(now)
        if hours <= self.window_hours:
            logger.info(
                "Late translator withdrawal refused",
                job_id=str(job.id),
                hours_until_due=round(hours, 2),
            )
            raise ConflictError(texts.LATE_WITHDRAWAL_MESSAGE.format(phone=self.support_phone))

        previous_status = job.status
        active.cancel(now)
        await self.assignment_repo.update(active)
        job.reset_for_repost(now, will_expire_at(job.due, now))
        job = await self.job_repo.update(job)

        BookingAuditLog(job_id=job.id, actor_id=caller.id).record(
            "translator", active.user_id, None
        )
        record_status_change(previous_status.value, job.status.value)
        logger.info(
            "Booking released by translator",
            job_id=str(job.id),
            translator_id=str(active.user_id),
            hours_until_due=round(hours, 2),
        )
        return CancelJobResult(job=job, reopened=True, translator_id=active.user_id)

"""Expire pending bookings use case."""

from dataclasses import dataclass, field
from typing import List
from uuid import UUID

from booking_service.application.interfaces.gateways import ClockInterface
from booking_service.application.interfaces.repositories import (
    JobRepositoryInterface,
    UserRepositoryInterface,
)
from booking_service.application.services.audit_log import BookingAuditLog
from booking_service.application.services.booking_notifier import BookingNotifier
from booking_service.config.logging import get_logger
from booking_service.domain.entities.job import Job
from booking_service.domain.value_objects.job_status import JobStatus
from booking_service.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)
from booking_service.infrastructure.monitoring.metrics import (
    record_status_change,
    track_duration,
)

logger = get_logger(__name__)


@dataclass
class ExpirySweepResult:
    """Outcome of one expiry sweep."""

    expired: List[UUID] = field(default_factory=list)
    skipped: List[UUID] = field(default_factory=list)


class ExpirePendingBookingsUseCase:
    """Use case for timing out bookings nobody accepted before will_expire_at."""

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        user_repo: UserRepositoryInterface,
        notifier: BookingNotifier,
        clock: ClockInterface,
        transaction_service: TransactionService,
        batch_size: int = 100,
    ):
        self.job_repo = job_repo
        self.user_repo = user_repo
        self.notifier = notifier
        self.clock = clock
        self.transaction_service = transaction_service
        self.batch_size = batch_size

    @track_duration("expire_pending_bookings")
    async def execute(self) -> ExpirySweepResult:
        now = self.clock.now()
        candidates = await self.job_repo.find_expired_pending(now, self.batch_size)
        result = ExpirySweepResult()

        for job in candidates:
            expired = await self.transaction_service.execute_in_transaction(
                lambda job=job: self._expire(job)
            )
            if not expired:
                # Accepted between the query and the update
                result.skipped.append(job.id)
                continue

            result.expired.append(job.id)
            customer = await self.user_repo.get_by_id(job.user_id)
            if customer is not None:
                job.status = JobStatus.TIMEDOUT
                await self.notifier.job_expired(job, customer)

        if candidates:
            logger.info(
                "Expiry sweep finished",
                expired=len(result.expired),
                skipped=len(result.skipped),
            )
        return result

    async def _expire(self, job: Job) -> bool:
        swapped = await self.job_repo.compare_and_set_status(
            job.id, JobStatus.PENDING, JobStatus.TIMEDOUT
        )
        if swapped:
            BookingAuditLog(job_id=job.id).record("status", JobStatus.PENDING, JobStatus.TIMEDOUT)
            record_status_change(JobStatus.PENDING.value, JobStatus.TIMEDOUT.value)
        return swapped

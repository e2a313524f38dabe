"""Accept job use cases."""

from dataclasses import dataclass, field
from typing import List, Optional
from uuid import UUID

from booking_service.application.interfaces.gateways import ClockInterface
from booking_service.application.interfaces.repositories import (
    JobRepositoryInterface,
    TranslatorAssignmentRepositoryInterface,
    UserRepositoryInterface,
)
from booking_service.application.services import texts
from booking_service.application.services.audit_log import BookingAuditLog
from booking_service.application.services.booking_mailer import BookingMailer
from booking_service.application.services.booking_notifier import BookingNotifier
from booking_service.application.services.eligibility_engine import EligibilityEngine
from booking_service.application.use_cases.lookups import load_job, load_user
from booking_service.config.logging import get_logger
from booking_service.domain.entities.job import Job
from booking_service.domain.entities.translator_assignment import TranslatorAssignment
from booking_service.domain.entities.user import User
from booking_service.domain.exceptions.conflict_error import (
    ConflictError,
    JobAlreadyTakenError,
)
from booking_service.domain.value_objects.job_status import JobStatus
from booking_service.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)
from booking_service.infrastructure.monitoring.metrics import (
    record_accept_conflict,
    record_status_change,
    track_duration,
)

logger = get_logger(__name__)


@dataclass
class AcceptJobResult:
    """Result of a translator accepting a booking."""

    job: Job
    message: Optional[str] = None
    potential_jobs: List[Job] = field(default_factory=list)


class AcceptJobUseCase:
    """Use case for a translator taking a pending booking from the job list."""

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        assignment_repo: TranslatorAssignmentRepositoryInterface,
        user_repo: UserRepositoryInterface,
        eligibility_engine: EligibilityEngine,
        mailer: BookingMailer,
        notifier: BookingNotifier,
        clock: ClockInterface,
        transaction_service: TransactionService,
    ):
        self.job_repo = job_repo
        self.assignment_repo = assignment_repo
        self.user_repo = user_repo
        self.eligibility_engine = eligibility_engine
        self.mailer = mailer
        self.notifier = notifier
        self.clock = clock
        self.transaction_service = transaction_service

    @track_duration("accept_job")
    async def execute(self, job_id: UUID, translator_id: UUID) -> AcceptJobResult:
        translator = await load_user(self.user_repo, translator_id)
        if not translator.is_translator:
            raise ConflictError("Only translators can accept bookings")

        job = await self.transaction_service.execute_in_transaction(
            lambda: self._claim(job_id, translator)
        )
        record_status_change(JobStatus.PENDING.value, JobStatus.ASSIGNED.value)
        logger.info("Job accepted", job_id=str(job.id), translator_id=str(translator.id))

        customer = await self.user_repo.get_by_id(job.user_id)
        if customer is not None:
            await self.mailer.job_accepted(job, customer, translator)

        return await self._after_accept(job, translator, customer)

    async def _after_accept(
        self, job: Job, translator: User, customer: Optional[User]
    ) -> AcceptJobResult:
        potential_jobs = await self.eligibility_engine.find_potential_jobs(translator)
        return AcceptJobResult(job=job, potential_jobs=potential_jobs)

    async def _claim(self, job_id: UUID, translator: User) -> Job:
        job = await load_job(self.job_repo, job_id)

        if await self.assignment_repo.translator_booked_at(translator.id, job.due, job.id):
            record_accept_conflict("already_booked")
            raise ConflictError(texts.ALREADY_BOOKED_MESSAGE)

        swapped = await self.job_repo.compare_and_set_status(
            job.id, JobStatus.PENDING, JobStatus.ASSIGNED
        )
        if not swapped:
            record_accept_conflict("not_pending")
            raise JobAlreadyTakenError(job.id, await self._taken_message(job))

        await self.assignment_repo.create(
            TranslatorAssignment(
                job_id=job.id, user_id=translator.id, created_at=self.clock.now()
            )
        )
        job.status = JobStatus.ASSIGNED

        BookingAuditLog(job_id=job.id, actor_id=translator.id).record(
            "status", JobStatus.PENDING, JobStatus.ASSIGNED
        )
        return job

    async def _taken_message(self, job: Job) -> str:
        return texts.NOT_AVAILABLE_MESSAGE


class AcceptJobByIdUseCase(AcceptJobUseCase):
    """Use case for a translator accepting a booking from a notification link."""

    async def _after_accept(
        self, job: Job, translator: User, customer: Optional[User]
    ) -> AcceptJobResult:
        if customer is not None:
            await self.notifier.job_accepted(job, customer)

        language = await self.notifier.language_name(job.from_language_id)
        return AcceptJobResult(
            job=job,
            message=texts.accepted_message(language, job.duration, job.due),
        )

    async def _taken_message(self, job: Job) -> str:
        language = await self.notifier.language_name(job.from_language_id)
        return texts.already_accepted_message(language, job.duration, job.due)

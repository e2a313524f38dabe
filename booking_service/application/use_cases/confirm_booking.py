"""Confirm booking use case."""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from booking_service.application.interfaces.repositories import (
    JobRepositoryInterface,
    UserRepositoryInterface,
)
from booking_service.application.services.booking_mailer import BookingMailer
from booking_service.application.services.notification_data import job_to_data
from booking_service.application.services.transactional_outbox import (
    OutboxEventType,
    TransactionalOutbox,
)
from booking_service.application.use_cases.lookups import load_job, load_user
from booking_service.config.logging import get_logger
from booking_service.domain.entities.job import Job
from booking_service.domain.entities.user import User
from booking_service.domain.events.job_created import JobCreated
from booking_service.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)

logger = get_logger(__name__)


@dataclass
class ConfirmBookingRequest:
    """Contact details completing a freshly created booking."""

    job_id: UUID
    user_email: Optional[str] = None
    reference: Optional[str] = None
    address: Optional[str] = None
    instructions: Optional[str] = None
    town: Optional[str] = None


class ConfirmBookingUseCase:
    """
    Use case for finishing a booking: store contact details, send the
    customer a receipt and queue the translator broadcast.

    The broadcast itself runs from the outbox worker once the job-created
    event is committed.
    """

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        user_repo: UserRepositoryInterface,
        mailer: BookingMailer,
        outbox: TransactionalOutbox,
        transaction_service: TransactionService,
    ):
        self.job_repo = job_repo
        self.user_repo = user_repo
        self.mailer = mailer
        self.outbox = outbox
        self.transaction_service = transaction_service

    async def execute(self, request: ConfirmBookingRequest) -> Job:
        job, customer = await self.transaction_service.execute_in_transaction(
            lambda: self._confirm(request)
        )
        await self.mailer.job_created(job, customer)
        logger.info("Booking confirmed", job_id=str(job.id), customer_id=str(customer.id))
        return job

    async def _confirm(self, request: ConfirmBookingRequest):
        job = await load_job(self.job_repo, request.job_id)
        customer = await load_user(self.user_repo, job.user_id)

        job.user_email = request.user_email or job.user_email
        job.reference = request.reference if request.reference is not None else job.reference
        self._apply_location(job, customer, request)
        job = await self.job_repo.update(job)

        event = JobCreated(
            job_id=job.id, customer_id=customer.id, immediate=job.immediate, due=job.due
        )
        await self.outbox.create_event(
            OutboxEventType.JOB_CREATED,
            str(job.id),
            {
                **event.to_dict(),
                "job": job_to_data(job, customer.city, customer.customer_type),
            },
        )
        return job, customer

    @staticmethod
    def _apply_location(job: Job, customer: User, request: ConfirmBookingRequest) -> None:
        """Use the request's location fields, falling back to the customer profile."""
        job.address = request.address or customer.address
        job.instructions = request.instructions or customer.instructions
        job.town = request.town or customer.city

"""Resend booking notifications use cases."""

from uuid import UUID

from booking_service.application.interfaces.repositories import JobRepositoryInterface
from booking_service.application.services.booking_notifier import BookingNotifier
from booking_service.application.services.notification_dispatcher import DispatchReport
from booking_service.application.use_cases.lookups import load_job
from booking_service.config.logging import get_logger

logger = get_logger(__name__)


class ResendPushUseCase:
    """Use case for pushing a booking to eligible translators again."""

    def __init__(self, job_repo: JobRepositoryInterface, notifier: BookingNotifier):
        self.job_repo = job_repo
        self.notifier = notifier

    async def execute(self, job_id: UUID) -> DispatchReport:
        job = await load_job(self.job_repo, job_id)
        report = await self.notifier.broadcast_suitable_job(job)
        logger.info(
            "Push notifications resent",
            job_id=str(job.id),
            immediate=report.immediate,
            delayed=report.delayed,
        )
        return report


class ResendSmsUseCase:
    """Use case for texting a booking to eligible translators."""

    def __init__(self, job_repo: JobRepositoryInterface, notifier: BookingNotifier):
        self.job_repo = job_repo
        self.notifier = notifier

    async def execute(self, job_id: UUID) -> int:
        job = await load_job(self.job_repo, job_id)
        attempted = await self.notifier.sms_eligible_translators(job)
        logger.info("SMS notifications resent", job_id=str(job.id), attempted=attempted)
        return attempted

"""
Booking push and SMS notifications.
"""

from typing import Iterable, Optional
from uuid import UUID

from booking_service.application.interfaces.repositories import (
    LanguageRepositoryInterface,
    UserRepositoryInterface,
)
from booking_service.application.services import texts
from booking_service.application.services.eligibility_engine import EligibilityEngine
from booking_service.application.services.notification_data import job_to_data
from booking_service.application.services.notification_dispatcher import (
    DispatchReport,
    NotificationDispatcher,
)
from booking_service.config.logging import get_logger
from booking_service.domain.entities.job import Job
from booking_service.domain.entities.user import User
from booking_service.domain.value_objects.notification_type import NotificationType

logger = get_logger(__name__)


class BookingNotifier:
    """Resolves recipients and texts for booking events and dispatches them."""

    def __init__(
        self,
        dispatcher: NotificationDispatcher,
        eligibility_engine: EligibilityEngine,
        user_repository: UserRepositoryInterface,
        language_repository: LanguageRepositoryInterface,
    ):
        self.dispatcher = dispatcher
        self.eligibility_engine = eligibility_engine
        self.user_repository = user_repository
        self.language_repository = language_repository

    async def language_name(self, language_id: UUID) -> str:
        language = await self.language_repository.get_by_id(language_id)
        return language.name if language else ""

    async def broadcast_suitable_job(
        self, job: Job, exclude_ids: Iterable[UUID] = ()
    ) -> DispatchReport:
        """Offer the booking to every eligible translator."""
        translators = await self.eligibility_engine.find_eligible_translators(
            job, exclude_ids=exclude_ids
        )
        customer = await self.user_repository.get_by_id(job.user_id)
        language = await self.language_name(job.from_language_id)
        message = texts.suitable_job_push(language, job.duration, job.due, job.immediate)
        data = job_to_data(
            job,
            customer_town=customer.city if customer else None,
            customer_type=customer.customer_type if customer else None,
        )
        data["language"] = language
        return await self.dispatcher.dispatch(
            job, translators, NotificationType.SUITABLE_JOB, message, data
        )

    async def sms_eligible_translators(self, job: Job) -> int:
        translators = await self.eligibility_engine.find_eligible_translators(job)
        customer = await self.user_repository.get_by_id(job.user_id)
        town = job.town or (customer.city if customer else None)
        return await self.dispatcher.send_sms(job, translators, town)

    async def job_accepted(self, job: Job, customer: User) -> DispatchReport:
        language = await self.language_name(job.from_language_id)
        return await self.dispatcher.dispatch(
            job,
            [customer],
            NotificationType.JOB_ACCEPTED,
            texts.job_accepted_push(language, job.duration, job.due),
            {"job_id": str(job.id)},
        )

    async def customer_cancelled(self, job: Job, translator: User) -> DispatchReport:
        language = await self.language_name(job.from_language_id)
        return await self.dispatcher.dispatch(
            job,
            [translator],
            NotificationType.JOB_CANCELLED,
            texts.customer_cancelled_push(language, job.duration, job.due),
            {"job_id": str(job.id)},
        )

    async def translator_cancelled(self, job: Job, customer: User) -> DispatchReport:
        language = await self.language_name(job.from_language_id)
        return await self.dispatcher.dispatch(
            job,
            [customer],
            NotificationType.JOB_CANCELLED,
            texts.translator_cancelled_push(language, job.duration, job.due),
            {"job_id": str(job.id)},
        )

    async def job_expired(self, job: Job, customer: User) -> DispatchReport:
        language = await self.language_name(job.from_language_id)
        return await self.dispatcher.dispatch(
            job,
            [customer],
            NotificationType.JOB_EXPIRED,
            texts.job_expired_push(language, job.duration, job.due),
            {"job_id": str(job.id)},
        )

    async def session_start_reminder(
        self, job: Job, user: User, town: Optional[str] = None
    ) -> DispatchReport:
        language = await self.language_name(job.from_language_id)
        message = texts.session_start_remind_push(
            language, job.duration, job.due, job.customer_physical_type, town or job.town
        )
        return await self.dispatcher.dispatch(
            job,
            [user],
            NotificationType.SESSION_START_REMIND,
            message,
            {"job_id": str(job.id)},
        )

"""
Booking emails to customers and translators.
"""

from typing import Any, Dict, Optional

from booking_service.application.interfaces.gateways import MailGatewayInterface
from booking_service.application.services import texts
from booking_service.config.logging import get_logger
from booking_service.domain.entities.job import Job
from booking_service.domain.entities.user import User
from booking_service.domain.exceptions.gateway_error import GatewayError
from booking_service.infrastructure.monitoring.metrics import record_notification

logger = get_logger(__name__)


class BookingMailer:
    """Composes booking emails and hands them to the mail gateway."""

    def __init__(self, mail_gateway: MailGatewayInterface):
        self.mail_gateway = mail_gateway

    async def job_created(self, job: Job, customer: User) -> bool:
        return await self._to_customer(
            job,
            customer,
            texts.job_created_subject(job.id),
            "job-created",
            {"user": customer.name, "job": self._job_data(job)},
        )

    async def job_accepted(self, job: Job, customer: User, translator: Optional[User]) -> bool:
        return await self._to_customer(
            job,
            customer,
            texts.job_accepted_subject(job.id),
            "job-accepted",
            {
                "user": customer.name,
                "job": self._job_data(job),
                "translator": translator.name if translator else None,
            },
        )

    async def translator_assigned(self, job: Job, translator: User) -> bool:
        return await self._send(
            job,
            translator.email,
            translator.name,
            texts.job_accepted_subject(job.id),
            "job-changed-translator-new-translator",
            {"user": translator.name, "job": self._job_data(job)},
        )

    async def session_ended(
        self, job: Job, customer: User, translator: Optional[User], session_time: str
    ) -> None:
        subject = texts.session_ended_subject(job.id)
        data = {"job": self._job_data(job), "session_time": session_time}
        await self._to_customer(
            job,
            customer,
            subject,
            "session-ended",
            {**data, "user": customer.name, "for_text": "faktura"},
        )
        if translator is not None:
            await self._send(
                job,
                translator.email,
                translator.name,
                subject,
                "session-ended",
                {**data, "user": translator.name, "for_text": "lön"},
            )

    async def status_changed_customer(self, job: Job, customer: User) -> bool:
        return await self._to_customer(
            job,
            customer,
            texts.job_cancelled_subject(job.id),
            "status-changed-from-pending-or-assigned-customer",
            {"user": customer.name, "job": self._job_data(job)},
        )

    async def status_changed_translator(self, job: Job, translator: User) -> bool:
        return await self._send(
            job,
            translator.email,
            translator.name,
            texts.job_cancelled_subject(job.id),
            "job-cancel-translator",
            {"user": translator.name, "job": self._job_data(job)},
        )

    async def job_reopened(self, job: Job, customer: User, language: str) -> bool:
        return await self._to_customer(
            job,
            customer,
            texts.job_reopened_subject(language, job.id),
            "job-change-status-to-customer",
            {"user": customer.name, "job": self._job_data(job)},
        )

    async def translator_changed(
        self,
        job: Job,
        customer: User,
        previous: Optional[User],
        new: Optional[User],
    ) -> None:
        subject = texts.translator_changed_subject(job.id)
        data = {"job": self._job_data(job)}
        await self._to_customer(
            job, customer, subject, "job-changed-translator-customer",
            {**data, "user": customer.name},
        )
        if previous is not None:
            await self._send(
                job, previous.email, previous.name, subject,
                "job-changed-translator-old-translator", {**data, "user": previous.name},
            )
        if new is not None:
            await self._send(
                job, new.email, new.name, subject,
                "job-changed-translator-new-translator", {**data, "user": new.name},
            )

    async def due_changed(
        self, job: Job, customer: User, translator: Optional[User], old_due: str
    ) -> None:
        subject = texts.job_changed_subject(job.id)
        data = {"job": self._job_data(job), "old_time": old_due}
        await self._to_customer(
            job, customer, subject, "job-changed-date", {**data, "user": customer.name}
        )
        if translator is not None:
            await self._send(
                job, translator.email, translator.name, subject,
                "job-changed-date", {**data, "user": translator.name},
            )

    async def language_changed(
        self, job: Job, customer: User, translator: Optional[User], old_language: str
    ) -> None:
        subject = texts.job_changed_subject(job.id)
        data = {"job": self._job_data(job), "old_lang": old_language}
        await self._to_customer(
            job, customer, subject, "job-changed-lang", {**data, "user": customer.name}
        )
        if translator is not None:
            await self._send(
                job, translator.email, translator.name, subject,
                "job-changed-lang", {**data, "user": translator.name},
            )

    async def _to_customer(
        self, job: Job, customer: User, subject: str, template_key: str, data: Dict[str, Any]
    ) -> bool:
        address = job.user_email or customer.email
        return await self._send(job, address, customer.name, subject, template_key, data)

    async def _send(
        self,
        job: Job,
        to_address: str,
        to_name: str,
        subject: str,
        template_key: str,
        data: Dict[str, Any],
    ) -> bool:
        try:
            await self.mail_gateway.send(to_address, to_name, subject, template_key, data)
        except GatewayError as e:
            logger.error(
                "Booking email failed",
                job_id=str(job.id),
                template=template_key,
                error=str(e),
            )
            record_notification("email", template_key, "failed")
            return False

        logger.info("Booking email sent", job_id=str(job.id), template=template_key)
        record_notification("email", template_key, "sent")
        return True

    @staticmethod
    def _job_data(job: Job) -> Dict[str, Any]:
        return {
            "id": str(job.id),
            "due": texts.format_due(job.due),
            "duration": job.duration,
            "status": job.status.value,
            "address": job.address,
            "instructions": job.instructions,
            "town": job.town,
        }

"""
Notification dispatcher for push and SMS fan-out.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from booking_service.application.interfaces.gateways import (
    ClockInterface,
    PushGatewayInterface,
    SmsGatewayInterface,
)
from booking_service.application.services import texts
from booking_service.config.logging import get_logger
from booking_service.domain.entities.job import Job
from booking_service.domain.entities.user import User
from booking_service.domain.exceptions.gateway_error import GatewayError
from booking_service.domain.value_objects.notification_type import NotificationType
from booking_service.infrastructure.monitoring.metrics import record_notification

logger = get_logger(__name__)


@dataclass
class DispatchReport:
    """How a fan-out was split and delivered."""

    intent: NotificationType
    immediate: int = 0
    delayed: int = 0
    suppressed: int = 0
    failed_batches: int = 0

    @property
    def attempted(self) -> int:
        return self.immediate + self.delayed


def recipient_filter(recipients: Sequence[User]) -> List[Dict[str, str]]:
    """OR-chain of exact email matches understood by the push provider."""
    tags: List[Dict[str, str]] = []
    for index, user in enumerate(recipients):
        if index:
            tags.append({"operator": "OR"})
        tags.append({"key": "email", "relation": "=", "value": user.email.lower()})
    return tags


class NotificationDispatcher:
    """Decides who gets a notification, when, and delivers it."""

    def __init__(
        self,
        push_gateway: PushGatewayInterface,
        sms_gateway: SmsGatewayInterface,
        clock: ClockInterface,
        title: str,
        sms_from_number: str,
    ):
        self.push_gateway = push_gateway
        self.sms_gateway = sms_gateway
        self.clock = clock
        self.title = title
        self.sms_from_number = sms_from_number

    def filter_recipients(
        self, job: Job, recipients: Sequence[User], intent: NotificationType
    ) -> List[User]:
        """Drop recipients who opted out of this kind of notification."""
        emergency = intent == NotificationType.SUITABLE_JOB and job.immediate
        return [
            user
            for user in recipients
            if not user.not_get_notification
            and not (emergency and user.not_get_emergency)
        ]

    def partition(self, recipients: Sequence[User]) -> Tuple[List[User], List[User]]:
        """Split into (immediate, delayed) according to night-time preferences."""
        night = self.clock.is_night_time()
        immediate = [u for u in recipients if not (night and u.not_get_nighttime)]
        delayed = [u for u in recipients if night and u.not_get_nighttime]
        return immediate, delayed

    def build_payload(
        self,
        job: Job,
        intent: NotificationType,
        message: str,
        data: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "data": {**(data or {}), "notification_type": intent.value},
            "title": {"en": self.title},
            "contents": {"en": message},
            "ios_badgeType": "Increase",
            "ios_badgeCount": 1,
        }
        if intent == NotificationType.SUITABLE_JOB:
            sound = "emergency_booking" if job.immediate else "normal_booking"
            payload["android_sound"] = sound
            payload["ios_sound"] = f"{sound}.mp3"
        else:
            payload["android_sound"] = "default"
            payload["ios_sound"] = "default"
        return payload

    async def dispatch(
        self,
        job: Job,
        recipients: Sequence[User],
        intent: NotificationType,
        message: str,
        data: Optional[Dict[str, Any]] = None,
    ) -> DispatchReport:
        """Fan a push out to recipients; delivery failures are logged, never raised."""
        allowed = self.filter_recipients(job, recipients, intent)
        immediate, delayed = self.partition(allowed)
        report = DispatchReport(
            intent=intent,
            immediate=len(immediate),
            delayed=len(delayed),
            suppressed=len(recipients) - len(allowed),
        )
        payload = self.build_payload(job, intent, message, data)

        buckets = [(immediate, None)]
        if delayed:
            buckets.append((delayed, self.clock.next_business_time()))

        for users, send_after in buckets:
            if not users:
                continue
            if not await self._send_push(job, users, intent, payload, send_after):
                report.failed_batches += 1

        logger.info(
            "Push fan-out finished",
            job_id=str(job.id),
            intent=intent.value,
            immediate=report.immediate,
            delayed=report.delayed,
            suppressed=report.suppressed,
            failed_batches=report.failed_batches,
        )
        return report

    async def _send_push(self, job, users, intent, payload, send_after) -> bool:
        tags = recipient_filter(users)
        logger.info(
            "Sending push notification",
            job_id=str(job.id),
            intent=intent.value,
            recipients=len(users),
            send_after=send_after.isoformat() if send_after else None,
        )
        try:
            result = await self.push_gateway.send(tags, payload, send_after)
        except GatewayError as e:
            logger.error(
                "Push notification failed",
                job_id=str(job.id),
                intent=intent.value,
                error=str(e),
            )
            record_notification("push", intent.value, "failed", len(users))
            return False

        logger.info(
            "Push notification response",
            job_id=str(job.id),
            intent=intent.value,
            success=result.success,
            notification_id=result.notification_id,
            error_message=result.error_message,
        )
        record_notification(
            "push", intent.value, "sent" if result.success else "failed", len(users)
        )
        return result.success

    def sms_text(self, job: Job, customer_town: Optional[str]) -> str:
        if job.is_physical:
            return texts.physical_job_sms(job.due, customer_town or "", job.duration, job.id)
        return texts.phone_job_sms(job.due, job.duration, job.id)

    async def send_sms(
        self, job: Job, translators: Sequence[User], customer_town: Optional[str] = None
    ) -> int:
        """Text every translator with a mobile number; returns the number attempted."""
        message = self.sms_text(job, customer_town or job.town)
        attempted = 0
        for translator in translators:
            if not translator.mobile:
                continue
            attempted += 1
            try:
                result = await self.sms_gateway.send(
                    self.sms_from_number, translator.mobile, message
                )
                logger.info(
                    "SMS sent",
                    job_id=str(job.id),
                    translator_id=str(translator.id),
                    status=result.status,
                )
                record_notification("sms", "suitable_job", "sent")
            except GatewayError as e:
                logger.error(
                    "SMS failed",
                    job_id=str(job.id),
                    translator_id=str(translator.id),
                    error=str(e),
                )
                record_notification("sms", "suitable_job", "failed")
        return attempted

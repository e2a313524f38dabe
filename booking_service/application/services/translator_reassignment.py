"""
Translator reassignment for booking updates.
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from booking_service.application.interfaces.gateways import ClockInterface
from booking_service.application.interfaces.repositories import (
    TranslatorAssignmentRepositoryInterface,
    UserRepositoryInterface,
)
from booking_service.application.services import texts
from booking_service.application.services.audit_log import BookingAuditLog
from booking_service.config.logging import get_logger
from booking_service.domain.entities.job import Job
from booking_service.domain.entities.translator_assignment import TranslatorAssignment
from booking_service.domain.exceptions.validation_error import ValidationError

logger = get_logger(__name__)


@dataclass
class ReassignmentResult:
    """What changed about the booking's translator."""

    translator_changed: bool
    previous_translator_id: Optional[UUID] = None
    new_translator_id: Optional[UUID] = None


class TranslatorReassignment:
    """Moves the active assignment of a booking to another translator."""

    def __init__(
        self,
        assignment_repository: TranslatorAssignmentRepositoryInterface,
        user_repository: UserRepositoryInterface,
        clock: ClockInterface,
    ):
        self.assignment_repository = assignment_repository
        self.user_repository = user_repository
        self.clock = clock

    async def resolve_requested(
        self, translator_id: Optional[UUID], translator_email: Optional[str]
    ) -> Optional[UUID]:
        """An email, when given, takes precedence over an id."""
        if translator_email and translator_email.strip():
            user = await self.user_repository.get_by_email(translator_email.strip())
            if user is None:
                raise ValidationError.for_field(
                    "translator_email", texts.UNKNOWN_TRANSLATOR_MESSAGE
                )
            return user.id
        return translator_id

    async def apply(
        self,
        job: Job,
        requested_id: Optional[UUID],
        audit: BookingAuditLog,
    ) -> ReassignmentResult:
        current = await self.assignment_repository.get_active_for_job(job.id)

        if requested_id is None:
            return ReassignmentResult(
                translator_changed=False,
                previous_translator_id=current.user_id if current else None,
            )

        if current is not None and current.user_id == requested_id:
            return ReassignmentResult(
                translator_changed=False, previous_translator_id=current.user_id
            )

        now = self.clock.now()
        previous_id = None
        if current is not None:
            previous_id = current.user_id
            current.cancel(now)
            await self.assignment_repository.update(current)

        await self.assignment_repository.create(
            TranslatorAssignment(job_id=job.id, user_id=requested_id, created_at=now)
        )
        audit.record("translator", previous_id, requested_id)

        logger.info(
            "Translator reassigned",
            job_id=str(job.id),
            previous_translator_id=str(previous_id) if previous_id else None,
            new_translator_id=str(requested_id),
        )
        return ReassignmentResult(
            translator_changed=True,
            previous_translator_id=previous_id,
            new_translator_id=requested_id,
        )

"""Update booking use case."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional
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
from booking_service.application.services.booking_rules import will_expire_at
from booking_service.application.services.job_status_machine import (
    SideEffect,
    TransitionContext,
    TransitionOutcome,
    evaluate_transition,
)
from booking_service.application.services.translator_reassignment import (
    ReassignmentResult,
    TranslatorReassignment,
)
from booking_service.application.use_cases.lookups import find_user, load_job
from booking_service.config.logging import get_logger
from booking_service.domain.entities.job import Job
from booking_service.domain.exceptions.conflict_error import InvalidTransitionError
from booking_service.domain.exceptions.validation_error import ValidationError
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
class UpdateBookingRequest:
    """Request for updating a booking from the admin screen."""

    job_id: UUID
    caller_id: UUID
    status: Optional[JobStatus] = None
    due: Optional[datetime] = None
    from_language_id: Optional[UUID] = None
    translator_id: Optional[UUID] = None
    translator_email: Optional[str] = None
    admin_comments: Optional[str] = None
    reference: Optional[str] = None
    session_time: Optional[str] = None


@dataclass
class UpdateBookingResult:
    """Result of a booking update."""

    job: Job
    status_changed: bool
    changes: List[Dict[str, Any]] = field(default_factory=list)
    transition_note: Optional[str] = None


@dataclass
class _UpdateState:
    job: Job
    reassignment: ReassignmentResult
    outcome: Optional[TransitionOutcome]
    old_due: Optional[datetime]
    old_language_id: Optional[UUID]
    translator_id: Optional[UUID]


class UpdateBookingUseCase:
    """Use case for editing a booking: translator, time, language and status."""

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        assignment_repo: TranslatorAssignmentRepositoryInterface,
        user_repo: UserRepositoryInterface,
        reassignment: TranslatorReassignment,
        mailer: BookingMailer,
        notifier: BookingNotifier,
        clock: ClockInterface,
        transaction_service: TransactionService,
    ):
        self.job_repo = job_repo
        self.assignment_repo = assignment_repo
        self.user_repo = user_repo
        self.reassignment = reassignment
        self.mailer = mailer
        self.notifier = notifier
        self.clock = clock
        self.transaction_service = transaction_service

    @track_duration("update_booking")
    async def execute(self, request: UpdateBookingRequest) -> UpdateBookingResult:
        audit = BookingAuditLog(job_id=request.job_id, actor_id=request.caller_id)

        state = await self.transaction_service.execute_in_transaction(
            lambda: self._apply(request, audit)
        )

        await self._notify(state)

        outcome = state.outcome
        return UpdateBookingResult(
            job=state.job,
            status_changed=bool(outcome and outcome.changed),
            changes=audit.changes(),
            transition_note=outcome.reason if outcome else None,
        )

    async def _apply(self, request: UpdateBookingRequest, audit: BookingAuditLog) -> _UpdateState:
        job = await load_job(self.job_repo, request.job_id)
        now = self.clock.now()

        requested_translator = await self.reassignment.resolve_requested(
            request.translator_id, request.translator_email
        )
        reassignment = await self.reassignment.apply(job, requested_translator, audit)
        translator_id = reassignment.new_translator_id or reassignment.previous_translator_id

        old_due = None
        if request.due is not None and request.due != job.due:
            old_due = job.due
            audit.record("due", old_due, request.due)
            job.due = request.due

        old_language_id = None
        if request.from_language_id and request.from_language_id != job.from_language_id:
            old_language_id = job.from_language_id
            audit.record("from_language_id", old_language_id, request.from_language_id)
            job.from_language_id = request.from_language_id

        outcome = None
        if request.status is not None and JobStatus(request.status) != job.status:
            outcome = evaluate_transition(
                job.status,
                request.status,
                TransitionContext(
                    admin_comments=request.admin_comments,
                    session_time=request.session_time,
                    translator_changed=reassignment.translator_changed,
                ),
            )
            if outcome.rejected:
                logger.info("Status change rejected", job_id=str(job.id), reason=outcome.reason)
                raise InvalidTransitionError(job.status.value, JobStatus(request.status).value)

            if outcome.changed:
                previous_status = job.status
                await self._apply_transition(job, outcome, request, now)
                audit.record("status", previous_status, outcome.new_status)
                record_status_change(previous_status.value, outcome.new_status.value)
            else:
                logger.info(
                    "Status change skipped",
                    job_id=str(job.id),
                    current_status=job.status.value,
                    requested_status=JobStatus(request.status).value,
                    reason=outcome.reason,
                )

        if request.admin_comments is not None and request.admin_comments != job.admin_comments:
            audit.record("admin_comments", job.admin_comments, request.admin_comments)
            job.admin_comments = request.admin_comments
        if request.reference is not None and request.reference != job.reference:
            audit.record("reference", job.reference, request.reference)
            job.reference = request.reference

        job = await self.job_repo.update(job)

        logger.info(
            "Booking updated",
            job_id=str(job.id),
            status=job.status.value,
            changes=len(audit.entries),
        )
        return _UpdateState(
            job=job,
            reassignment=reassignment,
            outcome=outcome,
            old_due=old_due,
            old_language_id=old_language_id,
            translator_id=translator_id,
        )

    async def _apply_transition(
        self,
        job: Job,
        outcome: TransitionOutcome,
        request: UpdateBookingRequest,
        now: datetime,
    ) -> None:
        effects = outcome.side_effects
        job.status = outcome.new_status

        if SideEffect.RESET_FOR_REPOST in effects:
            job.reset_for_repost(now, will_expire_at(job.due, now))

        if SideEffect.STORE_SESSION_TIME in effects:
            try:
                session = SessionTime.parse(request.session_time)
            except ValueError as e:
                raise ValidationError.for_field("session_time", str(e)) from e
            job.session_time = str(session)
            job.end_at = now

        if SideEffect.COMPLETE_ASSIGNMENT in effects:
            active = await self.assignment_repo.get_active_for_job(job.id)
            if active is not None:
                active.complete(completed_by=request.caller_id, completed_at=now)
                await self.assignment_repo.update(active)

    async def _notify(self, state: _UpdateState) -> None:
        job = state.job
        customer = await self.user_repo.get_by_id(job.user_id)
        if customer is None:
            logger.warning("Booking has no customer, skipping notifications", job_id=str(job.id))
            return
        translator = await find_user(self.user_repo, state.translator_id)

        if job.is_due_in_future(self.clock.now()):
            await self._notify_changes(state, customer, translator)

        if state.outcome and state.outcome.changed:
            await self._run_side_effects(job, state.outcome.side_effects, customer, translator)

    async def _notify_changes(self, state: _UpdateState, customer, translator) -> None:
        job = state.job
        if state.reassignment.translator_changed:
            previous = await find_user(self.user_repo, state.reassignment.previous_translator_id)
            await self.mailer.translator_changed(job, customer, previous, translator)
        if state.old_due is not None:
            await self.mailer.due_changed(job, customer, translator, texts.format_due(state.old_due))
        if state.old_language_id is not None:
            old_language = await self.notifier.language_name(state.old_language_id)
            await self.mailer.language_changed(job, customer, translator, old_language)

    async def _run_side_effects(self, job: Job, effects, customer, translator) -> None:
        if SideEffect.EMAIL_CUSTOMER_REOPENED in effects:
            language = await self.notifier.language_name(job.from_language_id)
            await self.mailer.job_reopened(job, customer, language)
        if SideEffect.BROADCAST_TO_TRANSLATORS in effects:
            await self.notifier.broadcast_suitable_job(job)
        if SideEffect.EMAIL_CUSTOMER_ACCEPTED in effects:
            await self.mailer.job_accepted(job, customer, translator)
        if translator is not None and SideEffect.EMAIL_TRANSLATOR_ASSIGNED in effects:
            await self.mailer.translator_assigned(job, translator)
        if SideEffect.SESSION_START_REMINDERS in effects:
            await self.notifier.session_start_reminder(job, customer)
            if translator is not None:
                await self.notifier.session_start_reminder(job, translator)
        if SideEffect.EMAIL_CUSTOMER_SESSION_ENDED in effects:
            session = SessionTime.parse(job.session_time)
            ended_for = translator if SideEffect.EMAIL_TRANSLATOR_SESSION_ENDED in effects else None
            await self.mailer.session_ended(job, customer, ended_for, session.to_display())
        if SideEffect.EMAIL_CUSTOMER_STATUS_CHANGED in effects:
            await self.mailer.status_changed_customer(job, customer)
        if translator is not None and SideEffect.EMAIL_TRANSLATOR_STATUS_CHANGED in effects:
            await self.mailer.status_changed_translator(job, translator)

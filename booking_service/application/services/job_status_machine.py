"""
Job status state machine.

Transitions are evaluated as a pure function over a table keyed by the
current status. The caller applies the returned side effects.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

from booking_service.domain.value_objects.job_status import JobStatus


class SideEffect(str, Enum):
    """Work the caller performs after a successful transition."""

    RESET_FOR_REPOST = "reset_for_repost"
    BROADCAST_TO_TRANSLATORS = "broadcast_to_translators"
    STORE_SESSION_TIME = "store_session_time"
    COMPLETE_ASSIGNMENT = "complete_assignment"
    EMAIL_CUSTOMER_REOPENED = "email_customer_reopened"
    EMAIL_CUSTOMER_ACCEPTED = "email_customer_accepted"
    EMAIL_TRANSLATOR_ASSIGNED = "email_translator_assigned"
    EMAIL_CUSTOMER_SESSION_ENDED = "email_customer_session_ended"
    EMAIL_TRANSLATOR_SESSION_ENDED = "email_translator_session_ended"
    EMAIL_CUSTOMER_STATUS_CHANGED = "email_customer_status_changed"
    EMAIL_TRANSLATOR_STATUS_CHANGED = "email_translator_status_changed"
    SESSION_START_REMINDERS = "session_start_reminders"


@dataclass(frozen=True)
class TransitionContext:
    """Inputs the guards look at."""

    admin_comments: Optional[str] = None
    session_time: Optional[str] = None
    translator_changed: bool = False

    @property
    def has_comment(self) -> bool:
        return bool(self.admin_comments and self.admin_comments.strip())

    @property
    def has_session_time(self) -> bool:
        return bool(self.session_time and self.session_time.strip())


@dataclass(frozen=True)
class TransitionOutcome:
    """Result of evaluating a requested status change."""

    changed: bool
    new_status: JobStatus
    side_effects: Tuple[SideEffect, ...] = ()
    rejected: bool = False
    reason: Optional[str] = None


Guard = Callable[[TransitionContext], bool]


@dataclass(frozen=True)
class _Rule:
    guard: Optional[Guard]
    guard_reason: Optional[str]
    side_effects: Tuple[SideEffect, ...]


def _requires_comment(context: TransitionContext) -> bool:
    return context.has_comment


def _requires_comment_and_session_time(context: TransitionContext) -> bool:
    return context.has_comment and context.has_session_time


def _requires_translator_change(context: TransitionContext) -> bool:
    return context.translator_changed


_COMMENT = (_requires_comment, "admin_comments required")

_ASSIGNED_WITHDRAW_EFFECTS = (
    SideEffect.EMAIL_CUSTOMER_STATUS_CHANGED,
    SideEffect.EMAIL_TRANSLATOR_STATUS_CHANGED,
)

_TRANSITIONS: Dict[JobStatus, Dict[JobStatus, _Rule]] = {
    JobStatus.TIMEDOUT: {
        JobStatus.PENDING: _Rule(
            None,
            None,
            (
                SideEffect.RESET_FOR_REPOST,
                SideEffect.EMAIL_CUSTOMER_REOPENED,
                SideEffect.BROADCAST_TO_TRANSLATORS,
            ),
        ),
        JobStatus.ASSIGNED: _Rule(
            _requires_translator_change,
            "translator not changed",
            (SideEffect.EMAIL_CUSTOMER_ACCEPTED,),
        ),
    },
    JobStatus.COMPLETED: {
        JobStatus.TIMEDOUT: _Rule(*_COMMENT, ()),
    },
    JobStatus.STARTED: {
        JobStatus.COMPLETED: _Rule(
            _requires_comment_and_session_time,
            "admin_comments and session_time required",
            (
                SideEffect.STORE_SESSION_TIME,
                SideEffect.COMPLETE_ASSIGNMENT,
                SideEffect.EMAIL_CUSTOMER_SESSION_ENDED,
                SideEffect.EMAIL_TRANSLATOR_SESSION_ENDED,
            ),
        ),
    },
    JobStatus.PENDING: {
        JobStatus.ASSIGNED: _Rule(
            _requires_translator_change,
            "translator not changed",
            (
                SideEffect.EMAIL_CUSTOMER_ACCEPTED,
                SideEffect.EMAIL_TRANSLATOR_ASSIGNED,
                SideEffect.SESSION_START_REMINDERS,
            ),
        ),
        JobStatus.TIMEDOUT: _Rule(
            *_COMMENT, (SideEffect.EMAIL_CUSTOMER_STATUS_CHANGED,)
        ),
    },
    JobStatus.WITHDRAW_AFTER_24: {
        JobStatus.TIMEDOUT: _Rule(*_COMMENT, ()),
    },
    JobStatus.ASSIGNED: {
        JobStatus.WITHDRAW_BEFORE_24: _Rule(None, None, _ASSIGNED_WITHDRAW_EFFECTS),
        JobStatus.WITHDRAW_AFTER_24: _Rule(None, None, _ASSIGNED_WITHDRAW_EFFECTS),
        JobStatus.TIMEDOUT: _Rule(
            *_COMMENT, (SideEffect.EMAIL_CUSTOMER_STATUS_CHANGED,)
        ),
    },
    JobStatus.WITHDRAW_BEFORE_24: {},
    JobStatus.NOT_CARRIED_OUT_CUSTOMER: {},
}

_missing = set(JobStatus) - set(_TRANSITIONS)
if _missing:
    raise RuntimeError(
        f"No transition handler for statuses: {sorted(s.value for s in _missing)}"
    )


def allowed_targets(current: JobStatus) -> Tuple[JobStatus, ...]:
    """Statuses an admin may move a booking to from current."""
    return tuple(_TRANSITIONS[JobStatus(current)])


def evaluate_transition(
    current: JobStatus, requested: JobStatus, context: TransitionContext
) -> TransitionOutcome:
    """Decide whether current -> requested happens and what follows from it."""
    current = JobStatus(current)
    requested = JobStatus(requested)

    if requested == current:
        return TransitionOutcome(changed=False, new_status=current, reason="unchanged")

    rule = _TRANSITIONS[current].get(requested)
    if rule is None:
        return TransitionOutcome(
            changed=False,
            new_status=current,
            rejected=True,
            reason=(
                f"{current.value} -> {requested.value} not allowed, "
                f"allowed: {', '.join(s.value for s in allowed_targets(current)) or 'none'}"
            ),
        )

    if rule.guard is not None and not rule.guard(context):
        return TransitionOutcome(
            changed=False, new_status=current, reason=rule.guard_reason
        )

    return TransitionOutcome(
        changed=True, new_status=requested, side_effects=rule.side_effects
    )

"""
Application services package.
"""

from .audit_log import AuditEntry, BookingAuditLog
from .booking_mailer import BookingMailer
from .booking_notifier import BookingNotifier
from .eligibility_engine import EligibilityEngine, check_pair
from .job_status_machine import (
    SideEffect,
    TransitionContext,
    TransitionOutcome,
    evaluate_transition,
)
from .notification_dispatcher import DispatchReport, NotificationDispatcher
from .transactional_outbox import OutboxEventType, TransactionalOutbox
from .translator_reassignment import ReassignmentResult, TranslatorReassignment

__all__ = [
    "AuditEntry",
    "BookingAuditLog",
    "BookingMailer",
    "BookingNotifier",
    "EligibilityEngine",
    "check_pair",
    "SideEffect",
    "TransitionContext",
    "TransitionOutcome",
    "evaluate_transition",
    "DispatchReport",
    "NotificationDispatcher",
    "OutboxEventType",
    "TransactionalOutbox",
    "ReassignmentResult",
    "TranslatorReassignment",
]

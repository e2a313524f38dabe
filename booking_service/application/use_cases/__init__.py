"""
Use cases package.

This package contains the booking operations that orchestrate the
application services and repositories.
"""

from .accept_job import AcceptJobByIdUseCase, AcceptJobUseCase
from .cancel_job import CancelJobUseCase
from .confirm_booking import ConfirmBookingRequest, ConfirmBookingUseCase
from .create_booking import CreateBookingRequest, CreateBookingUseCase
from .end_job import CustomerNotCallUseCase, EndJobUseCase
from .expire_pending_bookings import ExpirePendingBookingsUseCase
from .get_potential_jobs import GetPotentialJobsUseCase
from .reopen_job import ReopenJobUseCase
from .resend_notifications import ResendPushUseCase, ResendSmsUseCase
from .update_booking import UpdateBookingRequest, UpdateBookingUseCase
from .update_distance import UpdateDistanceRequest, UpdateDistanceUseCase

__all__ = [
    "AcceptJobByIdUseCase",
    "AcceptJobUseCase",
    "CancelJobUseCase",
    "ConfirmBookingRequest",
    "ConfirmBookingUseCase",
    "CreateBookingRequest",
    "CreateBookingUseCase",
    "CustomerNotCallUseCase",
    "EndJobUseCase",
    "ExpirePendingBookingsUseCase",
    "GetPotentialJobsUseCase",
    "ReopenJobUseCase",
    "ResendPushUseCase",
    "ResendSmsUseCase",
    "UpdateBookingRequest",
    "UpdateBookingUseCase",
    "UpdateDistanceRequest",
    "UpdateDistanceUseCase",
]

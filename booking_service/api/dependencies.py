"""
FastAPI dependency injection container.
"""

from functools import lru_cache
from typing import Annotated
from uuid import UUID

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from booking_service.application.services.booking_mailer import BookingMailer
from booking_service.application.services.booking_notifier import BookingNotifier
from booking_service.application.services.eligibility_engine import EligibilityEngine
from booking_service.application.services.notification_dispatcher import (
    NotificationDispatcher,
)
from booking_service.application.services.transactional_outbox import TransactionalOutbox
from booking_service.application.services.translator_reassignment import (
    TranslatorReassignment,
)
from booking_service.application.use_cases import (
    AcceptJobByIdUseCase,
    AcceptJobUseCase,
    CancelJobUseCase,
    ConfirmBookingUseCase,
    CreateBookingUseCase,
    CustomerNotCallUseCase,
    EndJobUseCase,
    GetPotentialJobsUseCase,
    ReopenJobUseCase,
    ResendPushUseCase,
    ResendSmsUseCase,
    UpdateBookingUseCase,
    UpdateDistanceUseCase,
)
from booking_service.config.database import get_db_session
from booking_service.config.settings import settings
from booking_service.infrastructure.database.repositories import (
    DistanceRepository,
    JobRepository,
    LanguageRepository,
    TransactionService,
    TranslatorAssignmentRepository,
    UserRepository,
)
from booking_service.infrastructure.gateways import (
    BusinessClock,
    HttpMailGateway,
    OneSignalPushGateway,
    TwilioSmsGateway,
)

SessionDep = Annotated[AsyncSession, Depends(get_db_session)]


def get_current_user_id(x_user_id: Annotated[UUID, Header()]) -> UUID:
    """Caller identity, set by the authenticating gateway in front of the service."""
    return x_user_id


CallerIdDep = Annotated[UUID, Depends(get_current_user_id)]


# Gateways
@lru_cache
def get_clock() -> BusinessClock:
    return BusinessClock()


@lru_cache
def get_push_gateway() -> OneSignalPushGateway:
    return OneSignalPushGateway()


@lru_cache
def get_sms_gateway() -> TwilioSmsGateway:
    return TwilioSmsGateway()


@lru_cache
def get_mail_gateway() -> HttpMailGateway:
    return HttpMailGateway()


# Database Dependencies
async def get_job_repository(db: SessionDep) -> JobRepository:
    return JobRepository(db)


async def get_assignment_repository(db: SessionDep) -> TranslatorAssignmentRepository:
    return TranslatorAssignmentRepository(db)


async def get_user_repository(db: SessionDep) -> UserRepository:
    return UserRepository(db)


async def get_language_repository(db: SessionDep) -> LanguageRepository:
    return LanguageRepository(db)


async def get_distance_repository(db: SessionDep) -> DistanceRepository:
    return DistanceRepository(db)


async def get_transaction_service(db: SessionDep) -> TransactionService:
    return TransactionService(db)


async def get_transactional_outbox(db: SessionDep) -> TransactionalOutbox:
    return TransactionalOutbox(db)


JobRepositoryDep = Annotated[JobRepository, Depends(get_job_repository)]
AssignmentRepositoryDep = Annotated[
    TranslatorAssignmentRepository, Depends(get_assignment_repository)
]
UserRepositoryDep = Annotated[UserRepository, Depends(get_user_repository)]
LanguageRepositoryDep = Annotated[LanguageRepository, Depends(get_language_repository)]
DistanceRepositoryDep = Annotated[DistanceRepository, Depends(get_distance_repository)]
TransactionServiceDep = Annotated[TransactionService, Depends(get_transaction_service)]
TransactionalOutboxDep = Annotated[TransactionalOutbox, Depends(get_transactional_outbox)]
ClockDep = Annotated[BusinessClock, Depends(get_clock)]


# Service Dependencies
async def get_eligibility_engine(
    user_repo: UserRepositoryDep, job_repo: JobRepositoryDep
) -> EligibilityEngine:
    return EligibilityEngine(user_repo, job_repo)


EligibilityEngineDep = Annotated[EligibilityEngine, Depends(get_eligibility_engine)]


async def get_booking_mailer() -> BookingMailer:
    return BookingMailer(get_mail_gateway())


BookingMailerDep = Annotated[BookingMailer, Depends(get_booking_mailer)]


async def get_booking_notifier(
    eligibility_engine: EligibilityEngineDep,
    user_repo: UserRepositoryDep,
    language_repo: LanguageRepositoryDep,
    clock: ClockDep,
) -> BookingNotifier:
    dispatcher = NotificationDispatcher(
        get_push_gateway(),
        get_sms_gateway(),
        clock,
        title=settings.PUSH_TITLE,
        sms_from_number=settings.SMS_FROM_NUMBER,
    )
    return BookingNotifier(dispatcher, eligibility_engine, user_repo, language_repo)


BookingNotifierDep = Annotated[BookingNotifier, Depends(get_booking_notifier)]


# Use Case Dependencies
async def get_create_booking_use_case(
    job_repo: JobRepositoryDep,
    user_repo: UserRepositoryDep,
    clock: ClockDep,
    transaction_service: TransactionServiceDep,
) -> CreateBookingUseCase:
    return CreateBookingUseCase(job_repo, user_repo, clock, transaction_service)


async def get_confirm_booking_use_case(
    job_repo: JobRepositoryDep,
    user_repo: UserRepositoryDep,
    mailer: BookingMailerDep,
    outbox: TransactionalOutboxDep,
    transaction_service: TransactionServiceDep,
) -> ConfirmBookingUseCase:
    return ConfirmBookingUseCase(job_repo, user_repo, mailer, outbox, transaction_service)


async def get_update_booking_use_case(
    job_repo: JobRepositoryDep,
    assignment_repo: AssignmentRepositoryDep,
    user_repo: UserRepositoryDep,
    mailer: BookingMailerDep,
    notifier: BookingNotifierDep,
    clock: ClockDep,
    transaction_service: TransactionServiceDep,
) -> UpdateBookingUseCase:
    reassignment = TranslatorReassignment(assignment_repo, user_repo, clock)
    return UpdateBookingUseCase(
        job_repo,
        assignment_repo,
        user_repo,
        reassignment,
        mailer,
        notifier,
        clock,
        transaction_service,
    )


async def get_accept_job_use_case(
    job_repo: JobRepositoryDep,
    assignment_repo: AssignmentRepositoryDep,
    user_repo: UserRepositoryDep,
    eligibility_engine: EligibilityEngineDep,
    mailer: BookingMailerDep,
    notifier: BookingNotifierDep,
    clock: ClockDep,
    transaction_service: TransactionServiceDep,
) -> AcceptJobUseCase:
    return AcceptJobUseCase(
        job_repo=job_repo,
        assignment_repo=assignment_repo,
        user_repo=user_repo,
        eligibility_engine=eligibility_engine,
        mailer=mailer,
        notifier=notifier,
        clock=clock,
        transaction_service=transaction_service,
    )


async def get_accept_job_by_id_use_case(
    job_repo: JobRepositoryDep,
    assignment_repo: AssignmentRepositoryDep,
    user_repo: UserRepositoryDep,
    eligibility_engine: EligibilityEngineDep,
    mailer: BookingMailerDep,
    notifier: BookingNotifierDep,
    clock: ClockDep,
    transaction_service: TransactionServiceDep,
) -> AcceptJobByIdUseCase:
    return AcceptJobByIdUseCase(
        job_repo=job_repo,
        assignment_repo=assignment_repo,
        user_repo=user_repo,
        eligibility_engine=eligibility_engine,
        mailer=mailer,
        notifier=notifier,
        clock=clock,
        transaction_service=transaction_service,
    )


async def get_cancel_job_use_case(
    job_repo: JobRepositoryDep,
    assignment_repo: AssignmentRepositoryDep,
    user_repo: UserRepositoryDep,
    notifier: BookingNotifierDep,
    outbox: TransactionalOutboxDep,
    clock: ClockDep,
    transaction_service: TransactionServiceDep,
) -> CancelJobUseCase:
    return CancelJobUseCase(
        job_repo, assignment_repo, user_repo, notifier, outbox, clock, transaction_service
    )


async def get_end_job_use_case(
    job_repo: JobRepositoryDep,
    assignment_repo: AssignmentRepositoryDep,
    user_repo: UserRepositoryDep,
    mailer: BookingMailerDep,
    outbox: TransactionalOutboxDep,
    clock: ClockDep,
    transaction_service: TransactionServiceDep,
) -> EndJobUseCase:
    return EndJobUseCase(
        job_repo, assignment_repo, user_repo, mailer, outbox, clock, transaction_service
    )


async def get_customer_not_call_use_case(
    job_repo: JobRepositoryDep,
    assignment_repo: AssignmentRepositoryDep,
    clock: ClockDep,
    transaction_service: TransactionServiceDep,
) -> CustomerNotCallUseCase:
    return CustomerNotCallUseCase(job_repo, assignment_repo, clock, transaction_service)


async def get_reopen_job_use_case(
    job_repo: JobRepositoryDep,
    assignment_repo: AssignmentRepositoryDep,
    notifier: BookingNotifierDep,
    clock: ClockDep,
    transaction_service: TransactionServiceDep,
) -> ReopenJobUseCase:
    return ReopenJobUseCase(job_repo, assignment_repo, notifier, clock, transaction_service)


async def get_potential_jobs_use_case(
    user_repo: UserRepositoryDep, eligibility_engine: EligibilityEngineDep
) -> GetPotentialJobsUseCase:
    return GetPotentialJobsUseCase(user_repo, eligibility_engine)


async def get_resend_push_use_case(
    job_repo: JobRepositoryDep, notifier: BookingNotifierDep
) -> ResendPushUseCase:
    return ResendPushUseCase(job_repo, notifier)


async def get_resend_sms_use_case(
    job_repo: JobRepositoryDep, notifier: BookingNotifierDep
) -> ResendSmsUseCase:
    return ResendSmsUseCase(job_repo, notifier)


async def get_update_distance_use_case(
    job_repo: JobRepositoryDep,
    distance_repo: DistanceRepositoryDep,
    transaction_service: TransactionServiceDep,
) -> UpdateDistanceUseCase:
    return UpdateDistanceUseCase(job_repo, distance_repo, transaction_service)


# Type aliases for cleaner dependency injection
CreateBookingDep = Annotated[CreateBookingUseCase, Depends(get_create_booking_use_case)]
ConfirmBookingDep = Annotated[ConfirmBookingUseCase, Depends(get_confirm_booking_use_case)]
UpdateBookingDep = Annotated[UpdateBookingUseCase, Depends(get_update_booking_use_case)]
AcceptJobDep = Annotated[AcceptJobUseCase, Depends(get_accept_job_use_case)]
AcceptJobByIdDep = Annotated[AcceptJobByIdUseCase, Depends(get_accept_job_by_id_use_case)]
CancelJobDep = Annotated[CancelJobUseCase, Depends(get_cancel_job_use_case)]
EndJobDep = Annotated[EndJobUseCase, Depends(get_end_job_use_case)]
CustomerNotCallDep = Annotated[
    CustomerNotCallUseCase, Depends(get_customer_not_call_use_case)
]
ReopenJobDep = Annotated[ReopenJobUseCase, Depends(get_reopen_job_use_case)]
PotentialJobsDep = Annotated[GetPotentialJobsUseCase, Depends(get_potential_jobs_use_case)]
ResendPushDep = Annotated[ResendPushUseCase, Depends(get_resend_push_use_case)]
ResendSmsDep = Annotated[ResendSmsUseCase, Depends(get_resend_sms_use_case)]
UpdateDistanceDep = Annotated[UpdateDistanceUseCase, Depends(get_update_distance_use_case)]

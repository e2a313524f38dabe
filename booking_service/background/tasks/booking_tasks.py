"""
Celery tasks for booking maintenance.

The outbox task publishes events written by the use cases after commit,
the expiry task times out pending bookings nobody accepted and the cleanup
task prunes completed outbox rows.
"""

import asyncio

from celery import current_app
from sqlalchemy.ext.asyncio import AsyncSession

from booking_service.application.services.booking_notifier import BookingNotifier
from booking_service.application.services.eligibility_engine import EligibilityEngine
from booking_service.application.services.notification_dispatcher import (
    NotificationDispatcher,
)
from booking_service.application.services.transactional_outbox import TransactionalOutbox
from booking_service.application.use_cases.expire_pending_bookings import (
    ExpirePendingBookingsUseCase,
)
from booking_service.background.workers.outbox_worker import OutboxWorker
from booking_service.config.database import worker_session
from booking_service.config.logging import get_logger
from booking_service.config.settings import settings
from booking_service.infrastructure.database.repositories import (
    JobRepository,
    LanguageRepository,
    TransactionService,
    UserRepository,
)
from booking_service.infrastructure.gateways import (
    BusinessClock,
    OneSignalPushGateway,
    TwilioSmsGateway,
)

logger = get_logger(__name__)


def run_async_in_new_loop(coro):
    """Run a coroutine in a fresh event loop so tasks never share one."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


def _build_notifier(session: AsyncSession, clock: BusinessClock) -> BookingNotifier:
    user_repo = UserRepository(session)
    dispatcher = NotificationDispatcher(
        OneSignalPushGateway(),
        TwilioSmsGateway(),
        clock,
        title=settings.PUSH_TITLE,
        sms_from_number=settings.SMS_FROM_NUMBER,
    )
    return BookingNotifier(
        dispatcher,
        EligibilityEngine(user_repo, JobRepository(session)),
        user_repo,
        LanguageRepository(session),
    )


@current_app.task(bind=True, max_retries=3, name="process_outbox_events_task")
def process_outbox_events_task(self, batch_size: int = None):
    """Publish pending outbox events."""

    async def _process() -> int:
        async with worker_session() as session:
            worker = OutboxWorker(
                TransactionalOutbox(session),
                JobRepository(session),
                _build_notifier(session, BusinessClock()),
            )
            return await worker.process_pending_events(
                batch_size or settings.OUTBOX_BATCH_SIZE
            )

    try:
        processed = run_async_in_new_loop(_process())
    except Exception as exc:
        logger.error("Outbox processing failed", error=str(exc), exc_info=True)
        raise self.retry(exc=exc, countdown=30)
    return {"processed": processed}


@current_app.task(bind=True, max_retries=3, name="expire_pending_bookings_task")
def expire_pending_bookings_task(self):
    """Time out pending bookings past their expiry."""

    async def _expire():
        async with worker_session() as session:
            clock = BusinessClock()
            use_case = ExpirePendingBookingsUseCase(
                JobRepository(session),
                UserRepository(session),
                _build_notifier(session, clock),
                clock,
                TransactionService(session),
            )
            return await use_case.execute()

    try:
        result = run_async_in_new_loop(_expire())
    except Exception as exc:
        logger.error("Expiry sweep failed", error=str(exc), exc_info=True)
        raise self.retry(exc=exc, countdown=60)
    return {
        "expired": [str(job_id) for job_id in result.expired],
        "skipped": [str(job_id) for job_id in result.skipped],
    }


@current_app.task(name="cleanup_outbox_events_task")
def cleanup_outbox_events_task(days_old: int = 7):
    """Delete completed outbox events older than ``days_old`` days."""

    async def _cleanup() -> int:
        async with worker_session() as session:
            return await TransactionalOutbox(session).cleanup_completed_events(days_old)

    deleted = run_async_in_new_loop(_cleanup())
    logger.info("Outbox cleanup finished", deleted=deleted, days_old=days_old)
    return {"deleted": deleted}

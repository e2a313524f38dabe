"""
Outbox worker publishing booking events after commit.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

from booking_service.application.interfaces.repositories import JobRepositoryInterface
from booking_service.application.services.booking_notifier import BookingNotifier
from booking_service.application.services.transactional_outbox import (
    OutboxEvent,
    OutboxEventStatus,
    OutboxEventType,
    TransactionalOutbox,
)
from booking_service.config.logging import get_logger
from booking_service.domain.value_objects.job_status import JobStatus
from booking_service.infrastructure.monitoring.metrics import (
    record_outbox_event_processing,
)

logger = get_logger(__name__)


class OutboxWorker:
    """Worker for processing outbox events."""

    def __init__(
        self,
        outbox_service: TransactionalOutbox,
        job_repository: JobRepositoryInterface,
        notifier: BookingNotifier,
    ):
        self.outbox_service = outbox_service
        self.job_repository = job_repository
        self.notifier = notifier
        self.processed_count = 0
        self.error_count = 0

    async def process_pending_events(self, batch_size: int = 50) -> int:
        """Process pending events plus a share of retryable failed ones."""
        pending_events = await self.outbox_service.get_pending_events(limit=batch_size)
        failed_events = await self.outbox_service.get_failed_events_for_retry(
            limit=max(1, batch_size // 4)
        )
        all_events = pending_events + failed_events
        if not all_events:
            logger.debug("No pending or retryable outbox events")
            return 0

        processed = 0
        for event in all_events:
            if event.status == OutboxEventStatus.FAILED:
                if not self._should_retry_event(event):
                    continue
                if not await self.outbox_service.reset_event_for_retry(event.id):
                    continue

            if not await self.outbox_service.mark_event_processing(event.id):
                # Claimed by another worker
                continue

            try:
                await self._process_event(event)
            except Exception as e:
                logger.error(
                    "Error processing outbox event",
                    event_id=str(event.id),
                    event_type=event.event_type.value,
                    error=str(e),
                    exc_info=True,
                )
                await self.outbox_service.mark_event_failed(event.id, str(e))
                record_outbox_event_processing(event.event_type.value, "failed")
                self.error_count += 1
                continue

            await self.outbox_service.mark_event_completed(event.id)
            record_outbox_event_processing(event.event_type.value, "completed")
            processed += 1
            self.processed_count += 1

        logger.info(
            "Outbox event processing completed",
            pending_events=len(pending_events),
            retry_events=len(failed_events),
            processed_count=processed,
        )
        return processed

    @staticmethod
    def _should_retry_event(event: OutboxEvent, now: Optional[datetime] = None) -> bool:
        """Exponential backoff: 5, 15, 45 minutes after the last attempt."""
        if event.retry_count >= event.max_retries:
            return False
        if not event.processed_at:
            return True

        delay = timedelta(minutes=5 * (3**event.retry_count))
        now = now or datetime.now(timezone.utc)
        return event.processed_at < now - delay

    async def _process_event(self, event: OutboxEvent) -> None:
        """
        Deliver one event.

        JOB_CREATED fans the booking out to eligible translators. JOB_CANCELLED
        and SESSION_ENDED have no in-process consumer: the structured
        "Booking event published" log line is their publication, picked up by
        the log pipeline like the audit trail.
        """
        if event.event_type == OutboxEventType.JOB_CREATED:
            await self._broadcast_new_job(event)
        else:
            logger.info(
                "Booking event published",
                event_id=str(event.id),
                event_type=event.event_type.value,
                aggregate_id=event.aggregate_id,
                data=event.event_data,
            )

    async def _broadcast_new_job(self, event: OutboxEvent) -> None:
        job = await self.job_repository.get_by_id(UUID(event.aggregate_id))
        if job is None or job.status != JobStatus.PENDING:
            logger.info(
                "Skipping broadcast, booking no longer pending",
                job_id=event.aggregate_id,
                status=job.status.value if job else None,
            )
            return

        report = await self.notifier.broadcast_suitable_job(job)
        logger.info(
            "New booking broadcast",
            job_id=str(job.id),
            immediate=report.immediate,
            delayed=report.delayed,
            suppressed=report.suppressed,
        )

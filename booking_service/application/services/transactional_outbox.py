"""
Transactional outbox for booking events.

Use cases write an event row in the same transaction as the booking change
it describes; ``OutboxWorker`` picks the rows up after commit. Status moves
are conditional updates so two workers never publish the same row.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, List, Optional
from uuid import UUID, uuid4

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from booking_service.config.logging import get_logger
from booking_service.infrastructure.database.models.outbox_event import OutboxEventModel
from booking_service.infrastructure.database.repositories.converters import ensure_aware

logger = get_logger(__name__)


class OutboxEventType(str, Enum):
    """Booking events published through the outbox."""

    JOB_CREATED = "job_created"
    JOB_CANCELLED = "job_cancelled"
    SESSION_ENDED = "session_ended"


class OutboxEventStatus(str, Enum):
    """Delivery state of an outbox row."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class OutboxEvent:
    """An outbox row as seen by the worker."""

    id: UUID
    event_type: OutboxEventType
    aggregate_id: str
    event_data: Dict[str, Any]
    status: OutboxEventStatus = OutboxEventStatus.PENDING
    retry_count: int = 0
    max_retries: int = 3
    created_at: Optional[datetime] = None
    processed_at: Optional[datetime] = None
    error_message: Optional[str] = None


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TransactionalOutbox:
    """Writes booking events and tracks their delivery."""

    def __init__(self, db_session: AsyncSession):
        self.db_session = db_session

    async def create_event(
        self,
        event_type: OutboxEventType,
        aggregate_id: str,
        event_data: Dict[str, Any],
        max_retries: int = 3,
    ) -> OutboxEvent:
        """
        Add an event to the caller's open transaction.

        Nothing is committed here: the row becomes visible together with the
        booking change, or not at all.
        """
        event = OutboxEvent(
            id=uuid4(),
            event_type=event_type,
            aggregate_id=aggregate_id,
            event_data=event_data,
            max_retries=max_retries,
            created_at=_utcnow(),
        )
        await self.db_session.execute(
            insert(OutboxEventModel).values(
                id=event.id,
                event_type=event.event_type.value,
                aggregate_id=event.aggregate_id,
                event_data=event.event_data,
                status=event.status.value,
                retry_count=event.retry_count,
                max_retries=event.max_retries,
                created_at=event.created_at,
            )
        )

        logger.info(
            "Booking event queued",
            event_id=str(event.id),
            event_type=event.event_type.value,
            job_id=event.aggregate_id,
        )
        return event

    async def mark_event_processing(self, event_id: UUID) -> bool:
        """Claim a pending event; False if another worker got it first."""
        return await self._move(
            event_id,
            OutboxEventStatus.PENDING,
            OutboxEventStatus.PROCESSING,
            processed_at=_utcnow(),
        )

    async def reset_event_for_retry(self, event_id: UUID) -> bool:
        """Put a failed event back in the pending queue."""
        return await self._move(event_id, OutboxEventStatus.FAILED, OutboxEventStatus.PENDING)

    async def mark_event_completed(self, event_id: UUID) -> None:
        await self._move(
            event_id,
            OutboxEventStatus.PROCESSING,
            OutboxEventStatus.COMPLETED,
            processed_at=_utcnow(),
        )

    async def mark_event_failed(self, event_id: UUID, error_message: str) -> None:
        """Record a failed publish; the attempt counts against max_retries."""
        await self._move(
            event_id,
            OutboxEventStatus.PROCESSING,
            OutboxEventStatus.FAILED,
            processed_at=_utcnow(),
            error_message=error_message,
            retry_count=OutboxEventModel.retry_count + 1,
        )

    async def get_pending_events(
        self, event_type: Optional[OutboxEventType] = None, limit: int = 100
    ) -> List[OutboxEvent]:
        """Pending events, oldest first."""
        stmt = select(OutboxEventModel).where(
            OutboxEventModel.status == OutboxEventStatus.PENDING.value
        )
        if event_type is not None:
            stmt = stmt.where(OutboxEventModel.event_type == event_type.value)
        return await self._fetch(stmt.order_by(OutboxEventModel.created_at.asc()).limit(limit))

    async def get_failed_events_for_retry(self, limit: int = 10) -> List[OutboxEvent]:
        """Failed events with retries left, longest-waiting first."""
        stmt = (
            select(OutboxEventModel)
            .where(
                OutboxEventModel.status == OutboxEventStatus.FAILED.value,
                OutboxEventModel.retry_count < OutboxEventModel.max_retries,
            )
            .order_by(OutboxEventModel.processed_at.asc())
            .limit(limit)
        )
        return await self._fetch(stmt)

    async def cleanup_completed_events(self, days_old: int = 7) -> int:
        """Delete completed events created more than ``days_old`` days ago."""
        stmt = delete(OutboxEventModel).where(
            OutboxEventModel.status == OutboxEventStatus.COMPLETED.value,
            OutboxEventModel.created_at < _utcnow() - timedelta(days=days_old),
        )
        result = await self.db_session.execute(stmt)
        await self.db_session.commit()

        logger.info("Completed booking events pruned", deleted=result.rowcount, days_old=days_old)
        return result.rowcount

    async def _move(
        self,
        event_id: UUID,
        from_status: OutboxEventStatus,
        to_status: OutboxEventStatus,
        **values: Any,
    ) -> bool:
        stmt = (
            update(OutboxEventModel)
            .where(OutboxEventModel.id == event_id, OutboxEventModel.status == from_status.value)
            .values(status=to_status.value, **values)
        )
        result = await self.db_session.execute(stmt)
        await self.db_session.commit()

        moved = result.rowcount > 0
        if not moved:
            logger.debug(
                "Outbox event not moved",
                event_id=str(event_id),
                from_status=from_status.value,
                to_status=to_status.value,
            )
        return moved

    async def _fetch(self, stmt) -> List[OutboxEvent]:
        result = await self.db_session.execute(stmt)
        return [self._model_to_event(model) for model in result.scalars().all()]

    @staticmethod
    def _model_to_event(model: OutboxEventModel) -> OutboxEvent:
        return OutboxEvent(
            id=model.id,
            event_type=OutboxEventType(model.event_type),
            aggregate_id=model.aggregate_id,
            event_data=model.event_data,
            status=OutboxEventStatus(model.status),
            retry_count=model.retry_count,
            max_retries=model.max_retries,
            created_at=ensure_aware(model.created_at),
            processed_at=ensure_aware(model.processed_at),
            error_message=model.error_message,
        )

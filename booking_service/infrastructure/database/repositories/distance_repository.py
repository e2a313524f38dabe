"""
Distance repository implementation.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from booking_service.application.interfaces.repositories import DistanceRepositoryInterface
from booking_service.config.logging import get_logger
from booking_service.domain.entities.distance import Distance
from booking_service.infrastructure.database.models.distance import DistanceModel

logger = get_logger(__name__)


class DistanceRepository(DistanceRepositoryInterface):
    """Distance repository implementation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_job_id(self, job_id: UUID) -> Optional[Distance]:
        """Get the distance record of a job."""
        model = await self._get_model(job_id)
        return self._model_to_entity(model) if model else None

    async def save(self, distance: Distance) -> Distance:
        """Create or replace the distance record of a job."""
        model = await self._get_model(distance.job_id)
        if model is None:
            model = DistanceModel(job_id=distance.job_id)
            self.db.add(model)

        model.distance = distance.distance
        model.time = distance.time

        await self.db.flush()
        logger.info("Distance saved", job_id=str(distance.job_id))
        return self._model_to_entity(model)

    async def _get_model(self, job_id: UUID) -> Optional[DistanceModel]:
        stmt = select(DistanceModel).where(DistanceModel.job_id == job_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    def _model_to_entity(model: DistanceModel) -> Distance:
        return Distance(job_id=model.job_id, distance=model.distance, time=model.time)

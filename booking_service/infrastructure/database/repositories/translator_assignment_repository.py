"""
Translator assignment repository implementation.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from booking_service.application.interfaces.repositories import (
    TranslatorAssignmentRepositoryInterface,
)
from booking_service.config.logging import get_logger
from booking_service.domain.entities.translator_assignment import TranslatorAssignment
from booking_service.domain.exceptions.conflict_error import JobAlreadyTakenError
from booking_service.domain.exceptions.not_found_error import NotFoundError
from booking_service.infrastructure.database.models.job import JobModel
from booking_service.infrastructure.database.models.translator_assignment import (
    TranslatorAssignmentModel,
)
from booking_service.infrastructure.database.repositories.converters import ensure_aware

logger = get_logger(__name__)


def _is_open():
    return (
        TranslatorAssignmentModel.completed_at.is_(None),
        TranslatorAssignmentModel.cancel_at.is_(None),
    )


class TranslatorAssignmentRepository(TranslatorAssignmentRepositoryInterface):
    """Translator assignment repository implementation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, assignment: TranslatorAssignment) -> TranslatorAssignment:
        """Create an assignment; a second active one for the job is a conflict."""
        model = TranslatorAssignmentModel(
            id=assignment.id,
            job_id=assignment.job_id,
            user_id=assignment.user_id,
            created_at=assignment.created_at,
            completed_at=assignment.completed_at,
            cancel_at=assignment.cancel_at,
            completed_by=assignment.completed_by,
        )
        self.db.add(model)
        try:
            await self.db.flush()
        except IntegrityError as e:
            logger.warning(
                "Active assignment already exists",
                job_id=str(assignment.job_id),
                user_id=str(assignment.user_id),
                error=str(e.orig),
            )
            raise JobAlreadyTakenError(assignment.job_id) from e

        await self.db.refresh(model)
        logger.info(
            "Translator assignment created",
            assignment_id=str(model.id),
            job_id=str(model.job_id),
            user_id=str(model.user_id),
        )
        return self._model_to_entity(model)

    async def update(self, assignment: TranslatorAssignment) -> TranslatorAssignment:
        """Persist assignment timestamps."""
        stmt = select(TranslatorAssignmentModel).where(
            TranslatorAssignmentModel.id == assignment.id
        )
        result = await self.db.execute(stmt)
        model = result.scalar_one_or_none()
        if not model:
            raise NotFoundError("TranslatorAssignment", assignment.id)

        model.completed_at = assignment.completed_at
        model.cancel_at = assignment.cancel_at
        model.completed_by = assignment.completed_by

        await self.db.flush()
        await self.db.refresh(model)
        return self._model_to_entity(model)

    async def get_active_for_job(self, job_id: UUID) -> Optional[TranslatorAssignment]:
        """Get the assignment that is neither completed nor cancelled."""
        stmt = select(TranslatorAssignmentModel).where(
            TranslatorAssignmentModel.job_id == job_id, *_is_open()
        )
        result = await self.db.execute(stmt)
        model = result.scalars().first()
        return self._model_to_entity(model) if model else None

    async def find_open_for_job(self, job_id: UUID) -> List[TranslatorAssignment]:
        """Get every assignment of a job that is not yet closed."""
        stmt = (
            select(TranslatorAssignmentModel)
            .where(TranslatorAssignmentModel.job_id == job_id, *_is_open())
            .order_by(TranslatorAssignmentModel.created_at.asc())
        )
        result = await self.db.execute(stmt)
        return [self._model_to_entity(model) for model in result.scalars().all()]

    async def translator_booked_at(
        self, translator_id: UUID, due: datetime, exclude_job_id: UUID
    ) -> bool:
        """Check if a translator holds an active assignment on another job at due."""
        stmt = select(
            exists()
            .where(
                TranslatorAssignmentModel.user_id == translator_id,
                TranslatorAssignmentModel.job_id == JobModel.id,
                JobModel.due == due,
                JobModel.id != exclude_job_id,
                *_is_open(),
            )
        )
        result = await self.db.execute(stmt)
        return bool(result.scalar())

    @staticmethod
    def _model_to_entity(model: TranslatorAssignmentModel) -> TranslatorAssignment:
        """Convert database model to domain entity."""
        return TranslatorAssignment(
            id=model.id,
            job_id=model.job_id,
            user_id=model.user_id,
            created_at=ensure_aware(model.created_at),
            completed_at=ensure_aware(model.completed_at),
            cancel_at=ensure_aware(model.cancel_at),
            completed_by=model.completed_by,
        )

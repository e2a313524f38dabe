"""
Job repository implementation.
"""

from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from booking_service.application.interfaces.repositories import JobRepositoryInterface
from booking_service.config.logging import get_logger
from booking_service.domain.entities.job import Job
from booking_service.domain.exceptions.conflict_error import ConflictError
from booking_service.domain.exceptions.not_found_error import NotFoundError
from booking_service.domain.value_objects.job_status import JobStatus
from booking_service.domain.value_objects.job_type import JobType
from booking_service.infrastructure.database.models.job import JobModel
from booking_service.infrastructure.database.repositories.converters import ensure_aware

logger = get_logger(__name__)

_PLAIN_FIELDS = (
    "user_id",
    "from_language_id",
    "immediate",
    "duration",
    "gender",
    "certified",
    "customer_phone_type",
    "customer_physical_type",
    "admin_comments",
    "reference",
    "session_time",
    "user_email",
    "address",
    "instructions",
    "town",
    "specific_translator_id",
    "ignore",
    "ignore_expired",
    "ignore_feedback",
    "flagged",
    "manually_handled",
    "by_admin",
    "cust_16_hour_email",
    "cust_48_hour_email",
)

_DATETIME_FIELDS = ("due", "created_at", "end_at", "will_expire_at", "withdraw_at")


class JobRepository(JobRepositoryInterface):
    """Job repository implementation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, job: Job) -> Job:
        """Create a new job."""
        model = JobModel(id=job.id)
        self._copy_to_model(job, model)

        self.db.add(model)
        await self.db.flush()
        await self.db.refresh(model)

        logger.info("Job created", job_id=str(model.id), status=model.status)
        return self._model_to_entity(model)

    async def get_by_id(self, job_id: UUID) -> Optional[Job]:
        """Get job by ID."""
        model = await self._get_model(job_id)
        return self._model_to_entity(model) if model else None

    async def update(self, job: Job) -> Job:
        """
        Write the job back.

        The row must still carry the version it was read at; a job changed by
        another transaction in the meantime (an accept, say) raises
        ConflictError instead of being overwritten.
        """
        model = await self._get_model(job.id)
        if not model:
            raise NotFoundError("Job", job.id)

        self._copy_to_model(job, model)

        # Flush only; the caller owns the transaction
        try:
            await self.db.flush()
        except StaleDataError as e:
            logger.warning("Job changed concurrently", job_id=str(job.id))
            raise ConflictError(f"Job {job.id} was changed by another request") from e
        await self.db.refresh(model)

        return self._model_to_entity(model)

    async def compare_and_set_status(
        self, job_id: UUID, expected: JobStatus, new_status: JobStatus
    ) -> bool:
        """Move a job to new_status only if it is still in expected."""
        stmt = (
            update(JobModel)
            .where(JobModel.id == job_id, JobModel.status == expected.value)
            .values(
                status=new_status.value,
                updated_at=datetime.now(timezone.utc),
                version=JobModel.version + 1,
            )
            .execution_options(synchronize_session="fetch")
        )
        result = await self.db.execute(stmt)
        swapped = result.rowcount == 1

        logger.info(
            "Job status compare-and-set",
            job_id=str(job_id),
            expected=expected.value,
            new_status=new_status.value,
            swapped=swapped,
        )
        return swapped

    async def find_pending_for_translator(
        self,
        job_type: JobType,
        language_ids: List[UUID],
        gender: Optional[str],
    ) -> List[Job]:
        """Pending jobs of a type and language set, open to the given gender."""
        if not language_ids:
            return []

        gender_clause = JobModel.gender.is_(None)
        if gender:
            gender_clause = or_(gender_clause, JobModel.gender == gender)

        stmt = (
            select(JobModel)
            .where(
                JobModel.status == JobStatus.PENDING.value,
                JobModel.job_type == job_type.value,
                JobModel.from_language_id.in_(language_ids),
                gender_clause,
            )
            .order_by(JobModel.due.asc())
        )
        result = await self.db.execute(stmt)
        return [self._model_to_entity(model) for model in result.scalars().all()]

    async def find_expired_pending(self, now: datetime, limit: int = 100) -> List[Job]:
        """Pending jobs whose will_expire_at has passed."""
        stmt = (
            select(JobModel)
            .where(
                JobModel.status == JobStatus.PENDING.value,
                JobModel.will_expire_at.is_not(None),
                JobModel.will_expire_at <= now,
                JobModel.ignore_expired.is_(False),
            )
            .order_by(JobModel.will_expire_at.asc())
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return [self._model_to_entity(model) for model in result.scalars().all()]

    async def _get_model(self, job_id: UUID) -> Optional[JobModel]:
        stmt = select(JobModel).where(JobModel.id == job_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    def _copy_to_model(job: Job, model: JobModel) -> None:
        for name in _PLAIN_FIELDS + _DATETIME_FIELDS:
            setattr(model, name, getattr(job, name))
        model.status = job.status.value
        model.job_type = job.job_type.value

    @staticmethod
    def _model_to_entity(model: JobModel) -> Job:
        """Convert database model to domain entity."""
        values = {name: getattr(model, name) for name in _PLAIN_FIELDS}
        values.update(
            {name: ensure_aware(getattr(model, name)) for name in _DATETIME_FIELDS}
        )
        return Job(
            id=model.id,
            status=JobStatus(model.status),
            job_type=JobType(model.job_type),
            **values,
        )

"""
Repository interfaces for dependency inversion.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Set
from uuid import UUID

from booking_service.domain.entities.distance import Distance
from booking_service.domain.entities.job import Job
from booking_service.domain.entities.language import Language
from booking_service.domain.entities.translator_assignment import TranslatorAssignment
from booking_service.domain.entities.user import User
from booking_service.domain.value_objects.job_status import JobStatus
from booking_service.domain.value_objects.job_type import JobType


class JobRepositoryInterface(ABC):
    """Job repository interface."""

    @abstractmethod
    async def create(self, job: Job) -> Job:
        """Create a new job."""
        pass

    @abstractmethod
    async def get_by_id(self, job_id: UUID) -> Optional[Job]:
        """Get job by ID."""
        pass

    @abstractmethod
    async def update(self, job: Job) -> Job:
        """Persist every field of an existing job; ConflictError if it changed since it was read."""
        pass

    @abstractmethod
    async def compare_and_set_status(
        self, job_id: UUID, expected: JobStatus, new_status: JobStatus
    ) -> bool:
        """Move a job to new_status only if it is still in expected."""
        pass

    @abstractmethod
    async def find_pending_for_translator(
        self,
        job_type: JobType,
        language_ids: List[UUID],
        gender: Optional[str],
    ) -> List[Job]:
        """Pending jobs of a type and language set, open to the given gender."""
        pass

    @abstractmethod
    async def find_expired_pending(
        self, now: datetime, limit: int = 100
    ) -> List[Job]:
        """Pending jobs whose will_expire_at has passed."""
        pass


class TranslatorAssignmentRepositoryInterface(ABC):
    """Translator assignment repository interface."""

    @abstractmethod
    async def create(self, assignment: TranslatorAssignment) -> TranslatorAssignment:
        """Create an assignment, raising ConflictError if the job already has an active one."""
        pass

    @abstractmethod
    async def update(self, assignment: TranslatorAssignment) -> TranslatorAssignment:
        """Persist assignment timestamps."""
        pass

    @abstractmethod
    async def get_active_for_job(self, job_id: UUID) -> Optional[TranslatorAssignment]:
        """Get the assignment that is neither completed nor cancelled."""
        pass

    @abstractmethod
    async def find_open_for_job(self, job_id: UUID) -> List[TranslatorAssignment]:
        """Get every assignment of a job that is not yet closed."""
        pass

    @abstractmethod
    async def translator_booked_at(
        self, translator_id: UUID, due: datetime, exclude_job_id: UUID
    ) -> bool:
        """Check if a translator holds an active assignment on another job at due."""
        pass


class UserRepositoryInterface(ABC):
    """User repository interface."""

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email (case-insensitive)."""
        pass

    @abstractmethod
    async def find_translators(
        self,
        translator_type: str,
        language_id: UUID,
        gender: Optional[str] = None,
        levels: Optional[List[str]] = None,
    ) -> List[User]:
        """Find translators of a type speaking a language, optionally by gender and level."""
        pass

    @abstractmethod
    async def get_blacklisted_translator_ids(self, customer_id: UUID) -> Set[UUID]:
        """Translators the customer has blocked."""
        pass


class LanguageRepositoryInterface(ABC):
    """Language repository interface."""

    @abstractmethod
    async def get_by_id(self, language_id: UUID) -> Optional[Language]:
        """Get language by ID."""
        pass


class DistanceRepositoryInterface(ABC):
    """Distance repository interface."""

    @abstractmethod
    async def get_by_job_id(self, job_id: UUID) -> Optional[Distance]:
        """Get the distance record of a job."""
        pass

    @abstractmethod
    async def save(self, distance: Distance) -> Distance:
        """Create or replace the distance record of a job."""
        pass

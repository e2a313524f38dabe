"""Potential jobs use case."""

from typing import List
from uuid import UUID

from booking_service.application.interfaces.repositories import UserRepositoryInterface
from booking_service.application.services.eligibility_engine import EligibilityEngine
from booking_service.application.use_cases.lookups import load_user
from booking_service.config.logging import get_logger
from booking_service.domain.entities.job import Job
from booking_service.domain.exceptions.conflict_error import ConflictError

logger = get_logger(__name__)


class GetPotentialJobsUseCase:
    """Use case for listing the pending bookings a translator may take."""

    def __init__(
        self, user_repo: UserRepositoryInterface, eligibility_engine: EligibilityEngine
    ):
        self.user_repo = user_repo
        self.eligibility_engine = eligibility_engine

    async def execute(self, translator_id: UUID) -> List[Job]:
        translator = await load_user(self.user_repo, translator_id)
        if not translator.is_translator:
            raise ConflictError("Only translators have potential jobs")

        jobs = await self.eligibility_engine.find_potential_jobs(translator)
        logger.debug(
            "Potential jobs listed", translator_id=str(translator.id), count=len(jobs)
        )
        return jobs

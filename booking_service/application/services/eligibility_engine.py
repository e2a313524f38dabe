"""
Eligibility engine matching bookings with qualified translators.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Set
from uuid import UUID

from booking_service.application.interfaces.repositories import (
    JobRepositoryInterface,
    UserRepositoryInterface,
)
from booking_service.config.logging import get_logger
from booking_service.domain.entities.job import Job
from booking_service.domain.entities.user import User
from booking_service.domain.value_objects.job_type import JobType

logger = get_logger(__name__)


@dataclass
class PairDecision:
    """Outcome of checking one job/translator pair."""

    eligible: bool
    reason: Optional[str] = None


def check_pair(job: Job, translator: User, customer_town: Optional[str]) -> PairDecision:
    """Apply the per-pair guards, in order, to a candidate that passed the query filters."""
    if job.specific_translator_id and job.specific_translator_id != translator.id:
        return PairDecision(False, "earmarked_for_other_translator")

    if job.is_physical and not translator.lives_in(customer_town):
        return PairDecision(False, "outside_customer_town")

    return PairDecision(True)


class EligibilityEngine:
    """Finds eligible translators for a job, and potential jobs for a translator."""

    def __init__(
        self,
        user_repository: UserRepositoryInterface,
        job_repository: JobRepositoryInterface,
    ):
        self.user_repository = user_repository
        self.job_repository = job_repository
        self.logger = logger

    async def find_eligible_translators(
        self, job: Job, exclude_ids: Iterable[UUID] = ()
    ) -> List[User]:
        """
        Translators who may be offered the job.

        Candidates come from the store filtered by translator type, language,
        gender and level; the customer's blacklist, explicit exclusions and the
        per-pair guards are applied here.
        """
        translator_type = job.job_type.translator_type
        levels = sorted(level.value for level in job.acceptable_levels)

        candidates = await self.user_repository.find_translators(
            translator_type=translator_type.value,
            language_id=job.from_language_id,
            gender=job.gender,
            levels=levels,
        )
        blacklisted = await self.user_repository.get_blacklisted_translator_ids(job.user_id)
        excluded = set(exclude_ids) | blacklisted
        customer_town = job.town or await self._customer_city(job.user_id)

        eligible = [
            translator
            for translator in candidates
            if translator.id not in excluded
            and check_pair(job, translator, customer_town).eligible
        ]

        self.logger.info(
            "Eligible translators resolved",
            job_id=str(job.id),
            translator_type=translator_type.value,
            candidates=len(candidates),
            blacklisted=len(blacklisted),
            eligible=len(eligible),
        )
        return eligible

    async def find_potential_jobs(self, translator: User) -> List[Job]:
        """Pending jobs the translator is qualified for and allowed to take."""
        job_type = JobType.for_translator_type(translator.translator_type)
        jobs = await self.job_repository.find_pending_for_translator(
            job_type=job_type,
            language_ids=list(translator.language_ids),
            gender=translator.gender,
        )

        cities: Dict[UUID, Optional[str]] = {}
        blacklists: Dict[UUID, Set[UUID]] = {}
        potential = []
        for job in jobs:
            if translator.translator_level not in {l.value for l in job.acceptable_levels}:
                continue

            if job.user_id not in blacklists:
                blacklists[job.user_id] = (
                    await self.user_repository.get_blacklisted_translator_ids(job.user_id)
                )
            if translator.id in blacklists[job.user_id]:
                continue

            if job.user_id not in cities:
                cities[job.user_id] = await self._customer_city(job.user_id)
            town = job.town or cities[job.user_id]
            if check_pair(job, translator, town).eligible:
                potential.append(job)

        self.logger.info(
            "Potential jobs resolved",
            translator_id=str(translator.id),
            job_type=job_type.value,
            candidates=len(jobs),
            potential=len(potential),
        )
        return potential

    async def _customer_city(self, customer_id: UUID) -> Optional[str]:
        customer = await self.user_repository.get_by_id(customer_id)
        return customer.city if customer else None

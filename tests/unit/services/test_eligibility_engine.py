"""
Unit tests for EligibilityEngine.
"""

from uuid import uuid4

import pytest

from booking_service.application.services.eligibility_engine import (
    EligibilityEngine,
    check_pair,
)
from booking_service.domain.value_objects.job_type import JobType
from tests.factories import make_customer, make_job, make_translator


class TestCheckPair:
    """Test the per-pair guards."""

    def test_earmarked_job_only_for_that_translator(self):
        chosen = make_translator()
        other = make_translator()
        job = make_job(specific_translator_id=chosen.id)

        assert check_pair(job, chosen, None).eligible is True
        decision = check_pair(job, other, None)
        assert decision.eligible is False
        assert decision.reason == "earmarked_for_other_translator"

    def test_physical_job_requires_same_town(self):
        job = make_job(customer_physical_type=True, customer_phone_type=False)

        assert check_pair(job, make_translator(city="Stockholm"), "stockholm").eligible
        decision = check_pair(job, make_translator(city="Malmö"), "Stockholm")
        assert decision.reason == "outside_customer_town"

    def test_phone_job_ignores_town(self):
        job = make_job(customer_physical_type=True, customer_phone_type=True)
        assert check_pair(job, make_translator(city="Malmö"), "Stockholm").eligible

    def test_physical_job_without_town_matches_nobody(self):
        job = make_job(customer_physical_type=True, customer_phone_type=False)

        decision = check_pair(job, make_translator(city=None), None)
        assert decision.reason == "outside_customer_town"


class TestEligibilityEngine:
    """Test cases for EligibilityEngine."""

    @pytest.fixture
    def engine(self, mock_user_repository, mock_job_repository):
        return EligibilityEngine(mock_user_repository, mock_job_repository)

    async def test_queries_translators_matching_job(self, engine, mock_user_repository):
        job = make_job(job_type=JobType.RWS, gender="female", certified="law")

        await engine.find_eligible_translators(job)

        mock_user_repository.find_translators.assert_called_once_with(
            translator_type="rwstranslator",
            language_id=job.from_language_id,
            gender="female",
            levels=["Certified with specialisation in law"],
        )

    async def test_excludes_blacklisted_and_explicit(self, engine, mock_user_repository):
        customer = make_customer()
        blocked, excluded, kept = make_translator(), make_translator(), make_translator()
        job = make_job(customer)
        mock_user_repository.find_translators.return_value = [blocked, excluded, kept]
        mock_user_repository.get_blacklisted_translator_ids.return_value = {blocked.id}
        mock_user_repository.get_by_id.return_value = customer

        eligible = await engine.find_eligible_translators(job, exclude_ids=[excluded.id])

        assert eligible == [kept]

    async def test_physical_job_uses_customer_city(self, engine, mock_user_repository):
        customer = make_customer(city="Uppsala")
        local = make_translator(city="uppsala")
        remote = make_translator(city="Stockholm")
        job = make_job(customer, customer_physical_type=True, customer_phone_type=False)
        mock_user_repository.find_translators.return_value = [local, remote]
        mock_user_repository.get_by_id.return_value = customer

        assert await engine.find_eligible_translators(job) == [local]

    async def test_job_town_overrides_customer_city(self, engine, mock_user_repository):
        customer = make_customer(city="Uppsala")
        translator = make_translator(city="Lund")
        job = make_job(
            customer, customer_physical_type=True, customer_phone_type=False, town="Lund"
        )
        mock_user_repository.find_translators.return_value = [translator]
        mock_user_repository.get_by_id.return_value = customer

        assert await engine.find_eligible_translators(job) == [translator]

    async def test_potential_jobs_filters_level_and_blacklist(
        self, engine, mock_user_repository, mock_job_repository
    ):
        language_id = uuid4()
        translator = make_translator(
            translator_level="Layman", language_ids=[language_id], gender="male"
        )
        open_job = make_job(from_language_id=language_id)
        certified_only = make_job(from_language_id=language_id, certified="yes")
        blocking_customer = make_customer()
        blocked_job = make_job(blocking_customer, from_language_id=language_id)
        mock_job_repository.find_pending_for_translator.return_value = [
            open_job,
            certified_only,
            blocked_job,
        ]
        mock_user_repository.get_blacklisted_translator_ids.side_effect = (
            lambda customer_id: {translator.id} if customer_id == blocking_customer.id else set()
        )

        potential = await engine.find_potential_jobs(translator)

        assert potential == [open_job]
        mock_job_repository.find_pending_for_translator.assert_called_once_with(
            job_type=JobType.PAID, language_ids=[language_id], gender="male"
        )

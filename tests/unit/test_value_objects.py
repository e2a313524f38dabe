"""
Unit tests for value objects and entities.
"""

from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from booking_service.domain.entities.translator_assignment import TranslatorAssignment
from booking_service.domain.value_objects.certification import (
    CERTIFIED_LEVELS,
    TranslatorLevel,
    certification_from_job_for,
    job_for_labels,
    levels_for_certification,
)
from booking_service.domain.value_objects.job_status import JobStatus
from booking_service.domain.value_objects.job_type import JobType, TranslatorType
from booking_service.domain.value_objects.session_time import SessionTime
from booking_service.domain.value_objects.user_type import Gender
from tests.factories import NOW, make_job, make_translator


class TestJobStatus:
    """Test JobStatus value object."""

    def test_enum_values(self):
        assert [status.value for status in JobStatus] == [
            "pending",
            "assigned",
            "started",
            "completed",
            "withdrawbefore24",
            "withdrawafter24",
            "timedout",
            "not_carried_out_customer",
        ]

    def test_can_be_cancelled(self):
        assert JobStatus.PENDING.can_be_cancelled() is True
        assert JobStatus.ASSIGNED.can_be_cancelled() is True

        assert JobStatus.STARTED.can_be_cancelled() is False
        assert JobStatus.COMPLETED.can_be_cancelled() is False
        assert JobStatus.TIMEDOUT.can_be_cancelled() is False


class TestJobType:
    """Test JobType mappings."""

    @pytest.mark.parametrize(
        "consumer_type,expected",
        [
            ("rwsconsumer", JobType.RWS),
            ("ngo", JobType.UNPAID),
            ("paid", JobType.PAID),
            ("something-else", None),
            (None, None),
        ],
    )
    def test_from_consumer_type(self, consumer_type, expected):
        assert JobType.from_consumer_type(consumer_type) == expected

    def test_translator_type_for_job_type(self):
        assert JobType.PAID.translator_type == TranslatorType.PROFESSIONAL
        assert JobType.RWS.translator_type == TranslatorType.RWS_TRANSLATOR
        assert JobType.UNPAID.translator_type == TranslatorType.VOLUNTEER

    def test_unknown_translator_type_takes_volunteer_work(self):
        assert JobType.for_translator_type("professional") == JobType.PAID
        assert JobType.for_translator_type(None) == JobType.UNPAID


class TestCertification:
    """Test certification requirements."""

    def test_job_for_both_normal_and_certified(self):
        assert certification_from_job_for(["normal", "certified"]) == "both"
        assert levels_for_certification("both") == CERTIFIED_LEVELS

    def test_law_only_accepts_law_specialists(self):
        assert certification_from_job_for(["certified_in_law"]) == "law"
        assert levels_for_certification("law") == frozenset(
            {TranslatorLevel.CERTIFIED_LAW}
        )

    def test_normal_accepts_uncertified(self):
        levels = levels_for_certification("normal")
        assert TranslatorLevel.LAYMAN in levels
        assert TranslatorLevel.CERTIFIED not in levels

    def test_no_requirement_accepts_everyone(self):
        assert certification_from_job_for([]) is None
        assert levels_for_certification(None) == frozenset(TranslatorLevel)

    def test_labels(self):
        assert job_for_labels("both") == ["normal", "certified"]
        assert job_for_labels("yes") == ["certified"]
        assert job_for_labels(None) == []

    def test_gender_from_job_for(self):
        assert Gender.from_job_for(["male", "certified"]) == Gender.MALE
        assert Gender.from_job_for(["female"]) == Gender.FEMALE
        assert Gender.from_job_for(["normal"]) is None


class TestSessionTime:
    """Test SessionTime value object."""

    def test_from_timedelta(self):
        session = SessionTime.from_timedelta(timedelta(hours=1, minutes=5, seconds=9))
        assert str(session) == "1:05:09"
        assert session.to_display() == "1 tim 5 min"

    def test_negative_interval_clamps_to_zero(self):
        assert str(SessionTime.from_timedelta(timedelta(minutes=-5))) == "0:00:00"

    def test_parse(self):
        assert SessionTime.parse("2:30") == SessionTime(hours=2, minutes=30)
        assert SessionTime.parse(" 0:45:10 ") == SessionTime(0, 45, 10)

    @pytest.mark.parametrize("value", ["", "abc", "1:75", "1:2:3:4", "-1:00"])
    def test_parse_rejects_invalid(self, value):
        with pytest.raises(ValueError):
            SessionTime.parse(value)


class TestJob:
    """Test Job entity."""

    def test_requires_positive_duration(self):
        with pytest.raises(ValueError):
            make_job(duration=0)

    def test_requires_aware_due(self):
        with pytest.raises(ValueError):
            make_job(due=datetime(2026, 3, 12, 12, 0))

    def test_is_physical_only_without_phone(self):
        assert make_job(customer_physical_type=True, customer_phone_type=False).is_physical
        assert not make_job(customer_physical_type=True, customer_phone_type=True).is_physical

    def test_hours_until_due(self):
        job = make_job(due=NOW + timedelta(hours=30))
        assert job.hours_until_due(NOW) == pytest.approx(30)

    def test_reset_for_repost(self):
        job = make_job(status=JobStatus.ASSIGNED, cust_16_hour_email=1, cust_48_hour_email=1)
        later = NOW + timedelta(hours=1)
        job.reset_for_repost(later, later + timedelta(hours=16))

        assert job.status == JobStatus.PENDING
        assert job.created_at == later
        assert job.will_expire_at == later + timedelta(hours=16)
        assert job.cust_16_hour_email == 0
        assert job.cust_48_hour_email == 0


class TestTranslatorAssignment:
    """Test TranslatorAssignment entity."""

    def test_complete_closes_assignment(self):
        assignment = TranslatorAssignment(job_id=uuid4(), user_id=uuid4())
        closer = uuid4()
        assignment.complete(completed_by=closer, completed_at=NOW)

        assert assignment.is_active is False
        assert assignment.completed_by == closer

    def test_cannot_cancel_closed_assignment(self):
        assignment = TranslatorAssignment(job_id=uuid4(), user_id=uuid4(), cancel_at=NOW)
        with pytest.raises(ValueError):
            assignment.cancel(NOW)


class TestUser:
    """Test User entity."""

    def test_lives_in_is_case_insensitive(self):
        translator = make_translator(city=" Stockholm ")
        assert translator.lives_in("stockholm")
        assert not translator.lives_in("Göteborg")
        assert not translator.lives_in(None)

    def test_blank_city_never_matches(self):
        translator = make_translator(city=None)
        assert not translator.lives_in(None)
        assert not translator.lives_in("  ")
        assert not make_translator(city="").lives_in("")

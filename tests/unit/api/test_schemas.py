"""
Unit tests for API schemas.
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError as PydanticValidationError

from booking_service.api.schemas.booking import (
    BookingCreateRequest,
    BookingUpdateRequest,
    DistanceUpdateRequest,
    JobResponse,
)
from booking_service.api.schemas.common import parse_yes_no
from tests.factories import make_job


class TestYesNo:
    """Test cases for the yes/no form flags."""

    @pytest.mark.parametrize(
        "raw,expected",
        [("yes", True), ("YES", True), ("true", True), ("no", False), ("", False), (None, False)],
    )
    def test_parse_yes_no(self, raw, expected):
        assert parse_yes_no(raw) is expected

    def test_booleans_pass_through(self):
        assert parse_yes_no(True) is True

    def test_form_flags_accept_yes_no_strings(self):
        request = BookingCreateRequest(
            immediate="yes", customer_phone_type="no", customer_physical_type="yes"
        )
        assert request.immediate is True
        assert request.customer_phone_type is False
        assert request.customer_physical_type is True

    def test_distance_flags_default_to_false(self):
        request = DistanceUpdateRequest(distance="10 km")
        assert request.flagged is False
        assert request.manually_handled is False
        assert request.by_admin is False


class TestBookingUpdateRequest:
    """Test cases for BookingUpdateRequest."""

    def test_naive_due_rejected(self):
        with pytest.raises(PydanticValidationError):
            BookingUpdateRequest(due=datetime(2026, 3, 12, 10, 0))

    def test_aware_due_accepted(self):
        due = datetime(2026, 3, 12, 10, 0, tzinfo=timezone.utc)
        assert BookingUpdateRequest(due=due).due == due

    def test_unknown_status_rejected(self):
        with pytest.raises(PydanticValidationError):
            BookingUpdateRequest(status="archived")


class TestJobResponse:
    """Test cases for JobResponse."""

    def test_from_entity(self):
        job = make_job(reference="REF-1")
        response = JobResponse.from_entity(job)

        assert response.id == job.id
        assert response.status == job.status
        assert response.job_type == "paid"
        assert response.reference == "REF-1"

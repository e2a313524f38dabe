"""
Unit tests for confirmation, expiry, distance, resend and potential-job use cases.
"""

from datetime import timedelta
from uuid import uuid4

import pytest

from booking_service.application.services import texts
from booking_service.application.services.notification_dispatcher import DispatchReport
from booking_service.application.services.transactional_outbox import OutboxEventType
from booking_service.application.use_cases.confirm_booking import (
    ConfirmBookingRequest,
    ConfirmBookingUseCase,
)
from booking_service.application.use_cases.expire_pending_bookings import (
    ExpirePendingBookingsUseCase,
)
from booking_service.application.use_cases.get_potential_jobs import (
    GetPotentialJobsUseCase,
)
from booking_service.application.use_cases.resend_notifications import (
    ResendPushUseCase,
    ResendSmsUseCase,
)
from booking_service.application.use_cases.update_distance import (
    UpdateDistanceRequest,
    UpdateDistanceUseCase,
)
from booking_service.domain.entities.distance import Distance
from booking_service.domain.exceptions.conflict_error import ConflictError
from booking_service.domain.exceptions.not_found_error import NotFoundError
from booking_service.domain.exceptions.validation_error import ValidationError
from booking_service.domain.value_objects.job_status import JobStatus
from booking_service.domain.value_objects.notification_type import NotificationType
from tests.factories import NOW, make_customer, make_job, make_translator


class TestConfirmBookingUseCase:
    """Test cases for ConfirmBookingUseCase."""

    @pytest.fixture
    def use_case(
        self, mock_job_repository, mock_user_repository, mock_mailer, mock_outbox, transaction_service
    ):
        return ConfirmBookingUseCase(
            mock_job_repository, mock_user_repository, mock_mailer, mock_outbox, transaction_service
        )

    async def test_confirm_falls_back_to_profile_and_queues_broadcast(
        self, use_case, mock_job_repository, mock_user_repository, mock_mailer, mock_outbox
    ):
        customer = make_customer(city="Uppsala", address="Storgatan 2", instructions="Hiss")
        job = make_job(customer)
        mock_job_repository.get_by_id.return_value = job
        mock_user_repository.get_by_id.return_value = customer

        confirmed = await use_case.execute(
            ConfirmBookingRequest(job_id=job.id, user_email="faktura@example.com", reference="R-1")
        )

        assert confirmed.user_email == "faktura@example.com"
        assert confirmed.reference == "R-1"
        assert confirmed.address == "Storgatan 2"
        assert confirmed.instructions == "Hiss"
        assert confirmed.town == "Uppsala"
        event_type, aggregate_id, data = mock_outbox.create_event.call_args.args
        assert event_type == OutboxEventType.JOB_CREATED
        assert aggregate_id == str(job.id)
        assert data["job"]["customer_town"] == "Uppsala"
        assert data["customer_id"] == str(customer.id)
        mock_mailer.job_created.assert_called_once_with(confirmed, customer)

    async def test_request_location_wins(
        self, use_case, mock_job_repository, mock_user_repository
    ):
        customer = make_customer(city="Uppsala")
        job = make_job(customer)
        mock_job_repository.get_by_id.return_value = job
        mock_user_repository.get_by_id.return_value = customer

        confirmed = await use_case.execute(
            ConfirmBookingRequest(job_id=job.id, address="Kungsgatan 9", town="Lund")
        )

        assert confirmed.address == "Kungsgatan 9"
        assert confirmed.town == "Lund"


class TestExpirePendingBookingsUseCase:
    """Test cases for ExpirePendingBookingsUseCase."""

    @pytest.fixture
    def use_case(
        self, mock_job_repository, mock_user_repository, mock_notifier, clock, transaction_service
    ):
        return ExpirePendingBookingsUseCase(
            mock_job_repository, mock_user_repository, mock_notifier, clock, transaction_service
        )

    async def test_expires_and_notifies_customer(
        self, use_case, mock_job_repository, mock_user_repository, mock_notifier
    ):
        customer = make_customer()
        job = make_job(customer, will_expire_at=NOW - timedelta(minutes=1))
        mock_job_repository.find_expired_pending.return_value = [job]
        mock_user_repository.get_by_id.return_value = customer

        result = await use_case.execute()

        assert result.expired == [job.id]
        mock_job_repository.compare_and_set_status.assert_called_once_with(
            job.id, JobStatus.PENDING, JobStatus.TIMEDOUT
        )
        notified_job, notified_customer = mock_notifier.job_expired.call_args.args
        assert notified_job.status == JobStatus.TIMEDOUT
        assert notified_customer is customer

    async def test_job_accepted_meanwhile_is_skipped(
        self, use_case, mock_job_repository, mock_notifier
    ):
        job = make_job()
        mock_job_repository.find_expired_pending.return_value = [job]
        mock_job_repository.compare_and_set_status.return_value = False

        result = await use_case.execute()

        assert result.expired == []
        assert result.skipped == [job.id]
        mock_notifier.job_expired.assert_not_called()


class TestUpdateDistanceUseCase:
    """Test cases for UpdateDistanceUseCase."""

    @pytest.fixture
    def use_case(self, mock_job_repository, mock_distance_repository, transaction_service):
        return UpdateDistanceUseCase(
            mock_job_repository, mock_distance_repository, transaction_service
        )

    async def test_saves_distance_and_flags(
        self, use_case, mock_job_repository, mock_distance_repository
    ):
        job = make_job()
        mock_job_repository.get_by_id.return_value = job

        result = await use_case.execute(
            UpdateDistanceRequest(
                job_id=job.id,
                distance="12 km",
                time="0:25",
                admin_comments="Parkering saknas",
                session_time="1:5",
                flagged=True,
            )
        )

        assert result.distance == Distance(job_id=job.id, distance="12 km", time="0:25")
        assert result.job.flagged is True
        assert result.job.session_time == "1:05:00"
        assert result.job.admin_comments == "Parkering saknas"
        mock_job_repository.update.assert_called_once()

    async def test_flag_requires_comment(self, use_case, mock_job_repository):
        with pytest.raises(ValidationError) as exc_info:
            await use_case.execute(UpdateDistanceRequest(job_id=uuid4(), flagged=True))

        assert exc_info.value.errors == {"admin_comments": texts.FLAG_COMMENT_MESSAGE}
        mock_job_repository.get_by_id.assert_not_called()

    async def test_nothing_changed_skips_update(
        self, use_case, mock_job_repository, mock_distance_repository
    ):
        job = make_job()
        existing = Distance(job_id=job.id, distance="3 km")
        mock_job_repository.get_by_id.return_value = job
        mock_distance_repository.get_by_job_id.return_value = existing

        result = await use_case.execute(UpdateDistanceRequest(job_id=job.id))

        assert result.distance is existing
        mock_distance_repository.save.assert_not_called()
        mock_job_repository.update.assert_not_called()


class TestResendNotifications:
    """Test cases for the resend use cases."""

    async def test_resend_push(self, mock_job_repository, mock_notifier):
        job = make_job()
        mock_job_repository.get_by_id.return_value = job

        report = await ResendPushUseCase(mock_job_repository, mock_notifier).execute(job.id)

        assert isinstance(report, DispatchReport)
        assert report.intent == NotificationType.SUITABLE_JOB
        mock_notifier.broadcast_suitable_job.assert_called_once_with(job)

    async def test_resend_sms(self, mock_job_repository, mock_notifier):
        job = make_job()
        mock_job_repository.get_by_id.return_value = job
        mock_notifier.sms_eligible_translators.return_value = 3

        assert await ResendSmsUseCase(mock_job_repository, mock_notifier).execute(job.id) == 3

    async def test_resend_unknown_job(self, mock_job_repository, mock_notifier):
        with pytest.raises(NotFoundError):
            await ResendPushUseCase(mock_job_repository, mock_notifier).execute(uuid4())


class TestGetPotentialJobsUseCase:
    """Test cases for GetPotentialJobsUseCase."""

    async def test_lists_jobs_for_translator(self, mock_user_repository, mock_eligibility_engine):
        translator = make_translator()
        jobs = [make_job()]
        mock_user_repository.get_by_id.return_value = translator
        mock_eligibility_engine.find_potential_jobs.return_value = jobs

        use_case = GetPotentialJobsUseCase(mock_user_repository, mock_eligibility_engine)

        assert await use_case.execute(translator.id) == jobs

    async def test_customer_has_no_potential_jobs(
        self, mock_user_repository, mock_eligibility_engine
    ):
        customer = make_customer()
        mock_user_repository.get_by_id.return_value = customer

        with pytest.raises(ConflictError):
            await GetPotentialJobsUseCase(
                mock_user_repository, mock_eligibility_engine
            ).execute(customer.id)

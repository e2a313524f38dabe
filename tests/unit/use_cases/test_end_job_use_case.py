"""
Unit tests for EndJobUseCase and CustomerNotCallUseCase.
"""

from datetime import timedelta

import pytest

from booking_service.application.services.transactional_outbox import OutboxEventType
from booking_service.application.use_cases.end_job import (
    CustomerNotCallUseCase,
    EndJobUseCase,
)
from booking_service.domain.entities.translator_assignment import TranslatorAssignment
from booking_service.domain.value_objects.job_status import JobStatus
from tests.factories import NOW, make_customer, make_job, make_translator


@pytest.fixture
def parties(mock_user_repository, mock_job_repository, mock_assignment_repository):
    customer = make_customer()
    translator = make_translator()
    job = make_job(customer, status=JobStatus.STARTED, due=NOW - timedelta(minutes=75))
    assignment = TranslatorAssignment(job_id=job.id, user_id=translator.id)
    users = {customer.id: customer, translator.id: translator}
    mock_user_repository.get_by_id.side_effect = lambda user_id: users.get(user_id)
    mock_job_repository.get_by_id.return_value = job
    mock_assignment_repository.get_active_for_job.return_value = assignment
    return customer, translator, job, assignment


class TestEndJobUseCase:
    """Test cases for EndJobUseCase."""

    @pytest.fixture
    def use_case(
        self,
        mock_job_repository,
        mock_assignment_repository,
        mock_user_repository,
        mock_mailer,
        mock_outbox,
        clock,
        transaction_service,
    ):
        return EndJobUseCase(
            mock_job_repository,
            mock_assignment_repository,
            mock_user_repository,
            mock_mailer,
            mock_outbox,
            clock,
            transaction_service,
        )

    async def test_ends_started_session(
        self, use_case, parties, mock_mailer, mock_outbox
    ):
        customer, translator, job, assignment = parties

        result = await use_case.execute(job.id, customer.id)

        assert result.changed is True
        assert result.job.status == JobStatus.COMPLETED
        assert result.job.end_at == NOW
        assert result.job.session_time == "1:15:00"
        assert assignment.completed_at == NOW
        assert assignment.completed_by == customer.id
        mock_mailer.session_ended.assert_called_once_with(
            result.job, customer, translator, "1 tim 15 min"
        )
        event_type, _, data = mock_outbox.create_event.call_args.args
        assert event_type == OutboxEventType.SESSION_ENDED
        assert data["session_time"] == "1:15:00"
        assert data["translator_id"] == str(translator.id)

    @pytest.mark.parametrize(
        "status", [JobStatus.PENDING, JobStatus.ASSIGNED, JobStatus.COMPLETED]
    )
    async def test_noop_unless_started(
        self, use_case, parties, status, mock_job_repository, mock_mailer, mock_outbox
    ):
        customer, _, job, assignment = parties
        job.status = status

        result = await use_case.execute(job.id, customer.id)

        assert result.changed is False
        assert result.job.status == status
        assert assignment.is_active
        mock_job_repository.update.assert_not_called()
        mock_mailer.session_ended.assert_not_called()
        mock_outbox.create_event.assert_not_called()

    async def test_session_time_when_ended_early(self, use_case, parties):
        customer, _, job, _ = parties
        job.due = NOW + timedelta(minutes=20)

        result = await use_case.execute(job.id, customer.id)

        assert result.job.session_time == "0:20:00"


class TestCustomerNotCallUseCase:
    """Test cases for CustomerNotCallUseCase."""

    @pytest.fixture
    def use_case(
        self, mock_job_repository, mock_assignment_repository, clock, transaction_service
    ):
        return CustomerNotCallUseCase(
            mock_job_repository, mock_assignment_repository, clock, transaction_service
        )

    @pytest.mark.parametrize("status", [JobStatus.ASSIGNED, JobStatus.STARTED])
    async def test_marks_not_carried_out(self, use_case, parties, status):
        _, translator, job, assignment = parties
        job.status = status

        result = await use_case.execute(job.id, translator.id)

        assert result.changed is True
        assert result.job.status == JobStatus.NOT_CARRIED_OUT_CUSTOMER
        assert result.job.end_at == NOW
        assert assignment.completed_by == translator.id

    async def test_admin_caller_still_completes_for_assignee(self, use_case, parties):
        _, translator, job, assignment = parties

        await use_case.execute(job.id, make_translator().id)

        assert assignment.completed_by == translator.id

    async def test_noop_for_pending(self, use_case, parties, mock_job_repository):
        _, _, job, _ = parties
        job.status = JobStatus.PENDING

        result = await use_case.execute(job.id)

        assert result.changed is False
        mock_job_repository.update.assert_not_called()

"""
Unit tests for the accept job use cases.
"""

import pytest

from booking_service.application.services import texts
from booking_service.application.use_cases.accept_job import (
    AcceptJobByIdUseCase,
    AcceptJobUseCase,
)
from booking_service.domain.entities.translator_assignment import TranslatorAssignment
from booking_service.domain.exceptions.conflict_error import (
    ConflictError,
    JobAlreadyTakenError,
)
from booking_service.domain.value_objects.job_status import JobStatus
from tests.factories import NOW, make_customer, make_job, make_translator


class TestAcceptJobUseCase:
    """Test cases for AcceptJobUseCase."""

    @pytest.fixture
    def deps(
        self,
        mock_job_repository,
        mock_assignment_repository,
        mock_user_repository,
        mock_eligibility_engine,
        mock_mailer,
        mock_notifier,
        clock,
        transaction_service,
    ):
        return dict(
            job_repo=mock_job_repository,
            assignment_repo=mock_assignment_repository,
            user_repo=mock_user_repository,
            eligibility_engine=mock_eligibility_engine,
            mailer=mock_mailer,
            notifier=mock_notifier,
            clock=clock,
            transaction_service=transaction_service,
        )

    @pytest.fixture
    def parties(self, mock_user_repository, mock_job_repository):
        customer = make_customer()
        translator = make_translator()
        job = make_job(customer)
        users = {customer.id: customer, translator.id: translator}
        mock_user_repository.get_by_id.side_effect = lambda user_id: users.get(user_id)
        mock_job_repository.get_by_id.return_value = job
        return customer, translator, job

    async def test_accept_assigns_and_emails_customer(
        self, deps, parties, mock_assignment_repository, mock_mailer, mock_eligibility_engine
    ):
        customer, translator, job = parties
        other_job = make_job()
        mock_eligibility_engine.find_potential_jobs.return_value = [other_job]

        result = await AcceptJobUseCase(**deps).execute(job.id, translator.id)

        assert result.job.status == JobStatus.ASSIGNED
        assert result.potential_jobs == [other_job]
        assignment = mock_assignment_repository.create.call_args.args[0]
        assert isinstance(assignment, TranslatorAssignment)
        assert assignment.user_id == translator.id
        assert assignment.created_at == NOW
        mock_mailer.job_accepted.assert_called_once_with(result.job, customer, translator)

    async def test_second_accept_loses(
        self, deps, parties, mock_job_repository, mock_assignment_repository, transaction_service
    ):
        _, translator, job = parties
        mock_job_repository.compare_and_set_status.return_value = False

        with pytest.raises(JobAlreadyTakenError) as exc_info:
            await AcceptJobUseCase(**deps).execute(job.id, translator.id)

        assert exc_info.value.reason == texts.NOT_AVAILABLE_MESSAGE
        mock_assignment_repository.create.assert_not_called()
        assert transaction_service.rollbacks == 1

    async def test_translator_already_booked_at_that_time(
        self, deps, parties, mock_assignment_repository, mock_job_repository
    ):
        _, translator, job = parties
        mock_assignment_repository.translator_booked_at.return_value = True

        with pytest.raises(ConflictError) as exc_info:
            await AcceptJobUseCase(**deps).execute(job.id, translator.id)

        assert exc_info.value.reason == texts.ALREADY_BOOKED_MESSAGE
        mock_job_repository.compare_and_set_status.assert_not_called()

    async def test_customer_cannot_accept(self, deps, parties):
        customer, _, job = parties

        with pytest.raises(ConflictError):
            await AcceptJobUseCase(**deps).execute(job.id, customer.id)


class TestAcceptJobByIdUseCase:
    """Test cases for accepting from a notification."""

    @pytest.fixture
    def use_case(
        self,
        mock_job_repository,
        mock_assignment_repository,
        mock_user_repository,
        mock_eligibility_engine,
        mock_mailer,
        mock_notifier,
        clock,
        transaction_service,
    ):
        return AcceptJobByIdUseCase(
            mock_job_repository,
            mock_assignment_repository,
            mock_user_repository,
            mock_eligibility_engine,
            mock_mailer,
            mock_notifier,
            clock,
            transaction_service,
        )

    async def test_accept_pushes_customer_and_returns_message(
        self, use_case, mock_user_repository, mock_job_repository, mock_notifier
    ):
        customer = make_customer()
        translator = make_translator()
        job = make_job(customer)
        users = {customer.id: customer, translator.id: translator}
        mock_user_repository.get_by_id.side_effect = lambda user_id: users.get(user_id)
        mock_job_repository.get_by_id.return_value = job

        result = await use_case.execute(job.id, translator.id)

        mock_notifier.job_accepted.assert_called_once_with(result.job, customer)
        assert result.message.startswith("Du har nu accepterat")
        assert "Arabiska" in result.message

    async def test_taken_message_names_booking(
        self, use_case, mock_user_repository, mock_job_repository
    ):
        translator = make_translator()
        job = make_job()
        mock_user_repository.get_by_id.return_value = translator
        mock_job_repository.get_by_id.return_value = job
        mock_job_repository.compare_and_set_status.return_value = False

        with pytest.raises(JobAlreadyTakenError) as exc_info:
            await use_case.execute(job.id, translator.id)

        assert "har redan accepterats" in exc_info.value.reason

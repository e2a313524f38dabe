"""
Unit tests for BookingNotifier and BookingMailer.
"""

import pytest

from booking_service.application.services.booking_mailer import BookingMailer
from booking_service.application.services.booking_notifier import BookingNotifier
from booking_service.application.services.notification_data import job_for_display
from booking_service.application.services.notification_dispatcher import (
    NotificationDispatcher,
)
from booking_service.domain.entities.language import Language
from booking_service.domain.exceptions.gateway_error import GatewayError
from tests.factories import make_customer, make_job, make_translator


@pytest.fixture
def notifier(
    mock_push_gateway,
    mock_sms_gateway,
    clock,
    mock_eligibility_engine,
    mock_user_repository,
    mock_language_repository,
):
    dispatcher = NotificationDispatcher(
        mock_push_gateway, mock_sms_gateway, clock, "DigitalTolk", "+46000000000"
    )
    return BookingNotifier(
        dispatcher, mock_eligibility_engine, mock_user_repository, mock_language_repository
    )


class TestBookingNotifier:
    """Test cases for BookingNotifier."""

    async def test_broadcast_offers_job_to_eligible_translators(
        self,
        notifier,
        mock_eligibility_engine,
        mock_user_repository,
        mock_language_repository,
        mock_push_gateway,
    ):
        customer = make_customer(city="Uppsala", customer_type="government")
        job = make_job(customer)
        translators = [make_translator(), make_translator()]
        mock_eligibility_engine.find_eligible_translators.return_value = translators
        mock_user_repository.get_by_id.return_value = customer
        mock_language_repository.get_by_id.return_value = Language(
            id=job.from_language_id, name="Arabiska"
        )

        excluded = [translators[0].id]
        report = await notifier.broadcast_suitable_job(job, exclude_ids=excluded)

        assert report.immediate == 2
        mock_eligibility_engine.find_eligible_translators.assert_called_once_with(
            job, exclude_ids=excluded
        )
        tags, payload, send_after = mock_push_gateway.send.call_args.args
        assert len(tags) == 3
        assert send_after is None
        assert payload["data"]["language"] == "Arabiska"
        assert payload["data"]["customer_town"] == "Uppsala"
        assert payload["data"]["customer_type"] == "government"
        assert "Arabiska" in payload["contents"]["en"]

    async def test_job_accepted_goes_to_customer(self, notifier, mock_push_gateway):
        customer = make_customer()
        job = make_job(customer)

        await notifier.job_accepted(job, customer)

        tags, payload, _ = mock_push_gateway.send.call_args.args
        assert tags == [{"key": "email", "relation": "=", "value": customer.email.lower()}]
        assert payload["data"]["notification_type"] == "job_accepted"

    async def test_sms_uses_customer_city_for_physical_jobs(
        self, notifier, mock_eligibility_engine, mock_user_repository, mock_sms_gateway
    ):
        customer = make_customer(city="Lund")
        job = make_job(customer, customer_physical_type=True, customer_phone_type=False)
        mock_eligibility_engine.find_eligible_translators.return_value = [make_translator()]
        mock_user_repository.get_by_id.return_value = customer

        assert await notifier.sms_eligible_translators(job) == 1
        assert "Lund" in mock_sms_gateway.send.call_args.args[2]


class TestJobForDisplay:
    def test_labels(self):
        assert job_for_display(make_job(gender="female", certified="both")) == [
            "Kvinna",
            "Godkänd tolk",
            "Auktoriserad",
        ]
        assert job_for_display(make_job(certified="law")) == ["Rättstolk"]


class TestBookingMailer:
    """Test cases for BookingMailer."""

    async def test_customer_mail_prefers_booking_email(self, mock_mail_gateway):
        customer = make_customer(email="profile@example.com")
        job = make_job(customer, user_email="booking@example.com")

        sent = await BookingMailer(mock_mail_gateway).job_created(job, customer)

        assert sent is True
        to_address, to_name, subject, template, data = mock_mail_gateway.send.call_args.args
        assert to_address == "booking@example.com"
        assert template == "job-created"
        assert str(job.id) in subject

    async def test_session_ended_mails_both_parties(self, mock_mail_gateway):
        customer = make_customer()
        translator = make_translator()
        job = make_job(customer)

        await BookingMailer(mock_mail_gateway).session_ended(
            job, customer, translator, "1 tim 5 min"
        )

        calls = mock_mail_gateway.send.call_args_list
        assert [call.args[0] for call in calls] == [customer.email, translator.email]
        assert calls[0].args[4]["for_text"] == "faktura"
        assert calls[1].args[4]["for_text"] == "lön"
        assert calls[1].args[4]["session_time"] == "1 tim 5 min"

    async def test_gateway_failure_returns_false(self, mock_mail_gateway):
        mock_mail_gateway.send.side_effect = GatewayError("mail", "rejected", 422)
        customer = make_customer()

        assert await BookingMailer(mock_mail_gateway).job_created(make_job(customer), customer) is False

"""
Unit tests for NotificationDispatcher.
"""

import pytest

from booking_service.application.interfaces.gateways import (
    PushDeliveryResult,
    SmsDeliveryResult,
)
from booking_service.application.services.notification_dispatcher import (
    NotificationDispatcher,
    recipient_filter,
)
from booking_service.domain.exceptions.gateway_error import GatewayError
from booking_service.domain.value_objects.notification_type import NotificationType
from tests.factories import make_job, make_translator


@pytest.fixture
def dispatcher(mock_push_gateway, mock_sms_gateway, clock):
    return NotificationDispatcher(
        mock_push_gateway,
        mock_sms_gateway,
        clock,
        title="DigitalTolk",
        sms_from_number="+46000000000",
    )


class TestRecipientFilter:
    def test_or_chain_of_lowercased_emails(self):
        users = [make_translator(email="A@Example.com"), make_translator(email="b@example.com")]

        assert recipient_filter(users) == [
            {"key": "email", "relation": "=", "value": "a@example.com"},
            {"operator": "OR"},
            {"key": "email", "relation": "=", "value": "b@example.com"},
        ]


class TestNotificationDispatcher:
    """Test cases for NotificationDispatcher."""

    def test_opted_out_users_are_suppressed(self, dispatcher):
        muted = make_translator(not_get_notification=True)
        no_emergency = make_translator(not_get_emergency=True)
        regular = make_translator()
        recipients = [muted, no_emergency, regular]

        immediate_job = make_job(immediate=True)
        scheduled_job = make_job()

        assert dispatcher.filter_recipients(
            immediate_job, recipients, NotificationType.SUITABLE_JOB
        ) == [regular]
        assert dispatcher.filter_recipients(
            scheduled_job, recipients, NotificationType.SUITABLE_JOB
        ) == [no_emergency, regular]

    def test_night_time_partition(self, dispatcher, clock):
        sleeper = make_translator(not_get_nighttime=True)
        owl = make_translator()

        assert dispatcher.partition([sleeper, owl]) == ([sleeper, owl], [])
        clock.night = True
        assert dispatcher.partition([sleeper, owl]) == ([owl], [sleeper])

    def test_payload_sound_for_emergency_booking(self, dispatcher):
        payload = dispatcher.build_payload(
            make_job(immediate=True), NotificationType.SUITABLE_JOB, "Ny bokning", {"a": 1}
        )

        assert payload["android_sound"] == "emergency_booking"
        assert payload["ios_sound"] == "emergency_booking.mp3"
        assert payload["data"] == {"a": 1, "notification_type": "suitable_job"}
        assert payload["title"] == {"en": "DigitalTolk"}

    def test_payload_sound_for_other_intents(self, dispatcher):
        payload = dispatcher.build_payload(make_job(), NotificationType.JOB_EXPIRED, "Utgått")
        assert payload["android_sound"] == "default"

    async def test_dispatch_sends_delayed_batch_at_business_time(
        self, dispatcher, clock, mock_push_gateway
    ):
        clock.night = True
        sleeper = make_translator(not_get_nighttime=True)
        owl = make_translator()

        report = await dispatcher.dispatch(
            make_job(), [sleeper, owl], NotificationType.SUITABLE_JOB, "Ny bokning"
        )

        assert report.immediate == 1
        assert report.delayed == 1
        assert report.attempted == 2
        assert mock_push_gateway.send.call_count == 2
        first, second = mock_push_gateway.send.call_args_list
        assert first.args[2] is None
        assert second.args[2] == clock.next_business_time()

    async def test_dispatch_with_no_recipients_sends_nothing(self, dispatcher, mock_push_gateway):
        report = await dispatcher.dispatch(
            make_job(), [], NotificationType.JOB_ACCEPTED, "Accepterad"
        )

        assert report.attempted == 0
        mock_push_gateway.send.assert_not_called()

    async def test_gateway_failure_is_reported_not_raised(self, dispatcher, mock_push_gateway):
        mock_push_gateway.send.side_effect = GatewayError("push", "boom", 500)

        report = await dispatcher.dispatch(
            make_job(), [make_translator()], NotificationType.JOB_ACCEPTED, "Accepterad"
        )

        assert report.failed_batches == 1

    async def test_unsuccessful_delivery_counts_as_failure(self, dispatcher, mock_push_gateway):
        mock_push_gateway.send.return_value = PushDeliveryResult(
            success=False, error_message="All included players are not subscribed"
        )

        report = await dispatcher.dispatch(
            make_job(), [make_translator()], NotificationType.JOB_ACCEPTED, "Accepterad"
        )

        assert report.failed_batches == 1

    async def test_send_sms_skips_translators_without_mobile(self, dispatcher, mock_sms_gateway):
        with_mobile = make_translator(mobile="+46701111111")
        without_mobile = make_translator(mobile=None)

        attempted = await dispatcher.send_sms(make_job(), [with_mobile, without_mobile])

        assert attempted == 1
        mock_sms_gateway.send.assert_called_once()
        from_number, to_number, _ = mock_sms_gateway.send.call_args.args
        assert from_number == "+46000000000"
        assert to_number == "+46701111111"

    async def test_sms_failure_does_not_stop_fan_out(self, dispatcher, mock_sms_gateway):
        mock_sms_gateway.send.side_effect = [
            GatewayError("sms", "down"),
            SmsDeliveryResult(success=True, message_id="SM2", status="queued"),
        ]
        translators = [make_translator(), make_translator()]

        assert await dispatcher.send_sms(make_job(), translators) == 2
        assert mock_sms_gateway.send.call_count == 2

    def test_physical_sms_mentions_town(self, dispatcher):
        job = make_job(customer_physical_type=True, customer_phone_type=False)
        assert "Uppsala" in dispatcher.sms_text(job, "Uppsala")

"""
Unit tests for outbound provider gateways.
"""

import base64
import json
from datetime import datetime, timezone
from urllib.parse import parse_qs

import httpx
import pytest

from booking_service.application.services.notification_dispatcher import NotificationDispatcher
from booking_service.domain.exceptions.gateway_error import GatewayError
from booking_service.domain.value_objects.notification_type import NotificationType
from booking_service.infrastructure.gateways import (
    HttpMailGateway,
    OneSignalPushGateway,
    TwilioSmsGateway,
)
from tests.factories import FakeClock, make_job, make_translator


class RecordingHandler:
    """httpx mock handler remembering the last request."""

    def __init__(self, status_code=200, payload=None, exc=None):
        self.status_code = status_code
        self.payload = payload if payload is not None else {}
        self.exc = exc
        self.request = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.request = request
        if self.exc is not None:
            raise self.exc
        return httpx.Response(self.status_code, json=self.payload)


def html_page(request: httpx.Request) -> httpx.Response:
    return httpx.Response(
        200, text="<html>Maintenance</html>", headers={"content-type": "text/html"}
    )


class TestOneSignalPushGateway:
    """Test cases for the push gateway."""

    async def test_send_builds_provider_body(self):
        handler = RecordingHandler(payload={"id": "abc", "recipients": 2})
        gateway = OneSignalPushGateway(
            app_id="app-1",
            api_key="key-1",
            api_url="https://push.test/notifications",
            transport=httpx.MockTransport(handler),
        )
        tags = [{"key": "email", "relation": "=", "value": "a@example.com"}]
        send_after = datetime(2026, 3, 11, 7, 0, tzinfo=timezone.utc)

        result = await gateway.send(tags, {"contents": {"en": "Hej"}}, send_after)

        assert result.success is True
        assert result.notification_id == "abc"
        assert result.recipients == 2
        body = json.loads(handler.request.content)
        assert body["app_id"] == "app-1"
        assert body["tags"] == tags
        assert body["contents"] == {"en": "Hej"}
        assert body["send_after"] == "2026-03-11 07:00:00 GMT+0000"
        assert handler.request.headers["Authorization"] == "Basic key-1"

    async def test_provider_errors_mark_delivery_failed(self):
        handler = RecordingHandler(payload={"id": "", "errors": ["No subscribers"]})
        gateway = OneSignalPushGateway(
            app_id="app-1", api_key="key-1", transport=httpx.MockTransport(handler)
        )

        result = await gateway.send([], {})

        assert result.success is False
        assert "No subscribers" in result.error_message
        assert "send_after" not in json.loads(handler.request.content)

    async def test_http_error_raises_gateway_error(self):
        handler = RecordingHandler(status_code=503, payload={"errors": ["down"]})
        gateway = OneSignalPushGateway(
            app_id="app-1", api_key="key-1", transport=httpx.MockTransport(handler)
        )

        with pytest.raises(GatewayError) as exc_info:
            await gateway.send([], {})

        assert exc_info.value.status_code == 503
        assert exc_info.value.gateway == "push"

    async def test_timeout_raises_gateway_error(self):
        handler = RecordingHandler(exc=httpx.ReadTimeout("slow"))
        gateway = OneSignalPushGateway(
            app_id="app-1", api_key="key-1", transport=httpx.MockTransport(handler)
        )

        with pytest.raises(GatewayError) as exc_info:
            await gateway.send([], {})

        assert exc_info.value.status_code == 408

    async def test_non_json_reply_raises_gateway_error(self):
        gateway = OneSignalPushGateway(
            app_id="app-1", api_key="key-1", transport=httpx.MockTransport(html_page)
        )

        with pytest.raises(GatewayError) as exc_info:
            await gateway.send([], {})

        assert exc_info.value.gateway == "push"
        assert exc_info.value.status_code == 200


class TestTwilioSmsGateway:
    """Test cases for the SMS gateway."""

    async def test_send_posts_form_with_basic_auth(self):
        handler = RecordingHandler(status_code=201, payload={"sid": "SM1", "status": "queued"})
        gateway = TwilioSmsGateway(
            account_sid="AC1",
            auth_token="secret",
            base_url="https://sms.test/2010-04-01",
            transport=httpx.MockTransport(handler),
        )

        result = await gateway.send("+46000000000", "+46701234567", "Ny bokning")

        assert result.message_id == "SM1"
        assert result.status == "queued"
        assert handler.request.url.path == "/2010-04-01/Accounts/AC1/Messages.json"
        form = parse_qs(handler.request.content.decode())
        assert form == {
            "From": ["+46000000000"],
            "To": ["+46701234567"],
            "Body": ["Ny bokning"],
        }
        expected = base64.b64encode(b"AC1:secret").decode()
        assert handler.request.headers["Authorization"] == f"Basic {expected}"

    async def test_missing_credentials(self):
        gateway = TwilioSmsGateway(account_sid="AC1")
        gateway.auth_token = None

        with pytest.raises(GatewayError):
            await gateway.send("+46000000000", "+46701234567", "Hej")

    async def test_non_json_reply_raises_gateway_error(self):
        gateway = TwilioSmsGateway(
            account_sid="AC1", auth_token="secret", transport=httpx.MockTransport(html_page)
        )

        with pytest.raises(GatewayError) as exc_info:
            await gateway.send("+46000000000", "+46701234567", "Hej")

        assert exc_info.value.gateway == "sms"


class TestHttpMailGateway:
    """Test cases for the mail gateway."""

    async def test_send_posts_template(self):
        handler = RecordingHandler(status_code=202)
        gateway = HttpMailGateway(
            api_url="https://mail.test/send",
            api_key="mail-key",
            from_address="noreply@example.com",
            from_name="DigitalTolk",
            transport=httpx.MockTransport(handler),
        )

        await gateway.send("a@example.com", "Anna", "Ämne", "job-created", {"user": "Anna"})

        body = json.loads(handler.request.content)
        assert body["to"] == [{"email": "a@example.com", "name": "Anna"}]
        assert body["template"] == "job-created"
        assert body["data"] == {"user": "Anna"}
        assert handler.request.headers["Authorization"] == "Bearer mail-key"

    async def test_rejected_mail_raises(self):
        handler = RecordingHandler(status_code=422, payload={"error": "bad address"})
        gateway = HttpMailGateway(api_key="k", transport=httpx.MockTransport(handler))

        with pytest.raises(GatewayError):
            await gateway.send("bad", "Anna", "Ämne", "job-created", {})


class TestDispatchWithBrokenProvider:
    """A provider answering with a web page must not break the fan-out."""

    @pytest.fixture
    def dispatcher(self):
        transport = httpx.MockTransport(html_page)
        return NotificationDispatcher(
            OneSignalPushGateway(app_id="app-1", api_key="key-1", transport=transport),
            TwilioSmsGateway(account_sid="AC1", auth_token="secret", transport=transport),
            FakeClock(),
            title="DigitalTolk",
            sms_from_number="+46000000000",
        )

    async def test_push_failure_is_counted(self, dispatcher):
        report = await dispatcher.dispatch(
            make_job(), [make_translator()], NotificationType.SUITABLE_JOB, "Ny bokning"
        )

        assert report.failed_batches == 1

    async def test_sms_failure_is_logged_not_raised(self, dispatcher):
        attempted = await dispatcher.send_sms(make_job(town="Uppsala"), [make_translator()])

        assert attempted == 1

"""
SMS gateway for the Twilio Messages API.
"""

from typing import Optional

from booking_service.application.interfaces.gateways import (
    SmsDeliveryResult,
    SmsGatewayInterface,
)
from booking_service.config.logging import get_logger
from booking_service.config.settings import settings
from booking_service.domain.exceptions.gateway_error import GatewayError
from booking_service.infrastructure.external.http_client import HTTPClient

logger = get_logger(__name__)


class TwilioSmsGateway(SmsGatewayInterface):
    """Sends text messages through a Twilio account."""

    def __init__(
        self,
        account_sid: Optional[str] = None,
        auth_token: Optional[str] = None,
        base_url: Optional[str] = None,
        transport=None,
    ):
        self.account_sid = account_sid or settings.SMS_ACCOUNT_SID
        self.auth_token = auth_token or settings.SMS_AUTH_TOKEN
        self.base_url = base_url or settings.SMS_API_BASE_URL
        self.transport = transport

    async def send(self, from_number: str, to_number: str, text: str) -> SmsDeliveryResult:
        if not self.account_sid or not self.auth_token:
            raise GatewayError("sms", "SMS credentials are not configured")

        url = f"{self.base_url}/Accounts/{self.account_sid}/Messages.json"
        async with HTTPClient(
            "sms", auth=(self.account_sid, self.auth_token), transport=self.transport
        ) as client:
            response = await client.post_form(
                url, {"From": from_number, "To": to_number, "Body": text}
            )
            data = client.json_body(response)

        logger.info(
            "SMS sent",
            to_number=to_number,
            message_id=data.get("sid"),
            status=data.get("status"),
        )
        return SmsDeliveryResult(
            success=True, message_id=data.get("sid"), status=data.get("status")
        )

"""
Transactional mail gateway for a templated HTTP mail API.
"""

from typing import Any, Dict, Optional

from booking_service.application.interfaces.gateways import MailGatewayInterface
from booking_service.config.logging import get_logger
from booking_service.config.settings import settings
from booking_service.infrastructure.external.http_client import HTTPClient

logger = get_logger(__name__)


class HttpMailGateway(MailGatewayInterface):
    """Posts template key and data to the mail provider, which renders the email."""

    def __init__(
        self,
        api_url: Optional[str] = None,
        api_key: Optional[str] = None,
        from_address: Optional[str] = None,
        from_name: Optional[str] = None,
        transport=None,
    ):
        self.api_url = api_url or settings.MAIL_API_URL
        self.api_key = api_key or settings.MAIL_API_KEY
        self.from_address = from_address or settings.MAIL_FROM_ADDRESS
        self.from_name = from_name or settings.MAIL_FROM_NAME
        self.transport = transport

    async def send(
        self,
        to_address: str,
        to_name: str,
        subject: str,
        template_key: str,
        template_data: Dict[str, Any],
    ) -> None:
        body = {
            "from": {"email": self.from_address, "name": self.from_name},
            "to": [{"email": to_address, "name": to_name}],
            "subject": subject,
            "template": template_key,
            "data": template_data,
        }
        async with HTTPClient("mail", transport=self.transport) as client:
            await client.post_json(
                self.api_url, body, headers={"Authorization": f"Bearer {self.api_key}"}
            )
        logger.debug("Mail accepted by provider", template=template_key, to_address=to_address)

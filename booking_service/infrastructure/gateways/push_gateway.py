"""
Push notification gateway for a OneSignal compatible REST API.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from booking_service.application.interfaces.gateways import (
    PushDeliveryResult,
    PushGatewayInterface,
)
from booking_service.config.logging import get_logger
from booking_service.config.settings import settings
from booking_service.infrastructure.external.http_client import HTTPClient

logger = get_logger(__name__)

SEND_AFTER_FORMAT = "%Y-%m-%d %H:%M:%S GMT%z"


class OneSignalPushGateway(PushGatewayInterface):
    """Sends notifications to devices tagged with the recipients' emails."""

    def __init__(
        self,
        app_id: Optional[str] = None,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport=None,
    ):
        self.app_id = app_id or settings.PUSH_APP_ID
        self.api_key = api_key or settings.PUSH_API_KEY
        self.api_url = api_url or settings.PUSH_API_URL
        self.timeout = timeout or settings.PUSH_REQUEST_TIMEOUT
        self.transport = transport

    async def send(
        self,
        recipient_filter: List[Dict[str, str]],
        payload: Dict[str, Any],
        send_after: Optional[datetime] = None,
    ) -> PushDeliveryResult:
        body = {**payload, "app_id": self.app_id, "tags": recipient_filter}
        if send_after is not None:
            body["send_after"] = send_after.strftime(SEND_AFTER_FORMAT)

        logger.info(
            "Push request",
            recipients=(len(recipient_filter) + 1) // 2,
            send_after=body.get("send_after"),
            notification_type=payload.get("data", {}).get("notification_type"),
        )

        async with HTTPClient("push", self.timeout, transport=self.transport) as client:
            response = await client.post_json(
                self.api_url,
                body,
                headers={
                    "Content-Type": "application/json",
                    "Authorization": f"Basic {self.api_key}",
                },
            )
            data = client.json_body(response)

        logger.info("Push response", status_code=response.status_code, response=data)

        errors = data.get("errors")
        return PushDeliveryResult(
            success=not errors,
            notification_id=data.get("id"),
            recipients=data.get("recipients", 0),
            error_message=str(errors) if errors else None,
        )

"""
Outbound gateway interfaces for dependency inversion.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass
class PushDeliveryResult:
    """Response from the push provider."""

    success: bool
    notification_id: Optional[str] = None
    recipients: int = 0
    error_message: Optional[str] = None


@dataclass
class SmsDeliveryResult:
    """Response from the SMS provider."""

    success: bool
    message_id: Optional[str] = None
    status: Optional[str] = None


class PushGatewayInterface(ABC):
    """Push notification provider."""

    @abstractmethod
    async def send(
        self,
        recipient_filter: List[Dict[str, str]],
        payload: Dict[str, Any],
        send_after: Optional[datetime] = None,
    ) -> PushDeliveryResult:
        """Deliver a payload to devices matching the recipient filter."""
        pass


class SmsGatewayInterface(ABC):
    """SMS provider."""

    @abstractmethod
    async def send(self, from_number: str, to_number: str, text: str) -> SmsDeliveryResult:
        """Send a text message."""
        pass


class MailGatewayInterface(ABC):
    """Transactional email provider."""

    @abstractmethod
    async def send(
        self,
        to_address: str,
        to_name: str,
        subject: str,
        template_key: str,
        template_data: Dict[str, Any],
    ) -> None:
        """Send a templated email."""
        pass


class ClockInterface(ABC):
    """Business clock for the booking market's timezone."""

    @abstractmethod
    def now(self) -> datetime:
        """Current timezone-aware time."""
        pass

    @abstractmethod
    def localize(self, value: datetime) -> datetime:
        """Interpret a naive wall-clock time in the business timezone, as UTC."""
        pass

    @abstractmethod
    def is_night_time(self) -> bool:
        """Whether notifications would arrive outside business hours."""
        pass

    @abstractmethod
    def next_business_time(self) -> datetime:
        """The next moment delayed notifications may be delivered."""
        pass

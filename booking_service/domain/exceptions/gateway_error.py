"""
Outbound delivery exceptions.
"""

from typing import Optional


class GatewayError(Exception):
    """Raised when a push, SMS or mail provider call fails."""

    def __init__(self, gateway: str, message: str, status_code: Optional[int] = None):
        self.gateway = gateway
        self.status_code = status_code
        self.message = message
        detail = f" ({status_code})" if status_code else ""
        super().__init__(f"{gateway} gateway error{detail}: {message}")

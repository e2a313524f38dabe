"""
HTTP client utilities for outbound provider calls.
"""

import time
from typing import Any, Dict, Optional, Tuple

import httpx

from booking_service.config.logging import get_logger
from booking_service.domain.exceptions.gateway_error import GatewayError

logger = get_logger(__name__)


class HTTPClient:
    """HTTP client for push, SMS and mail provider calls."""

    def __init__(
        self,
        gateway: str,
        timeout: float = 10.0,
        auth: Optional[Tuple[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.gateway = gateway
        self.timeout = timeout
        self.auth = auth
        self.transport = transport
        self.client = None

    async def __aenter__(self):
        """Async context manager entry."""
        self.client = httpx.AsyncClient(
            timeout=self.timeout, auth=self.auth, transport=self.transport
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        if self.client:
            await self.client.aclose()

    async def post_json(
        self, url: str, data: Dict[str, Any], headers: Optional[Dict[str, str]] = None
    ) -> httpx.Response:
        """POST a JSON body."""
        return await self._request("POST", url, headers=headers, json=data)

    async def post_form(
        self, url: str, data: Dict[str, str], headers: Optional[Dict[str, str]] = None
    ) -> httpx.Response:
        """POST a form-encoded body."""
        return await self._request("POST", url, headers=headers, data=data)

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        start_time = time.time()

        try:
            response = await self.client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            logger.error(
                "HTTP request timed out",
                gateway=self.gateway,
                method=method,
                url=url,
                response_time_ms=(time.time() - start_time) * 1000,
            )
            raise GatewayError(self.gateway, "Request timeout", 408) from e
        except httpx.RequestError as e:
            logger.error(
                "HTTP request failed",
                gateway=self.gateway,
                method=method,
                url=url,
                error=str(e),
                response_time_ms=(time.time() - start_time) * 1000,
            )
            raise GatewayError(self.gateway, f"Network error: {e}") from e

        logger.debug(
            "HTTP request completed",
            gateway=self.gateway,
            method=method,
            url=url,
            status_code=response.status_code,
            response_time_ms=(time.time() - start_time) * 1000,
        )

        if response.status_code >= 400:
            raise GatewayError(self.gateway, response.text, response.status_code)
        return response

    def json_body(self, response: httpx.Response) -> Dict[str, Any]:
        """Decode a provider reply; anything but a JSON object is a gateway failure."""
        try:
            data = response.json()
        except ValueError as e:
            logger.error(
                "Provider reply is not JSON",
                gateway=self.gateway,
                status_code=response.status_code,
                content_type=response.headers.get("content-type"),
            )
            raise GatewayError(self.gateway, "Invalid response body", response.status_code) from e

        if not isinstance(data, dict):
            raise GatewayError(self.gateway, "Invalid response body", response.status_code)
        return data

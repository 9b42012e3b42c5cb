"""HTTP transport for the Share web service.

Wraps an ``httpx.AsyncClient`` so that every call is a JSON POST carrying
the headers the Share mobile app sends. HTTP status codes are not
interpreted: the service reports login and session failures in the body,
so the raw text is always handed back to the caller.
"""
from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Any, Dict, Optional, Union

import httpx

from share_client.metrics import share_api_call_latency_seconds, share_api_call_total
from share_client.utils.error_handling import HttpError
from share_client.utils.logging_utils import redact_sensitive_data

logger = logging.getLogger(__name__)


class KnownShareServers(str, Enum):
    """Base URLs of the regional Share deployments."""

    US = "https://share2.dexcom.com"
    NON_US = "https://shareous1.dexcom.com"


# From the Share iOS app, via @bewest and @shanselman:
# https://github.com/bewest/share2nightscout-bridge
SHARE_USER_AGENT = "Dexcom Share/3.0.2.11 CFNetwork/711.2.23 Darwin/14.0.0"
SHARE_APPLICATION_ID = "d89443d2-327c-4a6f-89e5-496bbb0317db"
SHARE_LOGIN_PATH = "/ShareWebServices/Services/General/LoginPublisherAccountByName"
SHARE_LATEST_GLUCOSE_PATH = "/ShareWebServices/Services/Publisher/ReadPublisherLatestGlucoseValues"

DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
    "User-Agent": SHARE_USER_AGENT,
}


class ShareTransport:
    """Issues POST requests to the Share service and returns the raw body text."""

    def __init__(self, http_client: Optional[httpx.AsyncClient] = None, *, timeout: float = 30.0) -> None:
        self._owns_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient(timeout=timeout)

    async def __aenter__(self) -> "ShareTransport":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTPX client if this transport created it."""
        if self._owns_client:
            await self.http_client.aclose()

    async def post(
        self,
        url: Union[str, httpx.URL],
        json: Optional[Dict[str, Any]] = None,
        *,
        endpoint: str = "unknown",
        correlation_id: Optional[str] = None,
    ) -> str:
        """
        POST to ``url`` with an optional JSON body.

        :param url: Absolute request URL, including any query parameters
        :param json: Optional JSON body
        :param endpoint: Short endpoint name used for logs and metrics
        :param correlation_id: Identifier threaded through the logs of one fetch
        :return: The response body as text
        :raises HttpError: On any transport-level failure
        """
        url = httpx.URL(url)
        logger.info(
            "Share API request",
            extra={
                "log_type": "request",
                "correlation_id": correlation_id,
                "endpoint": endpoint,
                "url": str(url.copy_with(query=None)),
                "params": redact_sensitive_data(dict(url.params)),
                "body": redact_sensitive_data(json) if json else None,
            }
        )
        start_time = time.monotonic()
        status = "error"
        try:
            response = await self.http_client.post(url, json=json, headers=DEFAULT_HEADERS)
            status = "success"
        except httpx.HTTPError as exc:
            logger.error(
                "Share API request failed",
                extra={
                    "log_type": "request_error",
                    "correlation_id": correlation_id,
                    "endpoint": endpoint,
                    "error": str(exc),
                }
            )
            raise HttpError(exc) from exc
        finally:
            latency = time.monotonic() - start_time
            share_api_call_latency_seconds.labels(endpoint=endpoint).observe(latency)
            share_api_call_total.labels(endpoint=endpoint, status=status).inc()

        logger.info(
            "Share API response",
            extra={
                "log_type": "response",
                "correlation_id": correlation_id,
                "endpoint": endpoint,
                "status_code": response.status_code,
                "latency": latency,
            }
        )
        return response.text

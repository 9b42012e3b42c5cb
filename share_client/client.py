"""Async client for the Share glucose web service.

This client logs in with Share account credentials, keeps the session id in
memory, and fetches the latest glucose readings, re-authenticating a bounded
number of times when the service answers with an error object instead of data.
"""
from __future__ import annotations

import logging
import uuid
from typing import List, Optional, Union

import httpx

from share_client.auth.session import SessionManager, build_share_url
from share_client.metrics import share_reauth_total
from share_client.models.glucose import ShareGlucose
from share_client.transport import SHARE_LATEST_GLUCOSE_PATH, KnownShareServers, ShareTransport
from share_client.utils.config import Settings, get_settings, resolve_share_server
from share_client.utils.error_handling import DataError, ShapeMismatchError
from share_client.utils.pipeline import decode_readings

logger = logging.getLogger(__name__)

__all__ = [
    "ShareClient",
    "MAX_REAUTH_ATTEMPTS",
    "FETCH_WINDOW_MINUTES",
]

MAX_REAUTH_ATTEMPTS = 2
# Share only serves the last 24 hours
FETCH_WINDOW_MINUTES = 1440


class ShareClient:
    """High-level async client for the Share publisher endpoints."""

    def __init__(
        self,
        username: str,
        password: str,
        share_server: Union[str, KnownShareServers] = KnownShareServers.US,
        *,
        max_reauth_attempts: int = MAX_REAUTH_ATTEMPTS,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
    ) -> None:
        self.username = username
        self.share_server = resolve_share_server(share_server)
        self.max_reauth_attempts = max_reauth_attempts
        self.transport = ShareTransport(http_client, timeout=timeout)
        self.session = SessionManager(username, password, self.share_server, self.transport)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, **kwargs) -> "ShareClient":
        """Build a client from Settings; raises ValueError if credentials are missing."""
        settings = settings or get_settings()
        if not settings.share_username or settings.share_password is None:
            raise ValueError("share_username and share_password must be configured")
        return cls(
            settings.share_username,
            settings.share_password.get_secret_value(),
            settings.share_server,
            max_reauth_attempts=settings.max_reauth_attempts,
            timeout=settings.request_timeout_seconds,
            **kwargs,
        )

    # ---------------------- async context manager helpers ------------------
    async def __aenter__(self) -> "ShareClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        await self.close()

    async def close(self) -> None:
        """Close underlying HTTPX client."""
        await self.transport.close()

    # ---------------------- glucose readings -------------------------------
    def latest_glucose_url(self, token: str, n: int) -> httpx.URL:
        return build_share_url(
            self.share_server,
            SHARE_LATEST_GLUCOSE_PATH,
            params={"sessionId": token, "minutes": FETCH_WINDOW_MINUTES, "maxCount": n},
        )

    async def fetch_last(self, n: int, max_retries: Optional[int] = None) -> List[ShareGlucose]:
        """
        Fetch up to ``n`` of the most recent readings from the last 24 hours.

        When the response is not a JSON array the session is assumed to have
        expired: the token is dropped and the login+fetch cycle repeated, at
        most ``max_retries`` times.

        :param n: Maximum number of readings to request
        :param max_retries: Re-authentication budget, defaults to ``max_reauth_attempts``
        :return: Readings in the order the service returned them
        :raises HttpError: Transport failure on login or fetch
        :raises LoginError: The service rejected the credentials
        :raises DataError: A record was malformed, or the response stayed undecodable
        :raises DateError: A record's timestamp could not be parsed
        :raises FetchError: The server URL is malformed
        """
        remaining = self.max_reauth_attempts if max_retries is None else max_retries
        correlation_id = str(uuid.uuid4())
        while True:
            token = await self.session.ensure_token(correlation_id)
            url = self.latest_glucose_url(token, n)
            body = await self.transport.post(url, endpoint="latest_glucose", correlation_id=correlation_id)
            try:
                readings = decode_readings(body)
            except ShapeMismatchError as exc:
                if remaining <= 0:
                    raise DataError(
                        f"Failed to decode SGVs as array after trying to reauth: {body}",
                        response_body=body,
                    ) from exc
                remaining -= 1
                share_reauth_total.inc()
                logger.warning(
                    "Share response was not a reading array, re-authenticating",
                    extra={
                        "log_type": "reauth",
                        "correlation_id": correlation_id,
                        "remaining": remaining,
                    }
                )
                await self.session.invalidate(token)
                continue

            logger.info(
                "Fetched Share readings",
                extra={"log_type": "fetch_success", "correlation_id": correlation_id, "count": len(readings)}
            )
            return readings

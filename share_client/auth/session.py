"""
Share session management.

The Share service issues an opaque session id in exchange for account
credentials. The id is cached in memory only; there is no expiry timer, the
fetch path invalidates it when the service stops accepting it.
"""
import asyncio
import json
import logging
from typing import Optional

import httpx

from share_client.transport import SHARE_APPLICATION_ID, SHARE_LOGIN_PATH, ShareTransport
from share_client.utils.error_handling import FetchError, LoginError

logger = logging.getLogger(__name__)


def build_share_url(share_server: str, path: str, params: Optional[dict] = None) -> httpx.URL:
    """
    Join a Share base URL and path, failing with FetchError if the result is not a usable URL.
    """
    try:
        url = httpx.URL(share_server.rstrip("/") + path, params=params)
    except (httpx.InvalidURL, TypeError) as exc:
        raise FetchError(f"Invalid Share server URL: {share_server!r}") from exc
    if url.scheme not in ("http", "https") or not url.host:
        raise FetchError(f"Invalid Share server URL: {share_server!r}")
    return url


def parse_login_response(body: str) -> str:
    """
    Interpret a LoginPublisherAccountByName response body.

    Success is a JSON-encoded string containing the session id; failure is
    a JSON object whose ``Code`` names the reason.

    Raises:
        LoginError: If the body is not a JSON string
    """
    try:
        decoded = json.loads(body)
    except (TypeError, ValueError) as exc:
        raise LoginError("unknown") from exc
    if isinstance(decoded, str):
        return decoded
    code = decoded.get("Code") if isinstance(decoded, dict) else None
    raise LoginError(code if isinstance(code, str) else "unknown")


class SessionManager:
    """Owns the cached Share session id for one set of credentials."""

    def __init__(self, username: str, password: str, share_server: str, transport: ShareTransport) -> None:
        self.username = username
        self._password = password
        self.share_server = share_server
        self.transport = transport
        self._token: Optional[str] = None
        self._lock = asyncio.Lock()

    @property
    def has_token(self) -> bool:
        return self._token is not None

    async def ensure_token(self, correlation_id: Optional[str] = None) -> str:
        """
        Return the cached session id, logging in first if there is none.

        Concurrent callers wait on the same lock, so only one login is issued.

        Raises:
            HttpError: If the login request could not be sent
            LoginError: If the service rejected the credentials
            FetchError: If the configured server URL is malformed
        """
        async with self._lock:
            if self._token is None:
                self._token = await self._login(correlation_id)
            return self._token

    async def invalidate(self, stale_token: Optional[str] = None) -> None:
        """
        Drop the cached session id.

        If ``stale_token`` is given the cache is only cleared while it still
        holds that value, so a token fetched by another caller in the
        meantime survives.
        """
        async with self._lock:
            if stale_token is None or self._token == stale_token:
                self._token = None

    async def _login(self, correlation_id: Optional[str]) -> str:
        url = build_share_url(self.share_server, SHARE_LOGIN_PATH)
        payload = {
            "accountName": self.username,
            "password": self._password,
            "applicationId": SHARE_APPLICATION_ID,
        }
        body = await self.transport.post(url, json=payload, endpoint="login", correlation_id=correlation_id)
        try:
            token = parse_login_response(body)
        except LoginError as exc:
            logger.error(
                "Share login failed",
                extra={"log_type": "login_error", "correlation_id": correlation_id, "code": exc.code}
            )
            raise
        logger.info("Share login successful", extra={"log_type": "login_success", "correlation_id": correlation_id})
        return token

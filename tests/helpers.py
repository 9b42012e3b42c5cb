"""Shared test data and a scripted fake of the Share service."""

import json
from typing import List

import httpx

from share_client.transport import SHARE_LATEST_GLUCOSE_PATH, SHARE_LOGIN_PATH

TEST_USERNAME = "test_user"
TEST_PASSWORD = "test_password"
TEST_SERVER = "https://share.example.com"
TEST_TOKEN = "abc"

SAMPLE_RECORDS = [
    {"DT": "/Date(1462404576000-0700)/", "ST": "/Date(1462404576000)/", "Trend": "Flat", "Value": 100, "WT": "/Date(1462404576000)/"},
    {"DT": "/Date(1462404276000-0700)/", "ST": "/Date(1462404276000)/", "Trend": "SingleUp", "Value": 95, "WT": "/Date(1462404276000)/"},
    {"DT": "/Date(1462403976000-0700)/", "ST": "/Date(1462403976000)/", "Trend": "NOT COMPUTABLE", "Value": 88, "WT": "/Date(1462403976000)/"},
]

EXPIRED_SESSION_BODY = {"Code": "SessionIdNotFound", "Message": "Session ID not found"}


class RawBody:
    def __init__(self, text: str, status_code: int = 200):
        self.text = text
        self.status_code = status_code


class FakeShareServer:
    """
    Scripted stand-in for the Share service.

    Each entry in ``login_responses`` / ``fetch_responses`` is a body to
    serialize as JSON, a ``RawBody``, or an exception to raise. The last
    entry repeats once the script runs out.
    """

    def __init__(self, login_responses=None, fetch_responses=None):
        self.login_responses = list(login_responses or [TEST_TOKEN])
        self.fetch_responses = list(fetch_responses or [SAMPLE_RECORDS])
        self.requests: List[httpx.Request] = []

    @property
    def login_requests(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path == SHARE_LOGIN_PATH]

    @property
    def fetch_requests(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path == SHARE_LATEST_GLUCOSE_PATH]

    def _next(self, script):
        return script.pop(0) if len(script) > 1 else script[0]

    def _respond(self, request: httpx.Request, item) -> httpx.Response:
        if isinstance(item, Exception):
            raise item
        if isinstance(item, RawBody):
            return httpx.Response(item.status_code, text=item.text, request=request)
        # Share answers errors with HTTP 500 and a JSON object
        status_code = 500 if isinstance(item, dict) else 200
        return httpx.Response(status_code, text=json.dumps(item), request=request)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == SHARE_LOGIN_PATH:
            return self._respond(request, self._next(self.login_responses))
        if request.url.path == SHARE_LATEST_GLUCOSE_PATH:
            return self._respond(request, self._next(self.fetch_responses))
        return httpx.Response(404, text="Not Found", request=request)

    def http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

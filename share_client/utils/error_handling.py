from typing import Optional


class ShareError(Exception):
    """Base class for Share client errors."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class HttpError(ShareError):
    """Transport-level failure (DNS, connect, TLS, timeout)."""
    def __init__(self, underlying: BaseException):
        self.underlying = underlying
        super().__init__(f"HTTP request failed: {underlying}")


class LoginError(ShareError):
    """
    The service rejected the login call.

    Some known values of ``code``:
    - SSO_AuthenticateAccountNotFound
    - SSO_AuthenticatePasswordInvalid
    - SSO_AuthenticateMaxAttemptsExceeed
    """
    def __init__(self, code: str = "unknown"):
        self.code = code
        super().__init__(f"Login failed: {code}")


class DataError(ShareError):
    """Response body did not decode into the expected shape."""
    def __init__(self, reason: str, response_body: Optional[str] = None):
        self.reason = reason
        self.response_body = response_body
        super().__init__(reason)


class ShapeMismatchError(DataError):
    """Fetch response is not a JSON array, usually an expired session."""
    pass


class DateError(ShareError):
    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Unrecognized Share timestamp: {value!r}")


class FetchError(ShareError):
    pass

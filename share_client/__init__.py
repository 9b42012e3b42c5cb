"""Async client for the Share glucose web service."""

from share_client.client import ShareClient
from share_client.models.glucose import ShareGlucose, TrendCode
from share_client.transport import KnownShareServers
from share_client.utils.error_handling import (
    DataError,
    DateError,
    FetchError,
    HttpError,
    LoginError,
    ShapeMismatchError,
    ShareError,
)

__version__ = "0.1.0"

__all__ = [
    "ShareClient",
    "ShareGlucose",
    "TrendCode",
    "KnownShareServers",
    "ShareError",
    "HttpError",
    "LoginError",
    "DataError",
    "ShapeMismatchError",
    "DateError",
    "FetchError",
]

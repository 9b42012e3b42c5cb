"""Pydantic models and schemas."""

from share_client.models.glucose import (
    ShareGlucose,
    ShareRecord,
    TrendCode,
)

__all__ = [
    "ShareGlucose",
    "ShareRecord",
    "TrendCode",
]

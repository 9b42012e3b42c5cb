"""Models for Share glucose readings."""

from datetime import datetime
from enum import IntEnum

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr


class TrendCode(IntEnum):
    """Ordinal trend codes, as used by share2nightscout-bridge."""

    NONE = 0
    DOUBLE_UP = 1
    SINGLE_UP = 2
    FORTY_FIVE_UP = 3
    FLAT = 4
    FORTY_FIVE_DOWN = 5
    SINGLE_DOWN = 6
    DOUBLE_DOWN = 7
    NOT_COMPUTABLE = 8
    RATE_OUT_OF_RANGE = 9


class ShareRecord(BaseModel):
    """A single raw record as returned by ReadPublisherLatestGlucoseValues."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    value: StrictInt = Field(..., alias="Value", description="Glucose value in mg/dL")
    trend: StrictStr = Field(..., alias="Trend", description="Trend label, e.g. 'Flat'")
    wt: StrictStr = Field(..., alias="WT", description="Timestamp in /Date(ms)/ form")


class ShareGlucose(BaseModel):
    """Model for a decoded glucose reading."""

    model_config = ConfigDict(frozen=True)

    glucose: int = Field(..., description="Glucose value in mg/dL", ge=0, le=0xFFFF)
    trend: TrendCode = Field(TrendCode.NONE, description="Trend code (0-9)")
    timestamp: datetime = Field(..., description="Timestamp of the reading in UTC")

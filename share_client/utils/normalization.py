import re
from datetime import datetime, timedelta, timezone
from typing import Any

from share_client.models.glucose import TrendCode
from share_client.utils.error_handling import DateError

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# WT looks like "/Date(1462404576000)/"; ST and DT may carry an offset: "/Date(1462404576000-0700)/"
SHARE_DATE_PATTERN = re.compile(r"\((.*)\)")
EPOCH_MS_PATTERN = re.compile(r"(-?\d+)(?:[+-]\d{4})?")

# Dec 2021: Share switched Trend from an int to a label.
# https://github.com/nightscout/share2nightscout-bridge/blob/976fce4/index.js
TREND_CODES = {
    "DoubleUp": TrendCode.DOUBLE_UP,
    "SingleUp": TrendCode.SINGLE_UP,
    "FortyFiveUp": TrendCode.FORTY_FIVE_UP,
    "Flat": TrendCode.FLAT,
    "FortyFiveDown": TrendCode.FORTY_FIVE_DOWN,
    "SingleDown": TrendCode.SINGLE_DOWN,
    "DoubleDown": TrendCode.DOUBLE_DOWN,
    "NOT COMPUTABLE": TrendCode.NOT_COMPUTABLE,
    "RATE OUT OF RANGE": TrendCode.RATE_OUT_OF_RANGE,
}


def normalize_trend(value: Any) -> TrendCode:
    """Map a Share trend label to its code. Unknown labels, including 'NONE', map to 0."""
    return TREND_CODES.get(value, TrendCode.NONE)


def parse_share_date(value: str) -> datetime:
    """
    Parse a Share timestamp of the form ``/Date(<epoch ms>)/`` into a UTC datetime.

    Raises:
        DateError: If the value does not contain a parenthesised epoch value
    """
    match = SHARE_DATE_PATTERN.search(value) if isinstance(value, str) else None
    if match is None:
        raise DateError(value)
    digits = EPOCH_MS_PATTERN.fullmatch(match.group(1).strip())
    if digits is None:
        raise DateError(value)
    try:
        return EPOCH + timedelta(milliseconds=int(digits.group(1)))
    except (OverflowError, ValueError) as exc:
        raise DateError(value) from exc

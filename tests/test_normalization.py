import pytest
from datetime import datetime, timezone

from share_client.models.glucose import TrendCode
from share_client.utils.error_handling import DateError
from share_client.utils.normalization import normalize_trend, parse_share_date


@pytest.mark.parametrize("label, code", [
    ("DoubleUp", 1),
    ("SingleUp", 2),
    ("FortyFiveUp", 3),
    ("Flat", 4),
    ("FortyFiveDown", 5),
    ("SingleDown", 6),
    ("DoubleDown", 7),
    ("NOT COMPUTABLE", 8),
    ("RATE OUT OF RANGE", 9),
])
def test_normalize_trend_known_labels(label, code):
    assert normalize_trend(label) == code


@pytest.mark.parametrize("label", ["NONE", "", "flat", "Sideways", "4"])
def test_normalize_trend_unknown_labels_default_to_none(label):
    assert normalize_trend(label) is TrendCode.NONE
    assert normalize_trend(label) == 0


def test_parse_share_date():
    dt = parse_share_date("/Date(1462404576000)/")
    assert dt == datetime(2016, 5, 4, 23, 29, 36, tzinfo=timezone.utc)
    assert dt.timestamp() == 1462404576.0
    assert dt.tzinfo is timezone.utc


def test_parse_share_date_keeps_milliseconds():
    dt = parse_share_date("/Date(1000000000123)/")
    assert dt.timestamp() == pytest.approx(1000000000.123)
    assert dt.microsecond == 123000


def test_parse_share_date_ignores_offset_suffix():
    assert parse_share_date("/Date(1462404576000-0700)/") == parse_share_date("/Date(1462404576000)/")
    assert parse_share_date("/Date(1462404576000+0100)/").timestamp() == 1462404576.0


@pytest.mark.parametrize("value", [
    "garbage",
    "",
    "/Date()/",
    "/Date(abc)/",
    "/Date(12.5)/",
    "/Date(99999999999999999999999)/",
    "/Date(" + "1" * 5000 + ")/",
])
def test_parse_share_date_rejects_malformed(value):
    with pytest.raises(DateError):
        parse_share_date(value)

import json
import logging
from typing import List

from pydantic import ValidationError

from share_client.metrics import share_readings_decoded_total
from share_client.models.glucose import ShareGlucose, ShareRecord
from share_client.utils.error_handling import DataError, ShapeMismatchError
from share_client.utils.normalization import normalize_trend, parse_share_date

logger = logging.getLogger(__name__)


def decode_readings(response_text: str) -> List[ShareGlucose]:
    """
    Decode a ReadPublisherLatestGlucoseValues response body.

    The whole body is rejected if any record is malformed; readings keep
    the order of the input array.

    Raises:
        ShapeMismatchError: If the body is not a JSON array (the service
            returns an error object instead, e.g. for an expired session)
        DataError: If a record is missing fields or has out-of-range values
        DateError: If a record's WT timestamp cannot be parsed
    """
    try:
        decoded = json.loads(response_text)
    except (TypeError, ValueError) as exc:
        raise ShapeMismatchError(f"Response is not JSON: {response_text}", response_body=response_text) from exc
    if not isinstance(decoded, list):
        raise ShapeMismatchError(f"Response is not a JSON array: {response_text}", response_body=response_text)

    readings = []
    for raw in decoded:
        try:
            record = ShareRecord.model_validate(raw)
            reading = ShareGlucose(
                glucose=record.value,
                trend=normalize_trend(record.trend),
                timestamp=parse_share_date(record.wt),
            )
        except ValidationError as exc:
            logger.warning(
                "Malformed Share record",
                extra={"log_type": "decode_error", "error": str(exc)}
            )
            raise DataError(f"Failed to decode an SGV record: {response_text}", response_body=response_text) from exc
        readings.append(reading)

    share_readings_decoded_total.inc(len(readings))
    return readings

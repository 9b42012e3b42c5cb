"""
Logging utilities for redacting sensitive data from logs and error messages.

Example:
    from share_client.utils.logging_utils import redact_sensitive_data
    safe = redact_sensitive_data({'password': 'abc', 'accountName': 'bob'})
    # safe == {'password': '***REDACTED***', 'accountName': 'bob'}
"""

import logging
import json
from datetime import datetime, timezone

SENSITIVE_KEYS = {'password', 'sessionid', 'token', 'secret', 'applicationid', 'share_password'}

REDACTED = '***REDACTED***'

# Attributes present on every LogRecord; anything else came in through `extra=`
_RESERVED_ATTRS = set(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


def redact_sensitive_data(obj):
    """
    Recursively redacts sensitive fields in dicts/lists.
    Keys matched (case-insensitive): password, sessionId, token, secret, applicationId, share_password
    """
    if isinstance(obj, dict):
        return {
            k: (REDACTED if str(k).lower() in SENSITIVE_KEYS else redact_sensitive_data(v))
            for k, v in obj.items()
        }
    elif isinstance(obj, list):
        return [redact_sensitive_data(i) for i in obj]
    else:
        return obj


class JSONFormatter(logging.Formatter):
    """
    Formats log records as JSON with standard fields plus any `extra` fields.
    """
    def format(self, record):
        log_record = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno
        }
        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)
        for key, value in vars(record).items():
            if key not in _RESERVED_ATTRS and key not in log_record:
                log_record[key] = value
        return json.dumps(redact_sensitive_data(log_record), default=str)


def setup_json_logging(level=logging.INFO):
    """
    Set up structured JSON logging on stderr.
    Args:
        level: Logging level name or number (default: INFO)
    """
    logger = logging.getLogger()
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    # Remove existing handlers
    for h in list(logger.handlers):
        logger.removeHandler(h)
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())
    logger.addHandler(handler)
    return logger

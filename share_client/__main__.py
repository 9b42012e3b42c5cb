"""
Print the latest Share glucose readings.

- Credentials come from SHARE_USERNAME / SHARE_PASSWORD (environment, .env,
  or AWS Secrets Manager when SECRET_NAME is set)
- Fetches at most --count readings from the last 24 hours

Usage:
    python -m share_client --count 12
    python -m share_client --server NON_US --json
    python -m share_client --log-level INFO
"""
import argparse
import asyncio
import json
import sys
from typing import List, Optional

from botocore.exceptions import ClientError

from share_client.client import ShareClient
from share_client.models.glucose import ShareGlucose
from share_client.utils.config import get_settings, resolve_share_server
from share_client.utils.error_handling import ShareError
from share_client.utils.logging_utils import setup_json_logging


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="share_client", description="Fetch the latest Share glucose readings")
    parser.add_argument("--count", type=int, default=1, help="Number of readings to fetch (default: 1)")
    parser.add_argument("--server", default=None, help="US, NON_US or a base URL (default: from settings)")
    parser.add_argument("--json", action="store_true", help="Print readings as JSON")
    parser.add_argument("--log-level", default=None, help="Logging level (default: LOG_LEVEL setting, WARNING)")
    return parser.parse_args(argv)


async def fetch(count: int, server: Optional[str]) -> List[ShareGlucose]:
    settings = get_settings()
    if server:
        settings = settings.model_copy(update={"share_server": resolve_share_server(server)})
    async with ShareClient.from_settings(settings) as client:
        return await client.fetch_last(count)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    try:
        # Invalid settings and unreadable secrets fail here
        settings = get_settings()
        setup_json_logging(args.log_level or settings.log_level)
        readings = asyncio.run(fetch(args.count, args.server))
    except (ShareError, ValueError, ClientError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps([r.model_dump(mode="json") for r in readings], indent=2))
        return 0

    if not readings:
        print("No readings found.")
        return 0

    print(f"{'Timestamp':<30} {'mg/dL':>6}  {'Trend':<18}")
    print("-" * 58)
    for reading in readings:
        print(f"{reading.timestamp.isoformat():<30} {reading.glucose:>6}  {reading.trend.name:<18}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

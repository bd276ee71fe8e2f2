#!/usr/bin/env python3
"""
One-shot status check against the Binance API.

Fetches the monitored coin's network status once and prints the same
report the monitor sends at startup. Nothing is sent to Telegram.

Run with: python scripts/check_status.py
"""

import asyncio
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from asset_monitor.api import BinanceClient
from asset_monitor.config import MONITORED_COIN, Credentials
from asset_monitor.core import StatusFetcher, diff
from asset_monitor.errors import ConfigError, FetchError
from asset_monitor.utils import add_utc_line

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)


async def check_status(credentials: Credentials) -> str:
    """Fetch once and return the full status report."""
    fetcher = StatusFetcher(
        lambda: BinanceClient(credentials.binance_api_key, credentials.binance_secret_key),
        coin=MONITORED_COIN,
    )
    try:
        snapshot = await fetcher.fetch()
    finally:
        await fetcher.close()
    return add_utc_line(diff(None, snapshot))


def main():
    try:
        credentials = Credentials.from_env(require_telegram=False)
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    print("\n" + "=" * 60)
    print(f"{MONITORED_COIN} NETWORK STATUS")
    print("=" * 60)

    try:
        report = asyncio.run(check_status(credentials))
    except FetchError as e:
        logger.error(f"Status check failed ({type(e).__name__}): {e}")
        sys.exit(1)

    print(report)
    print("=" * 60)


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
Asset Status Monitor - CLI Entry Point
======================================

Polls Binance every minute for the deposit/withdraw status of each AVAX
network and posts a Telegram message when it changes.

Behaviour:
    - Startup: full status report sent once; failure exits with code 1
    - Every 60 seconds: fetch, compare, notify on change
    - 5 consecutive failures of Binance or Telegram: wait 1 hour, reconnect

Required environment (or .env in the project root):
    TELEGRAM_BOT_TOKEN, TELEGRAM_CHAT_ID, BINANCE_API_KEY, BINANCE_SECRET_KEY

Usage:
    # Start monitor
    python scripts/run_monitor.py

    # Dry run (log messages only, no Telegram)
    python scripts/run_monitor.py --dry-run

    # Test Telegram configuration
    python scripts/run_monitor.py --test-telegram
"""

import argparse
import asyncio
import logging
import signal
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from asset_monitor.alerts import NotifierConfig, TelegramNotifier
from asset_monitor.api import BinanceClient
from asset_monitor.config import (
    BINANCE_BASE_URL,
    LOG_FILE,
    LOG_LEVEL,
    Credentials,
    MonitorSettings,
)
from asset_monitor.core import PollLoop, StatusFetcher
from asset_monitor.errors import ConfigError, StartupError
from asset_monitor.utils import UtcLineFormatter


def setup_logging(log_level: str = LOG_LEVEL, log_file: Optional[str] = None):
    """Configure logging for the monitor."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(getattr(logging, log_level.upper()))

    formatter = UtcLineFormatter()

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        # Date-stamped log file (e.g., logs/monitor_2024-03-01.log)
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        date_str = datetime.now().strftime("%Y-%m-%d")
        dated_log_file = log_path.parent / f"{log_path.stem}_{date_str}{log_path.suffix}"

        file_handler = logging.FileHandler(dated_log_file)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        root_logger.info(f"Logging to: {dated_log_file}")

    # Reduce noise from HTTP libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests").setLevel(logging.WARNING)
    logging.getLogger("aiohttp").setLevel(logging.WARNING)


def build_poll_loop(credentials: Credentials, settings: MonitorSettings, dry_run: bool) -> PollLoop:
    """Wire the exchange client, notifier and loop together."""
    fetcher = StatusFetcher(
        client_factory=lambda: BinanceClient(
            credentials.binance_api_key,
            credentials.binance_secret_key,
            base_url=BINANCE_BASE_URL,
        ),
        coin=settings.coin,
        recv_window_ms=settings.recv_window_ms,
    )
    notifier = TelegramNotifier(NotifierConfig(
        bot_token=credentials.telegram_bot_token,
        chat_id=credentials.telegram_chat_id,
        dry_run=dry_run,
    ))
    return PollLoop(fetcher, notifier, settings)


def main():
    parser = argparse.ArgumentParser(
        description='Binance Asset Status Monitor',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/run_monitor.py                  # Start monitor
  python scripts/run_monitor.py --dry-run        # Log messages only
  python scripts/run_monitor.py --test-telegram  # Test Telegram setup
        """
    )

    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Log notifications instead of sending them to Telegram'
    )

    parser.add_argument(
        '--test-telegram',
        action='store_true',
        help='Send a test message to verify Telegram configuration'
    )

    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        default=LOG_LEVEL,
        help=f'Log level (default: {LOG_LEVEL})'
    )

    parser.add_argument(
        '--log-file',
        nargs='?',
        const=LOG_FILE,
        default=None,
        help=f'Also write logs to a date-stamped file (default path: {LOG_FILE})'
    )

    args = parser.parse_args()

    setup_logging(args.log_level, args.log_file)
    logger = logging.getLogger(__name__)

    try:
        credentials = Credentials.from_env(require_telegram=not args.dry_run)
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    settings = MonitorSettings()

    # Test Telegram mode
    if args.test_telegram:
        print("Testing Telegram configuration...")
        notifier = TelegramNotifier(NotifierConfig(
            bot_token=credentials.telegram_bot_token,
            chat_id=credentials.telegram_chat_id,
            dry_run=args.dry_run,
        ))
        if notifier.send_test_message():
            print("Test message sent successfully!")
            sys.exit(0)
        print("Failed to send test message. Check TELEGRAM_BOT_TOKEN and TELEGRAM_CHAT_ID.")
        sys.exit(1)

    # Print configuration
    print("\n" + "=" * 60)
    print("ASSET STATUS MONITOR")
    print("=" * 60)
    print(f"Coin:           {settings.coin}")
    print(f"Poll interval:  {settings.refresh_interval_sec} seconds")
    print(f"Max retries:    {settings.max_retry} (then wait {settings.backoff_sec} seconds)")
    print(f"Dry run:        {args.dry_run}")
    print(f"Log level:      {args.log_level}")
    print("=" * 60)

    poll_loop = build_poll_loop(credentials, settings, args.dry_run)

    def _handle_shutdown(signum, frame):
        logger.info("Shutdown signal received, stopping monitor...")
        poll_loop.stop()

    signal.signal(signal.SIGINT, _handle_shutdown)
    signal.signal(signal.SIGTERM, _handle_shutdown)

    try:
        print("\nStarting monitor...")
        print("Press Ctrl+C to stop (takes effect after the current cycle)\n")
        asyncio.run(poll_loop.run())

    except StartupError as e:
        logger.error(f"Startup failed: {e}")
        sys.exit(1)

    print("\nMonitor stopped")
    sys.exit(0)


if __name__ == "__main__":
    main()

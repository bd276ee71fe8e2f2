"""
UTC Timestamps
==============

Every notification and every log line ends with a UTC timestamp line:

    <contents>
    2024-03-01 12:00:00 UTC
"""

import logging
from datetime import datetime, timezone
from typing import Optional

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """Format a moment as 'YYYY-MM-DD HH:MM:SS' in UTC (seconds precision)."""
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.strftime(TIMESTAMP_FORMAT)


def add_utc_line(message: str, now: Optional[datetime] = None) -> str:
    """Append the UTC timestamp line to a message."""
    return f"{message}\n{utc_timestamp(now)} UTC"


class UtcLineFormatter(logging.Formatter):
    """
    Log formatter that suffixes each record with a UTC timestamp line.

    The record time is used rather than wall-clock time at format
    time, so buffered handlers still report when the event happened.
    """

    def __init__(self, fmt: str = "%(levelname)s %(name)s - %(message)s"):
        super().__init__(fmt)

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        return add_utc_line(text, created)

"""Shared helpers."""

from .timestamps import add_utc_line, utc_timestamp, UtcLineFormatter

__all__ = [
    "add_utc_line",
    "utc_timestamp",
    "UtcLineFormatter",
]

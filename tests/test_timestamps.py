import logging
from datetime import datetime, timedelta, timezone

from asset_monitor.utils import UtcLineFormatter, add_utc_line, utc_timestamp

from conftest import FIXED_NOW, FIXED_STAMP


def test_add_utc_line():
    assert add_utc_line("Withdraw [SUSPENDED]", FIXED_NOW) == f"Withdraw [SUSPENDED]\n{FIXED_STAMP}"


def test_timestamp_drops_microseconds_and_converts_to_utc():
    local = datetime(2024, 3, 1, 14, 30, 45, 999999, tzinfo=timezone(timedelta(hours=2)))

    assert utc_timestamp(local) == "2024-03-01 12:30:45"


def test_formatter_appends_record_time():
    record = logging.LogRecord("asset_monitor.core", logging.WARNING, __file__, 1,
                               "Too many exchange API errors", None, None)
    record.created = FIXED_NOW.timestamp()

    text = UtcLineFormatter().format(record)

    assert text == f"WARNING asset_monitor.core - Too many exchange API errors\n{FIXED_STAMP}"

from datetime import datetime, timezone
from typing import List

import pytest

from asset_monitor.config import MonitorSettings
from asset_monitor.models import NetworkStatus, StatusSnapshot

FIXED_NOW = datetime(2024, 3, 1, 12, 30, 45, tzinfo=timezone.utc)
FIXED_STAMP = "2024-03-01 12:30:45 UTC"


def network(
    name: str = "AVAX-C",
    deposit: bool = True,
    withdraw: bool = True,
    deposit_reason: str = "",
    withdraw_reason: str = "",
) -> NetworkStatus:
    return NetworkStatus(
        network_name=name,
        deposit_enabled=deposit,
        deposit_reason=deposit_reason,
        withdraw_enabled=withdraw,
        withdraw_reason=withdraw_reason,
    )


def snapshot(*networks: NetworkStatus) -> StatusSnapshot:
    return StatusSnapshot(networks)


def network_entry(
    name: str = "AVAX-C",
    deposit: bool = True,
    withdraw: bool = True,
    deposit_desc: str = "",
    withdraw_desc: str = "",
) -> dict:
    return {
        "network": name,
        "coin": "AVAX",
        "depositEnable": deposit,
        "depositDesc": deposit_desc,
        "withdrawEnable": withdraw,
        "withdrawDesc": withdraw_desc,
        "withdrawFee": "0.01",
    }


def asset_document(*entries: dict, coin: str = "AVAX") -> list:
    return [
        {"coin": "BTC", "networkList": [network_entry("BTC")]},
        {"coin": coin, "name": "Avalanche", "networkList": list(entries)},
    ]


class FakeFetcher:
    """Returns queued snapshots or raises queued exceptions, in order."""

    def __init__(self, results: List = None):
        self.results = list(results or [])
        self.fetch_calls = 0
        self.reconnects = 0
        self.closed = False

    async def fetch(self) -> StatusSnapshot:
        self.fetch_calls += 1
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    async def reconnect(self):
        self.reconnects += 1

    async def close(self):
        self.closed = True


class FakeNotifier:
    """Records sent messages; raises queued exceptions first."""

    def __init__(self, failures: List = None):
        self.failures = list(failures or [])
        self.sent: List[str] = []
        self.timeouts: List[float] = []
        self.attempts = 0
        self.reconnects = 0
        self.closed = False

    def send(self, message: str, timeout: float = 8):
        self.attempts += 1
        self.timeouts.append(timeout)
        if self.failures:
            failure = self.failures.pop(0)
            if failure is not None:
                raise failure
        self.sent.append(message)

    def reconnect(self):
        self.reconnects += 1

    def close(self):
        self.closed = True


class FakeSleep:
    """Records requested delays without waiting."""

    def __init__(self):
        self.calls: List[float] = []

    async def __call__(self, seconds: float):
        self.calls.append(seconds)


@pytest.fixture
def settings() -> MonitorSettings:
    return MonitorSettings()


@pytest.fixture
def fake_sleep() -> FakeSleep:
    return FakeSleep()

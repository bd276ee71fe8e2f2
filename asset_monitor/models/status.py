"""
Status Models
=============

Immutable records of a coin's deposit/withdraw availability per network,
parsed from Binance's `capital/config/getall` document.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

from ..errors import AssetNotFound, ParseError


@dataclass(frozen=True)
class NetworkStatus:
    """Deposit/withdraw availability of one blockchain network."""
    network_name: str
    deposit_enabled: bool
    deposit_reason: str
    withdraw_enabled: bool
    withdraw_reason: str

    def deposit_line(self) -> str:
        if self.deposit_enabled:
            return "Deposit available"
        return f"Deposit suspended: {self.deposit_reason}"

    def withdraw_line(self) -> str:
        if self.withdraw_enabled:
            return "Withdraw available"
        return f"Withdraw suspended: {self.withdraw_reason}"

    def describe(self) -> str:
        """Three-line human readable status block."""
        return "\n".join([
            f"Network: {self.network_name}",
            self.deposit_line(),
            self.withdraw_line(),
        ])

    @classmethod
    def from_entry(cls, entry: Any) -> "NetworkStatus":
        """
        Build a NetworkStatus from one `networkList` entry.

        Raises:
            ParseError: if the entry is not an object or a required field
                has the wrong type
        """
        if not isinstance(entry, dict):
            raise ParseError(f"Network entry is not an object: {entry!r}")

        name = entry.get("network")
        if not isinstance(name, str) or not name:
            raise ParseError(f"Network entry has no valid 'network' name: {entry!r}")

        deposit = entry.get("depositEnable")
        withdraw = entry.get("withdrawEnable")
        # bool only: "true" or 1 are not accepted
        if not isinstance(deposit, bool):
            raise ParseError(f"{name}: 'depositEnable' is not a boolean ({deposit!r})")
        if not isinstance(withdraw, bool):
            raise ParseError(f"{name}: 'withdrawEnable' is not a boolean ({withdraw!r})")

        return cls(
            network_name=name,
            deposit_enabled=deposit,
            deposit_reason=_reason(entry, "depositDesc", name),
            withdraw_enabled=withdraw,
            withdraw_reason=_reason(entry, "withdrawDesc", name),
        )


def _reason(entry: Dict[str, Any], key: str, name: str) -> str:
    value = entry.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ParseError(f"{name}: '{key}' is not a string ({value!r})")
    return value


@dataclass(frozen=True)
class StatusSnapshot:
    """
    One fetched view of a coin's availability across its networks.

    Network order is the order returned by the exchange. Equality is
    structural and order-sensitive.
    """
    networks: Tuple[NetworkStatus, ...]

    def __post_init__(self):
        # Accept any iterable but always store a tuple
        object.__setattr__(self, "networks", tuple(self.networks))
        seen = set()
        for network in self.networks:
            if network.network_name in seen:
                raise ParseError(f"Duplicate network in snapshot: {network.network_name}")
            seen.add(network.network_name)

    def __iter__(self) -> Iterator[NetworkStatus]:
        return iter(self.networks)

    def __len__(self) -> int:
        return len(self.networks)

    @property
    def network_names(self) -> List[str]:
        return [n.network_name for n in self.networks]

    def by_name(self) -> Dict[str, NetworkStatus]:
        return {n.network_name: n for n in self.networks}

    def get(self, network_name: str) -> Optional[NetworkStatus]:
        for network in self.networks:
            if network.network_name == network_name:
                return network
        return None

    def describe(self) -> str:
        """Full status report, one block per network, blank line between blocks."""
        return "\n\n".join(n.describe() for n in self.networks)

    @classmethod
    def from_asset_detail(cls, document: Any, coin: str) -> "StatusSnapshot":
        """
        Parse the monitored coin out of the full asset-detail document.

        Args:
            document: Decoded JSON, a list of coin objects
            coin: Coin symbol to extract (e.g. "AVAX")

        Raises:
            ParseError: malformed document, network list or network entry
            AssetNotFound: the coin is not listed in the document
        """
        if not isinstance(document, list):
            raise ParseError(
                f"Asset detail document is not a list ({type(document).__name__})"
            )

        for item in document:
            if not isinstance(item, dict) or item.get("coin") != coin:
                continue

            network_list = item.get("networkList")
            if not isinstance(network_list, list):
                raise ParseError(f"{coin}: 'networkList' missing or not a list")

            return cls(tuple(NetworkStatus.from_entry(entry) for entry in network_list))

        raise AssetNotFound(f"{coin} not found in asset detail response")

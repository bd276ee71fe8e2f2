"""
Change Detector

Pure comparison of two StatusSnapshots.

Startup (no previous snapshot): full report of every network.
Afterwards: one line per changed item, e.g.

    Withdraw [SUSPENDED]
    AVAX-C: Deposit [RESUMED]
    Network: BSC [ADDED]
"""

from typing import List, Optional

from ..models import NetworkStatus, StatusSnapshot

RESUMED = "RESUMED"
SUSPENDED = "SUSPENDED"


def _transition(enabled: bool) -> str:
    return RESUMED if enabled else SUSPENDED


def _network_changes(old: NetworkStatus, new: NetworkStatus, prefix: str) -> List[str]:
    lines = []

    if old.deposit_enabled != new.deposit_enabled:
        lines.append(f"{prefix}Deposit [{_transition(new.deposit_enabled)}]")
    elif not new.deposit_enabled and old.deposit_reason != new.deposit_reason:
        lines.append(f"{prefix}{new.deposit_line()}")

    if old.withdraw_enabled != new.withdraw_enabled:
        lines.append(f"{prefix}Withdraw [{_transition(new.withdraw_enabled)}]")
    elif not new.withdraw_enabled and old.withdraw_reason != new.withdraw_reason:
        lines.append(f"{prefix}{new.withdraw_line()}")

    return lines


def diff(previous: Optional[StatusSnapshot], current: StatusSnapshot) -> Optional[str]:
    """
    Describe how `current` differs from `previous`.

    Args:
        previous: Last accepted snapshot, or None at startup
        current: Freshly fetched snapshot

    Returns:
        Message text, or None if nothing a subscriber would care about
        changed. Snapshots that differ only in network order return None.
    """
    if previous is None:
        return current.describe()

    if previous == current:
        return None

    old_networks = previous.by_name()
    new_networks = current.by_name()

    # Single network on both sides: no need to say which one
    single = (
        len(previous) == 1
        and len(current) == 1
        and previous.network_names == current.network_names
    )

    lines = []
    for new in current:
        old = old_networks.get(new.network_name)
        if old is None:
            lines.append(f"Network: {new.network_name} [ADDED]")
            lines.append(new.deposit_line())
            lines.append(new.withdraw_line())
            continue
        prefix = "" if single else f"{new.network_name}: "
        lines.extend(_network_changes(old, new, prefix))

    for old in previous:
        if old.network_name not in new_networks:
            lines.append(f"Network: {old.network_name} [REMOVED]")

    if not lines:
        return None
    return "\n".join(lines)


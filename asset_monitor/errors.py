"""
Errors
======

Exception taxonomy for the asset status monitor.

Fatal (startup only):
- ConfigError: missing or invalid environment configuration
- StartupError: the initial fetch-and-announce sequence failed

Recoverable (counted and retried by the poll loop):
- FetchError: TransportError, AssetNotFound, ParseError
- NotifyError: NotifyTimeout, DeliveryFailed
"""


class ConfigError(Exception):
    """Required configuration is missing or malformed."""


class StartupError(Exception):
    """The first fetch or the startup announcement failed."""


class FetchError(Exception):
    """Base class for failures while retrieving the asset status."""


class TransportError(FetchError):
    """Network or HTTP level failure talking to the exchange."""


class AssetNotFound(FetchError):
    """The monitored coin is not present in the exchange response."""


class ParseError(FetchError):
    """The exchange response could not be turned into a snapshot."""


class NotifyError(Exception):
    """Base class for notification delivery failures."""


class NotifyTimeout(NotifyError):
    """No acknowledgment from the messaging API within the timeout."""


class DeliveryFailed(NotifyError):
    """The messaging API rejected the message or could not be reached."""

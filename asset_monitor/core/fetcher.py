"""
Status Fetcher

Fetches the asset-detail document and turns it into a StatusSnapshot.
"""

import logging
from typing import Callable, Optional

from ..api.binance import BinanceClient
from ..config import MONITORED_COIN, RECV_WINDOW_MS
from ..models import StatusSnapshot

logger = logging.getLogger(__name__)


class StatusFetcher:
    """
    Read-only source of StatusSnapshots for one coin.

    Errors are raised as FetchError subclasses:
    - TransportError from the client
    - AssetNotFound / ParseError from snapshot construction
    """

    def __init__(
        self,
        client_factory: Callable[[], BinanceClient],
        coin: str = MONITORED_COIN,
        recv_window_ms: int = RECV_WINDOW_MS,
    ):
        """
        Args:
            client_factory: Builds a fresh exchange client; called again
                on reconnect
            coin: Coin symbol to extract
            recv_window_ms: Request validity window passed to the client
        """
        self._client_factory = client_factory
        self.coin = coin
        self.recv_window_ms = recv_window_ms
        self._client: Optional[BinanceClient] = None

    @property
    def client(self) -> BinanceClient:
        if self._client is None:
            self._client = self._client_factory()
        return self._client

    async def fetch(self) -> StatusSnapshot:
        """Fetch and parse the current status of the monitored coin."""
        document = await self.client.get_asset_detail(recv_window_ms=self.recv_window_ms)
        snapshot = StatusSnapshot.from_asset_detail(document, self.coin)
        logger.debug(f"Fetched {self.coin} status: {len(snapshot)} networks")
        return snapshot

    async def reconnect(self):
        """Drop the current client and build a new one."""
        await self.close()
        self._client = self._client_factory()
        logger.info("Exchange client reconnected")

    async def close(self):
        if self._client is not None:
            await self._client.close()
            self._client = None

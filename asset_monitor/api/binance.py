"""
Binance API Client

Single responsibility: fetch the signed asset-detail document from the
Binance wallet API.
"""

import asyncio
import hashlib
import hmac
import logging
import time
from typing import Any, Callable, Optional
from urllib.parse import urlencode

import aiohttp

from ..config import BINANCE_BASE_URL, RECV_WINDOW_MS
from ..errors import TransportError

logger = logging.getLogger(__name__)

ASSET_DETAIL_PATH = "/sapi/v1/capital/config/getall"


def sign_query(secret_key: str, query: str) -> str:
    """HMAC-SHA256 signature of a query string, hex encoded."""
    return hmac.new(secret_key.encode(), query.encode(), hashlib.sha256).hexdigest()


class BinanceClient:
    """
    Async client for the Binance wallet (SAPI) endpoints.

    Handles:
    - Request signing (timestamp, recvWindow, signature)
    - Session lifecycle
    - Mapping transport failures to TransportError
    """

    def __init__(
        self,
        api_key: str,
        secret_key: str,
        base_url: str = BINANCE_BASE_URL,
        clock: Callable[[], float] = time.time,
    ):
        self.api_key = api_key
        self.secret_key = secret_key
        self.base_url = base_url.rstrip("/")
        self._clock = clock
        self._session: Optional[aiohttp.ClientSession] = None

    def __repr__(self) -> str:
        return f"BinanceClient(base_url={self.base_url!r})"

    async def __aenter__(self):
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _ensure_session(self):
        """Create session if needed."""
        if self._session is None:
            self._session = aiohttp.ClientSession(
                headers={"X-MBX-APIKEY": self.api_key},
            )

    async def close(self):
        """Close the HTTP session."""
        if self._session:
            await self._session.close()
            self._session = None

    def _signed_query(self, recv_window_ms: int) -> str:
        params = {
            "timestamp": int(self._clock() * 1000),
            "recvWindow": recv_window_ms,
        }
        query = urlencode(params)
        return f"{query}&signature={sign_query(self.secret_key, query)}"

    async def get_asset_detail(self, recv_window_ms: int = RECV_WINDOW_MS) -> Any:
        """
        Get deposit/withdraw configuration for every coin.

        Args:
            recv_window_ms: Validity window of the signed request, also
                used as the total HTTP timeout

        Returns:
            Decoded JSON document (a list of coin objects on success)

        Raises:
            TransportError: connection failure, timeout, non-200 status
                or a body that is not JSON
        """
        await self._ensure_session()

        url = f"{self.base_url}{ASSET_DETAIL_PATH}?{self._signed_query(recv_window_ms)}"
        timeout = aiohttp.ClientTimeout(total=recv_window_ms / 1000)

        try:
            async with self._session.get(url, timeout=timeout) as response:
                if response.status != 200:
                    body = await response.text()
                    raise TransportError(f"Binance API error {response.status}: {body[:200]}")
                return await response.json(content_type=None)

        except asyncio.TimeoutError as e:
            raise TransportError(
                f"Binance request timed out after {recv_window_ms / 1000:g}s"
            ) from e
        except aiohttp.ClientError as e:
            raise TransportError(f"Binance request failed: {e}") from e
        except ValueError as e:
            # json.JSONDecodeError
            raise TransportError(f"Binance response is not valid JSON: {e}") from e

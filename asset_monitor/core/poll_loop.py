"""
Poll Loop

Main monitoring loop that:
1. Fetches the coin's network status
2. Compares it with the last accepted snapshot
3. Sends a Telegram message when something changed
4. Backs off for an hour after repeated failures of either dependency

The accepted snapshot only moves forward once its notification has been
delivered, so a failed send is retried against the same baseline on the
next cycle.
"""

import asyncio
import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Awaitable, Callable, Optional

from ..alerts.telegram import TelegramNotifier
from ..config import MonitorSettings
from ..errors import FetchError, NotifyError, StartupError
from ..models import StatusSnapshot
from ..utils import add_utc_line
from .detector import diff
from .fetcher import StatusFetcher

logger = logging.getLogger(__name__)


class LoopState(Enum):
    """Poll loop lifecycle state."""
    STARTING = "starting"
    POLLING = "polling"
    BACKOFF_SOURCE = "backoff_source"
    BACKOFF_SINK = "backoff_sink"
    TERMINATED = "terminated"


class PollLoop:
    """
    Status polling state machine.

    Owns the accepted snapshot and one failure counter per dependency.
    Cycles run strictly one after another on a single task.
    """

    def __init__(
        self,
        fetcher: StatusFetcher,
        notifier: TelegramNotifier,
        settings: Optional[MonitorSettings] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        """
        Initialize the loop.

        Args:
            fetcher: Source of status snapshots
            notifier: Message sink
            settings: Timing and retry settings (defaults from config)
            sleep: Coroutine used for every delay
            clock: Current time, used for message timestamps
        """
        self.fetcher = fetcher
        self.notifier = notifier
        self.settings = settings or MonitorSettings()
        self._sleep = sleep
        self._clock = clock

        self.state = LoopState.STARTING
        self.accepted_snapshot: Optional[StatusSnapshot] = None
        self.source_failure_count = 0
        self.sink_failure_count = 0
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def stop(self):
        """Ask the loop to exit before its next cycle."""
        if self._running:
            logger.info("Stop requested, finishing current cycle...")
        self._running = False

    # -------------------------------------------------------------------------
    # Startup
    # -------------------------------------------------------------------------

    async def startup(self) -> StatusSnapshot:
        """
        Fetch and announce the full current status.

        Raises:
            StartupError: the fetch or the send failed; there is no
                baseline to fall back on
        """
        self.state = LoopState.STARTING

        try:
            snapshot = await self.fetcher.fetch()
        except FetchError as e:
            self.state = LoopState.TERMINATED
            raise StartupError(f"Initial status fetch failed: {e}") from e

        report = diff(None, snapshot)
        logger.info(f"Initial status:\n{report}")
        message = add_utc_line(report, self._clock())

        try:
            self.notifier.send(message, timeout=self.settings.send_timeout_sec)
        except NotifyError as e:
            self.state = LoopState.TERMINATED
            raise StartupError(f"Initial status message failed: {e}") from e

        self.accepted_snapshot = snapshot
        self.state = LoopState.POLLING
        return snapshot

    # -------------------------------------------------------------------------
    # Steady state
    # -------------------------------------------------------------------------

    async def run_cycle(self):
        """Run one fetch -> compare -> notify -> backoff cycle (no trailing sleep)."""
        if self.accepted_snapshot is None:
            raise RuntimeError("run_cycle() called before startup()")

        self.state = LoopState.POLLING
        logger.debug(f"Requesting {self.settings.coin} status")

        snapshot = await self._fetch()
        if snapshot is not None:
            self._process(snapshot)

        await self._check_backoff()

    async def _fetch(self) -> Optional[StatusSnapshot]:
        try:
            snapshot = await self.fetcher.fetch()
        except FetchError as e:
            self.source_failure_count += 1
            logger.error(
                f"Exchange fetch failed ({type(e).__name__}, "
                f"{self.source_failure_count}/{self.settings.max_retry}): {e}"
            )
            return None

        self.source_failure_count = 0
        return snapshot

    def _process(self, snapshot: StatusSnapshot):
        message = diff(self.accepted_snapshot, snapshot)

        if message is None:
            if snapshot != self.accepted_snapshot:
                # Reordered networks or a reason change on an enabled flag
                logger.debug("Snapshot changed without a reportable difference, adopting it")
                self.accepted_snapshot = snapshot
            return

        logger.info(f"Status changed:\n{message}")
        message = add_utc_line(message, self._clock())

        try:
            self.notifier.send(message, timeout=self.settings.send_timeout_sec)
        except NotifyError as e:
            self.sink_failure_count += 1
            logger.error(
                f"Telegram send failed ({type(e).__name__}, "
                f"{self.sink_failure_count}/{self.settings.max_retry}): {e}"
            )
            return

        self.accepted_snapshot = snapshot
        self.sink_failure_count = 0

    async def _check_backoff(self):
        if self.source_failure_count >= self.settings.max_retry:
            self.state = LoopState.BACKOFF_SOURCE
            logger.warning(
                f"Too many exchange API errors, waiting {self.settings.backoff_sec / 3600:g} hour(s)"
            )
            await self._sleep(self.settings.backoff_sec)
            await self.fetcher.reconnect()
            self.source_failure_count = 0

        if self.sink_failure_count >= self.settings.max_retry:
            self.state = LoopState.BACKOFF_SINK
            logger.warning(
                f"Too many Telegram API errors, waiting {self.settings.backoff_sec / 3600:g} hour(s)"
            )
            await self._sleep(self.settings.backoff_sec)
            self.notifier.reconnect()
            self.sink_failure_count = 0

        self.state = LoopState.POLLING

    # -------------------------------------------------------------------------
    # Entry point
    # -------------------------------------------------------------------------

    async def run(self):
        """
        Announce the initial status, then poll until stop() is called.

        Raises:
            StartupError: startup failed (fatal)
        """
        self._running = True
        try:
            await self.startup()

            while self._running:
                try:
                    await self.run_cycle()
                except asyncio.CancelledError:
                    break
                except Exception as e:
                    # Unexpected failures must not end the steady-state loop
                    logger.exception(f"Error in poll cycle: {e}")
                if not self._running:
                    break
                await self._sleep(self.settings.refresh_interval_sec)
        finally:
            self._running = False
            await self.fetcher.close()
            self.notifier.close()

"""
Telegram Notifier
=================

Delivers status-change messages to a Telegram chat through the Bot API.

Failures are raised rather than swallowed so the poll loop can count them:
- NotifyTimeout: no response within the send timeout
- DeliveryFailed: HTTP error, connection error or a rejected message
"""

import logging
from dataclasses import dataclass
from typing import Optional

import requests

from ..config import (
    ENV_TELEGRAM_BOT_TOKEN,
    ENV_TELEGRAM_CHAT_ID,
    SEND_TIMEOUT_SECONDS,
    TELEGRAM_API_URL,
)
from ..errors import DeliveryFailed, NotifyTimeout
from ..utils import add_utc_line

logger = logging.getLogger(__name__)

# Telegram rejects messages above 4096 characters
MAX_MESSAGE_LENGTH = 4000


@dataclass
class NotifierConfig:
    """Configuration for message sending."""
    bot_token: str
    chat_id: str
    dry_run: bool = False
    max_message_length: int = MAX_MESSAGE_LENGTH
    api_url: str = TELEGRAM_API_URL

    def __repr__(self) -> str:
        return f"NotifierConfig(chat_id={self.chat_id!r}, dry_run={self.dry_run})"


class TelegramNotifier:
    """
    Telegram message sender.

    One HTTP session is kept for the life of the notifier; reconnect()
    replaces it after repeated failures.
    """

    def __init__(self, config: NotifierConfig):
        """
        Initialize the notifier.

        Args:
            config: NotifierConfig with bot token, chat ID, and settings
        """
        self.config = config
        self._validate()
        self._session = requests.Session()

    def _validate(self):
        """Validate configuration."""
        if not self.config.dry_run:
            if not self.config.bot_token:
                raise ValueError(f"{ENV_TELEGRAM_BOT_TOKEN} is required (or use --dry-run)")
            if not self.config.chat_id:
                raise ValueError(f"{ENV_TELEGRAM_CHAT_ID} is required (or use --dry-run)")

    def _truncate_message(self, text: str) -> str:
        """
        Truncate message to Telegram's character limit.

        The last line (the UTC timestamp) is kept when the body is cut.
        """
        limit = self.config.max_message_length
        if len(text) <= limit:
            return text

        marker = "\n... (truncated)"
        body, _, last_line = text.rpartition("\n")
        keep = limit - len(marker) - len(last_line) - 1
        if not body or keep <= 0:
            return text[:limit - len(marker)] + marker
        return f"{body[:keep]}{marker}\n{last_line}"

    def send(self, message: str, timeout: float = SEND_TIMEOUT_SECONDS) -> Optional[int]:
        """
        Send a plain-text message to the configured chat.

        Args:
            message: Message text (sent as-is, no parse mode)
            timeout: Seconds to wait for Telegram to acknowledge

        Returns:
            Telegram message_id (None in dry-run mode)

        Raises:
            NotifyTimeout: Telegram did not answer within `timeout`
            DeliveryFailed: any other delivery failure
        """
        text = self._truncate_message(message)

        if self.config.dry_run:
            logger.info(f"[DRY RUN] Would send Telegram message:\n{text}")
            return None

        url = f"{self.config.api_url}/bot{self.config.bot_token}/sendMessage"
        payload = {
            "chat_id": self.config.chat_id,
            "text": text,
            "disable_web_page_preview": True,
        }

        # Exception details are not logged or chained: they contain the URL with the token
        try:
            response = self._session.post(url, json=payload, timeout=timeout)
            response.raise_for_status()
            result = response.json()

        except requests.exceptions.Timeout:
            raise NotifyTimeout(f"Telegram did not respond within {timeout:g}s") from None
        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else "unknown"
            if status_code == 429:
                logger.warning("Telegram rate limit hit (429)")
            raise DeliveryFailed(f"Telegram HTTP error: {status_code}") from None
        except requests.exceptions.ConnectionError:
            raise DeliveryFailed("Telegram connection error - network issue") from None
        except requests.exceptions.RequestException:
            raise DeliveryFailed("Telegram request failed") from None
        except ValueError:
            raise DeliveryFailed("Telegram returned a non-JSON response") from None

        if not isinstance(result, dict) or not result.get("ok", False):
            description = result.get("description", "no description") if isinstance(result, dict) else "unexpected payload"
            raise DeliveryFailed(f"Telegram rejected message: {description}")

        message_id = result.get("result", {}).get("message_id")
        logger.info(f"Telegram message sent (message_id: {message_id})")
        return message_id

    def reconnect(self):
        """Replace the HTTP session."""
        self._session.close()
        self._session = requests.Session()
        logger.info("Telegram session reconnected")

    def close(self):
        self._session.close()

    def send_test_message(self) -> bool:
        """Send a configuration check message. Returns True on success."""
        try:
            self.send(add_utc_line("Test alert - asset status monitor configuration verified."))
        except (NotifyTimeout, DeliveryFailed) as e:
            logger.error(f"Test message failed: {e}")
            return False
        return True

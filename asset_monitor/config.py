"""
Monitor Configuration
=====================

All settings in one place. Credentials come from the environment; a `.env`
file in the project root is loaded first if present.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from .errors import ConfigError

_project_root = Path(__file__).parent.parent
_env_path = _project_root / ".env"
if _env_path.exists():
    load_dotenv(_env_path)

# =============================================================================
# MONITORED ASSET
# =============================================================================

MONITORED_COIN = "AVAX"

# =============================================================================
# TIMING SETTINGS
# =============================================================================

# Time between polling cycles
REFRESH_INTERVAL_SECONDS = 60

# Consecutive failures of one dependency before backing off
MAX_RETRY = 5

# Pause after MAX_RETRY consecutive failures
BACKOFF_SECONDS = 3600

# Telegram send timeout
SEND_TIMEOUT_SECONDS = 8

# Binance recvWindow, also used as the HTTP timeout for the status request
RECV_WINDOW_MS = 10_000

# =============================================================================
# API SETTINGS
# =============================================================================

BINANCE_BASE_URL = "https://api.binance.com"
TELEGRAM_API_URL = "https://api.telegram.org"

# =============================================================================
# LOGGING
# =============================================================================

LOG_LEVEL = "INFO"  # DEBUG, INFO, WARNING, ERROR
LOG_FILE = "./logs/monitor.log"

# Environment variable names
ENV_TELEGRAM_BOT_TOKEN = "TELEGRAM_BOT_TOKEN"
ENV_TELEGRAM_CHAT_ID = "TELEGRAM_CHAT_ID"
ENV_BINANCE_API_KEY = "BINANCE_API_KEY"
ENV_BINANCE_SECRET_KEY = "BINANCE_SECRET_KEY"

TELEGRAM_ENV_VARS = (ENV_TELEGRAM_BOT_TOKEN, ENV_TELEGRAM_CHAT_ID)
BINANCE_ENV_VARS = (ENV_BINANCE_API_KEY, ENV_BINANCE_SECRET_KEY)
REQUIRED_ENV_VARS = TELEGRAM_ENV_VARS + BINANCE_ENV_VARS


@dataclass(frozen=True)
class Credentials:
    """Secrets and destination read once at startup."""
    telegram_bot_token: str
    telegram_chat_id: str
    binance_api_key: str
    binance_secret_key: str

    def __repr__(self) -> str:
        return f"Credentials(telegram_chat_id={self.telegram_chat_id!r}, secrets=<hidden>)"

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        require_telegram: bool = True,
    ) -> "Credentials":
        """
        Read credentials from the environment.

        Args:
            environ: Variables to read (defaults to os.environ)
            require_telegram: False for dry runs, where the Telegram
                variables may be absent and are left empty

        Raises:
            ConfigError: if any variable is missing/empty or the chat id
                is neither an integer nor an @channel name
        """
        environ = os.environ if environ is None else environ

        required = REQUIRED_ENV_VARS if require_telegram else BINANCE_ENV_VARS
        missing = [name for name in required if not environ.get(name, "").strip()]
        if missing:
            raise ConfigError(f"Missing required environment variables: {', '.join(missing)}")

        chat_id = environ.get(ENV_TELEGRAM_CHAT_ID, "").strip()
        if (require_telegram or chat_id) and not _is_valid_chat_id(chat_id):
            raise ConfigError(
                f"{ENV_TELEGRAM_CHAT_ID} must be a numeric chat id or an @channel name"
            )

        return cls(
            telegram_bot_token=environ.get(ENV_TELEGRAM_BOT_TOKEN, "").strip(),
            telegram_chat_id=chat_id,
            binance_api_key=environ[ENV_BINANCE_API_KEY].strip(),
            binance_secret_key=environ[ENV_BINANCE_SECRET_KEY].strip(),
        )


def _is_valid_chat_id(chat_id: str) -> bool:
    if chat_id.startswith("@"):
        return len(chat_id) > 1
    try:
        int(chat_id)
    except ValueError:
        return False
    return True


@dataclass
class MonitorSettings:
    """Timing and retry settings for the poll loop."""
    coin: str = MONITORED_COIN
    refresh_interval_sec: float = REFRESH_INTERVAL_SECONDS
    max_retry: int = MAX_RETRY
    backoff_sec: float = BACKOFF_SECONDS
    send_timeout_sec: float = SEND_TIMEOUT_SECONDS
    recv_window_ms: int = RECV_WINDOW_MS

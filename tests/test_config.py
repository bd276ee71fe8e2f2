import pytest

from asset_monitor.config import Credentials, MonitorSettings
from asset_monitor.errors import ConfigError

ENV = {
    "TELEGRAM_BOT_TOKEN": "123:abc",
    "TELEGRAM_CHAT_ID": "-1001234567890",
    "BINANCE_API_KEY": "api-key",
    "BINANCE_SECRET_KEY": "secret-key",
}


def test_credentials_from_env():
    credentials = Credentials.from_env(ENV)

    assert credentials.telegram_chat_id == "-1001234567890"
    assert credentials.binance_secret_key == "secret-key"


@pytest.mark.parametrize("name", sorted(ENV))
def test_each_variable_is_required(name):
    environ = dict(ENV)
    environ[name] = "  "

    with pytest.raises(ConfigError, match=name):
        Credentials.from_env(environ)


def test_all_missing_variables_are_listed():
    with pytest.raises(ConfigError) as exc_info:
        Credentials.from_env({})

    for name in ENV:
        assert name in str(exc_info.value)


@pytest.mark.parametrize("chat_id, valid", [
    ("12345", True),
    ("-100987", True),
    ("@avax_status", True),
    ("@", False),
    ("my-channel", False),
])
def test_chat_id_validation(chat_id, valid):
    environ = dict(ENV, TELEGRAM_CHAT_ID=chat_id)

    if valid:
        assert Credentials.from_env(environ).telegram_chat_id == chat_id
    else:
        with pytest.raises(ConfigError):
            Credentials.from_env(environ)


def test_dry_run_does_not_require_telegram_variables():
    environ = {"BINANCE_API_KEY": "api-key", "BINANCE_SECRET_KEY": "secret-key"}

    credentials = Credentials.from_env(environ, require_telegram=False)

    assert credentials.telegram_bot_token == ""
    assert credentials.telegram_chat_id == ""
    assert credentials.binance_api_key == "api-key"


def test_dry_run_still_requires_binance_variables():
    environ = dict(ENV, BINANCE_SECRET_KEY="")

    with pytest.raises(ConfigError, match="BINANCE_SECRET_KEY"):
        Credentials.from_env(environ, require_telegram=False)


def test_dry_run_still_validates_a_given_chat_id():
    environ = dict(ENV, TELEGRAM_CHAT_ID="my-channel")

    with pytest.raises(ConfigError):
        Credentials.from_env(environ, require_telegram=False)


def test_reads_process_environment(monkeypatch):
    for name, value in ENV.items():
        monkeypatch.setenv(name, value)

    assert Credentials.from_env().binance_api_key == "api-key"


def test_repr_hides_secrets():
    text = repr(Credentials.from_env(ENV))

    assert "123:abc" not in text
    assert "secret-key" not in text


def test_default_settings():
    settings = MonitorSettings()

    assert settings.coin == "AVAX"
    assert settings.refresh_interval_sec == 60
    assert settings.max_retry == 5
    assert settings.backoff_sec == 3600
    assert settings.send_timeout_sec == 8
    assert settings.recv_window_ms == 10_000

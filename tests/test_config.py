import pytest

from dex_telegram_bot import config

REQUIRED = {
    "TELEGRAM_TOKEN": "token",
    "TELEGRAM_CHANNEL_ID": "@dfusion",
    "WEB_BASE_URL": "https://dex.example",
    "ORDER_FEED_WS_URL": "wss://feed.example/orders",
}


@pytest.fixture(autouse=True)
def _no_dotenv(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, "load_dotenv", lambda: False)
    for name in (*REQUIRED, "ETHEREUM_NODE_URL", "CONTRACT_ADDRESS", "LOG_LEVEL", "ORDER_FEED_SUBSCRIBE_MESSAGE"):
        monkeypatch.delenv(name, raising=False)


def test_load_settings_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name, value in REQUIRED.items():
        monkeypatch.setenv(name, value)
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("ORDER_FEED_SUBSCRIBE_MESSAGE", '{"subscribe": "orders"}')

    settings = config.load_settings()
    assert settings.telegram_channel_id == "@dfusion"
    assert settings.web_base_url == "https://dex.example"
    assert settings.order_feed_subscribe_message == {"subscribe": "orders"}
    assert settings.ethereum_node_url is None
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("missing", sorted(REQUIRED))
def test_missing_required_variable_fails_fast(monkeypatch: pytest.MonkeyPatch, missing: str) -> None:
    for name, value in REQUIRED.items():
        if name != missing:
            monkeypatch.setenv(name, value)

    with pytest.raises(ValueError, match=missing):
        config.load_settings()

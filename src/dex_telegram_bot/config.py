from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Any

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    telegram_token: str
    telegram_channel_id: str
    web_base_url: str
    order_feed_ws_url: str
    order_feed_subscribe_message: dict[str, Any] | None
    ethereum_node_url: str | None
    contract_address: str | None
    log_level: str


def _required(name: str) -> str:
    value = os.getenv(name, "").strip()
    if not value:
        raise ValueError(f"Missing required environment variable: {name}")
    return value


def _optional(name: str) -> str | None:
    return os.getenv(name, "").strip() or None


def _optional_json(name: str) -> dict[str, Any] | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    parsed = json.loads(raw)
    if not isinstance(parsed, dict):
        raise ValueError(f"{name} must decode to a JSON object")
    return parsed


def load_settings() -> Settings:
    load_dotenv()
    return Settings(
        telegram_token=_required("TELEGRAM_TOKEN"),
        telegram_channel_id=_required("TELEGRAM_CHANNEL_ID"),
        web_base_url=_required("WEB_BASE_URL"),
        order_feed_ws_url=_required("ORDER_FEED_WS_URL"),
        order_feed_subscribe_message=_optional_json("ORDER_FEED_SUBSCRIBE_MESSAGE"),
        ethereum_node_url=_optional("ETHEREUM_NODE_URL"),
        contract_address=_optional("CONTRACT_ADDRESS"),
        log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper(),
    )

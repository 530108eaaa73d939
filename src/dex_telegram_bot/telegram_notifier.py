from __future__ import annotations

import logging

import httpx

from .errors import DeliveryError

logger = logging.getLogger(__name__)


class TelegramNotifier:
    def __init__(
        self,
        bot_token: str,
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = f"https://api.telegram.org/bot{bot_token}/sendMessage"
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def close(self) -> None:
        await self._client.aclose()

    async def send_message(self, chat_id: str, text: str, parse_mode: str = "Markdown") -> None:
        # Single attempt: a failed announcement is lost, not retried.
        try:
            response = await self._client.post(
                self._url,
                json={
                    "chat_id": chat_id,
                    "text": text,
                    "parse_mode": parse_mode,
                },
            )
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise DeliveryError(f"Telegram send failed: {exc}") from exc

        if not data.get("ok", False):
            raise DeliveryError(f"Telegram send failed: {data}")
        logger.debug("Telegram message delivered to %s", chat_id)

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import AsyncIterator, Callable
from datetime import datetime, timezone
from typing import Any

import websockets

from .errors import InvalidOrderData, SubscriptionError
from .types import Order, Token

logger = logging.getLogger(__name__)

OrderCallback = Callable[[Order], Any]
ErrorCallback = Callable[[BaseException], Any]


class OrderPlacementStream:
    def __init__(
        self,
        ws_url: str,
        subscribe_message: dict[str, Any] | None = None,
        initial_backoff: float = 1.0,
    ) -> None:
        self.ws_url = ws_url
        self.subscribe_message = subscribe_message
        self.initial_backoff = initial_backoff

    async def orders(self, on_error: ErrorCallback | None = None) -> AsyncIterator[Order]:
        backoff = self.initial_backoff
        while True:
            try:
                async with websockets.connect(self.ws_url, ping_interval=20, ping_timeout=20) as ws:
                    if self.subscribe_message is not None:
                        await ws.send(json.dumps(self.subscribe_message))
                    logger.info("Connected to order feed %s", self.ws_url)
                    backoff = self.initial_backoff

                    async for raw in ws:
                        try:
                            orders = parse_order_message(raw)
                        except InvalidOrderData as exc:
                            logger.warning("Dropping malformed order event: %s", exc)
                            continue
                        for order in orders:
                            yield order
            except asyncio.CancelledError:
                raise
            except Exception as exc:
                error = SubscriptionError(f"Order feed disconnected: {exc}")
                error.__cause__ = exc
                if on_error is not None:
                    on_error(error)
                logger.warning("Order feed disconnected (%s). Reconnecting in %.1fs", exc, backoff)
                await asyncio.sleep(backoff)
                backoff = min(backoff * 2, 30.0)

    async def watch_order_placement(
        self,
        on_new_order: OrderCallback,
        on_error: ErrorCallback,
    ) -> None:
        async for order in self.orders(on_error):
            try:
                on_new_order(order)
            except InvalidOrderData as exc:
                logger.warning("Dropping order from %s: %s", order.owner, exc)
            except Exception:
                logger.exception("Unhandled error processing order from %s", order.owner)


def parse_order_message(raw: str | bytes) -> list[Order]:
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise InvalidOrderData(f"Order event is not valid JSON: {exc}") from exc

    orders: list[Order] = []
    for record in _extract_order_records(payload):
        try:
            orders.append(_normalize_order(record))
        except InvalidOrderData as exc:
            logger.warning("Skipping malformed order record from %s: %s", record.get("owner"), exc)
    return orders


def _extract_order_records(payload: Any) -> list[dict[str, Any]]:
    results: list[dict[str, Any]] = []

    def visit(node: Any) -> None:
        if isinstance(node, list):
            for item in node:
                visit(item)
            return

        if not isinstance(node, dict):
            return

        if _looks_like_order(node):
            results.append(node)
            return

        for key in ("data", "orders", "payload", "result"):
            if key in node:
                visit(node[key])

    visit(payload)
    return results


def _looks_like_order(record: dict[str, Any]) -> bool:
    keys = set(record.keys())
    return {"buyToken", "sellToken"} <= keys and bool(
        keys & {"priceNumerator", "priceDenominator"}
    )


def _normalize_order(record: dict[str, Any]) -> Order:
    return Order(
        owner=_required_text(record, "owner"),
        buy_token=_normalize_token(record.get("buyToken"), "buyToken"),
        sell_token=_normalize_token(record.get("sellToken"), "sellToken"),
        valid_from=_timestamp(record.get("validFrom"), "validFrom"),
        valid_until=_timestamp(record.get("validUntil"), "validUntil"),
        price_numerator=_integer(record.get("priceNumerator"), "priceNumerator"),
        price_denominator=_integer(record.get("priceDenominator"), "priceDenominator"),
    )


def _normalize_token(value: Any, field: str) -> Token:
    if not isinstance(value, dict):
        raise InvalidOrderData(f"{field} must be an object, got {value!r}")

    decimals = _integer(value.get("decimals"), f"{field}.decimals")
    if decimals < 0:
        raise InvalidOrderData(f"{field}.decimals must not be negative, got {decimals}")

    return Token(
        address=_required_text(value, "address", field),
        decimals=decimals,
        symbol=_string_or_none(value.get("symbol")),
        name=_string_or_none(value.get("name")),
    )


def _required_text(record: dict[str, Any], key: str, parent: str | None = None) -> str:
    text = _string_or_none(record.get(key))
    if text is None:
        name = f"{parent}.{key}" if parent else key
        raise InvalidOrderData(f"Missing {name}")
    return text


def _integer(value: Any, field: str) -> int:
    # Raw token amounts exceed float precision, so only ints and integer strings are accepted.
    if isinstance(value, bool):
        raise InvalidOrderData(f"{field} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text, 16) if text.lower().startswith("0x") else int(text)
        except ValueError:
            pass
    raise InvalidOrderData(f"{field} must be an integer, got {value!r}")


def _timestamp(value: Any, field: str) -> datetime:
    if isinstance(value, bool):
        raise InvalidOrderData(f"{field} must be a Unix timestamp, got {value!r}")
    try:
        ts = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidOrderData(f"{field} must be a Unix timestamp, got {value!r}") from exc

    if ts > 10**12:
        ts /= 1000

    try:
        return datetime.fromtimestamp(ts, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as exc:
        raise InvalidOrderData(f"{field} is out of range: {value!r}") from exc


def _string_or_none(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Protocol

from .amounts import fill_amount, format_amount_full, format_token_amount
from .formatting import format_order_message
from .pricing import order_price
from .trade_window import describe_trade_window
from .types import Order, OrderAnnouncement

logger = logging.getLogger(__name__)


class MessageSink(Protocol):
    async def send_message(self, chat_id: str, text: str, parse_mode: str = "Markdown") -> None: ...


@dataclass(frozen=True)
class PipelineContext:
    sink: MessageSink
    channel_id: str
    base_trade_url: str


def utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


def build_announcement(order: Order, now: datetime) -> OrderAnnouncement:
    sell_token = order.sell_token
    buy_token = order.buy_token
    sell_amount = format_token_amount(order.price_denominator, sell_token.decimals)
    buy_amount = format_token_amount(order.price_numerator, buy_token.decimals)

    # The headline reads from the owner's side: sell `denominator`, receive `numerator`.
    # The link is for the counterparty, who sells the buy token with the fill margin.
    return OrderAnnouncement(
        sell_label=sell_token.label,
        buy_label=buy_token.label,
        price=order_price(order),
        sell_amount=sell_amount.display,
        buy_amount=buy_amount.display,
        fill_sell_amount=format_amount_full(fill_amount(order.price_numerator), buy_token.decimals),
        fill_buy_amount=sell_amount.full,
        window_description=describe_trade_window(order.valid_from, order.valid_until, now),
    )


class OrderPipeline:
    """Turns order placement events into channel announcements.

    Delivery is best-effort and at-most-once: each message is sent in a
    background task whose failure is logged and dropped. A notification can
    be lost, and nothing here prevents the same order from being announced
    twice if the feed replays it.
    """

    def __init__(self, context: PipelineContext, clock: Callable[[], datetime] = utcnow) -> None:
        self.context = context
        self._clock = clock
        self._pending: set[asyncio.Task[None]] = set()

    def handle_order(self, order: Order) -> str:
        announcement = build_announcement(order, self._clock())
        text = format_order_message(announcement, self.context.base_trade_url)

        task = asyncio.get_running_loop().create_task(self._deliver(order, text))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return text

    def handle_error(self, error: BaseException) -> None:
        logger.error("Error watching order placements: %s", error)

    async def wait_for_deliveries(self) -> None:
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

    async def _deliver(self, order: Order, text: str) -> None:
        try:
            await self.context.sink.send_message(self.context.channel_id, text, parse_mode="Markdown")
            logger.info(
                "Order announced owner=%s pair=%s-%s",
                order.owner,
                order.sell_token.label,
                order.buy_token.label,
            )
        except Exception as exc:
            logger.exception("Failed to announce order from %s: %s", order.owner, exc)

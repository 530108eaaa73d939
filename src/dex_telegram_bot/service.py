from __future__ import annotations

import logging

from .config import Settings
from .formatting import format_about_message
from .node_info import NodeInfoClient, bot_version
from .order_stream import OrderPlacementStream
from .pipeline import OrderPipeline, PipelineContext
from .telegram_notifier import TelegramNotifier

logger = logging.getLogger(__name__)


class BotService:
    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.stream = OrderPlacementStream(
            ws_url=settings.order_feed_ws_url,
            subscribe_message=settings.order_feed_subscribe_message,
        )
        self.notifier = TelegramNotifier(settings.telegram_token)
        self.node: NodeInfoClient | None = None
        if settings.ethereum_node_url:
            self.node = NodeInfoClient(settings.ethereum_node_url, settings.contract_address)
        self.pipeline = OrderPipeline(
            PipelineContext(
                sink=self.notifier,
                channel_id=settings.telegram_channel_id,
                base_trade_url=settings.web_base_url,
            )
        )

    async def run(self) -> None:
        logger.info("The bot v%s is up :)", bot_version())
        await self._log_about()
        try:
            await self.stream.watch_order_placement(
                on_new_order=self.pipeline.handle_order,
                on_error=self.pipeline.handle_error,
            )
        finally:
            logger.info("Stopping bot v%s. Bye!", bot_version())
            await self.pipeline.wait_for_deliveries()
            await self.notifier.close()
            if self.node is not None:
                await self.node.close()

    async def _log_about(self) -> None:
        if self.node is None:
            return
        try:
            about = await self.node.get_about()
        except Exception as exc:
            logger.error("Could not read node info from %s: %s", self.settings.ethereum_node_url, exc)
            return

        logger.info(
            "Using contract %s in network %s (%s). Last block: %s",
            about.contract_address,
            about.network_id,
            about.node_info,
            about.block_number,
        )
        logger.debug("%s", format_about_message(about))

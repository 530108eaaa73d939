from __future__ import annotations

import asyncio
import logging
import sys

from .config import Settings, load_settings
from .service import BotService

logger = logging.getLogger("dex_telegram_bot")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


async def run_bot(settings: Settings) -> None:
    service = BotService(settings)
    await service.run()


def main() -> None:
    try:
        settings = load_settings()
    except ValueError as exc:
        configure_logging("INFO")
        logger.error("Invalid configuration: %s", exc)
        sys.exit(1)

    configure_logging(settings.log_level)
    try:
        asyncio.run(run_bot(settings))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()

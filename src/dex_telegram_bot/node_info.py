from __future__ import annotations

import itertools
import logging
from importlib.metadata import PackageNotFoundError, version
from typing import Any

import httpx

from .types import About

logger = logging.getLogger(__name__)


def bot_version() -> str:
    try:
        return version("dex-telegram-bot")
    except PackageNotFoundError:
        return "0.0.0"


class NodeInfoClient:
    """Reads basic facts about the Ethereum node the order feed is indexed from."""

    def __init__(
        self,
        node_url: str,
        contract_address: str | None = None,
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.node_url = node_url
        self.contract_address = contract_address
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)
        self._ids = itertools.count(1)

    async def close(self) -> None:
        await self._client.aclose()

    async def get_about(self) -> About:
        block_number = await self._call("eth_blockNumber")
        network_id = await self._call("net_version")
        node_info = await self._call("web3_clientVersion")

        return About(
            block_number=int(block_number, 16),
            network_id=str(network_id),
            node_info=str(node_info),
            version=bot_version(),
            contract_address=self.contract_address,
        )

    async def _call(self, method: str, params: list[Any] | None = None) -> Any:
        resp = await self._client.post(
            self.node_url,
            json={"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": params or []},
        )
        resp.raise_for_status()
        data = resp.json()
        if "error" in data:
            raise RuntimeError(f"JSON-RPC {method} failed: {data['error']}")
        logger.debug("JSON-RPC %s -> %s", method, data.get("result"))
        return data.get("result")

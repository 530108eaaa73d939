import asyncio
import json

import httpx

from dex_telegram_bot.node_info import NodeInfoClient

RESULTS = {
    "eth_blockNumber": "0x10",
    "net_version": "1",
    "web3_clientVersion": "Geth/v1.13.0",
}


def test_get_about_reads_node_facts() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        return httpx.Response(
            200, json={"jsonrpc": "2.0", "id": payload["id"], "result": RESULTS[payload["method"]]}
        )

    async def scenario():
        client = NodeInfoClient("https://node.example", "0xcontract", transport=httpx.MockTransport(handler))
        try:
            return await client.get_about()
        finally:
            await client.close()

    about = asyncio.run(scenario())
    assert about.block_number == 16
    assert about.network_id == "1"
    assert about.node_info == "Geth/v1.13.0"
    assert about.contract_address == "0xcontract"
    assert about.version

from __future__ import annotations

from .pricing import format_price
from .types import About, OrderAnnouncement

REPOSITORY_URL = "https://github.com/gnosis/dex-telegram"


def build_trade_link(
    base_url: str,
    buy_label: str,
    sell_label: str,
    sell_amount: str,
    buy_amount: str,
) -> str:
    return f"{base_url.rstrip('/')}/trade/{buy_label}-{sell_label}?sell={sell_amount}&buy={buy_amount}"


def format_order_message(announcement: OrderAnnouncement, base_trade_url: str) -> str:
    # Labels go into Markdown as-is; a label with control characters breaks the layout.
    sell = announcement.sell_label
    buy = announcement.buy_label
    trade_link = build_trade_link(
        base_trade_url,
        buy,
        sell,
        announcement.fill_sell_amount,
        announcement.fill_buy_amount,
    )

    return (
        f"Sell *{announcement.sell_amount}* `{sell}` for *{announcement.buy_amount}* `{buy}`\n\n"
        f"  - *Price*:  1 `{sell}` = {format_price(announcement.price)} `{buy}`\n"
        f"{announcement.window_description}\n\n"
        f"Fill the order here: {trade_link}"
    )


def format_about_message(about: About) -> str:
    contract = about.contract_address or "N/A"
    return (
        "I'm just a bot watching the dFusion smart contract.\n\n"
        f"If you want to know more about me, checkout my code in {REPOSITORY_URL}\n\n"
        "Some interesting facts are:\n"
        f"- Bot version: {about.version}\n"
        f"- Contract Address: {contract}\n"
        f"- Ethereum Network: {about.network_id}\n"
        f"- Ethereum Node: {about.node_info}\n"
        f"- Last mined block: {about.block_number}"
    )

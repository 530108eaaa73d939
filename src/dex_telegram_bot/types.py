from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class Token:
    address: str
    decimals: int
    symbol: str | None = None
    name: str | None = None

    @property
    def label(self) -> str:
        return self.symbol or self.name or self.address


@dataclass(frozen=True)
class Order:
    owner: str
    buy_token: Token
    sell_token: Token
    valid_from: datetime
    valid_until: datetime
    price_numerator: int
    price_denominator: int


@dataclass(frozen=True)
class FormattedAmount:
    display: str
    full: str


@dataclass(frozen=True)
class OrderAnnouncement:
    sell_label: str
    buy_label: str
    price: Decimal
    sell_amount: str
    buy_amount: str
    fill_sell_amount: str
    fill_buy_amount: str
    window_description: str


@dataclass(frozen=True)
class About:
    block_number: int
    network_id: str
    node_info: str
    version: str
    contract_address: str | None

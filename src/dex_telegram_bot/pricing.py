from __future__ import annotations

from decimal import Decimal

from .errors import InvalidOrderData
from .types import Order


def _require_int(name: str, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidOrderData(f"{name} must be an integer, got {value!r}")
    return value


def normalize_price(
    price_numerator: int,
    price_denominator: int,
    buy_decimals: int,
    sell_decimals: int,
) -> Decimal:
    """Price of one sell token unit expressed in buy token units.

    Numerator and denominator are raw amounts in each token's smallest unit,
    so the difference in decimals is folded in before dividing.
    """
    numerator = _require_int("priceNumerator", price_numerator)
    denominator = _require_int("priceDenominator", price_denominator)
    buy_decimals = _require_int("buyToken.decimals", buy_decimals)
    sell_decimals = _require_int("sellToken.decimals", sell_decimals)

    if denominator <= 0:
        raise InvalidOrderData(f"priceDenominator must be positive, got {denominator}")
    if numerator < 0:
        raise InvalidOrderData(f"priceNumerator must not be negative, got {numerator}")
    if buy_decimals < 0 or sell_decimals < 0:
        raise InvalidOrderData("Token decimals must not be negative")

    if buy_decimals >= sell_decimals:
        factor = 10 ** (buy_decimals - sell_decimals)
        return Decimal(numerator) / Decimal(denominator * factor)

    factor = 10 ** (sell_decimals - buy_decimals)
    return Decimal(numerator * factor) / Decimal(denominator)


def order_price(order: Order) -> Decimal:
    return normalize_price(
        order.price_numerator,
        order.price_denominator,
        order.buy_token.decimals,
        order.sell_token.decimals,
    )


def format_price(price: Decimal) -> str:
    text = format(price, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text

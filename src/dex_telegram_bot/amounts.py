from __future__ import annotations

from .errors import InvalidOrderData
from .types import FormattedAmount

# Protocol fee is 1 / FEE_DENOMINATOR of the traded amount.
FEE_DENOMINATOR = 1000

# Solvers only match orders leaving a spread of at least twice the fee.
FILL_FACTOR = 1 + 2 / FEE_DENOMINATOR

DISPLAY_PRECISION = 4


def _validate(amount: object, decimals: object) -> tuple[int, int]:
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidOrderData(f"Amount must be an integer, got {amount!r}")
    if amount < 0:
        raise InvalidOrderData(f"Amount must not be negative, got {amount}")
    if isinstance(decimals, bool) or not isinstance(decimals, int) or decimals < 0:
        raise InvalidOrderData(f"Decimals must be a non-negative integer, got {decimals!r}")
    return amount, decimals


def _split(amount: int, decimals: int) -> tuple[int, str]:
    integer_part, fraction = divmod(amount, 10**decimals)
    digits = str(fraction).rjust(decimals, "0") if decimals else ""
    return integer_part, digits


def format_amount(amount: int, decimals: int, precision: int = DISPLAY_PRECISION) -> str:
    """Short headline form: thousands separators, fraction truncated to `precision` digits."""
    amount, decimals = _validate(amount, decimals)
    integer_part, digits = _split(amount, decimals)
    digits = digits[:precision].rstrip("0")
    text = f"{integer_part:,}"
    return f"{text}.{digits}" if digits else text


def format_amount_full(amount: int, decimals: int) -> str:
    amount, decimals = _validate(amount, decimals)
    integer_part, digits = _split(amount, decimals)
    digits = digits.rstrip("0")
    return f"{integer_part}.{digits}" if digits else str(integer_part)


def format_token_amount(amount: int, decimals: int) -> FormattedAmount:
    return FormattedAmount(
        display=format_amount(amount, decimals),
        full=format_amount_full(amount, decimals),
    )


def fill_amount(amount: int) -> int:
    """Raw amount inflated by FILL_FACTOR, rounded up to the next smallest unit."""
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidOrderData(f"Amount must be an integer, got {amount!r}")
    if amount < 0:
        raise InvalidOrderData(f"Amount must not be negative, got {amount}")
    return -(-amount * (FEE_DENOMINATOR + 2) // FEE_DENOMINATOR)

from __future__ import annotations

from decimal import ROUND_DOWN, Decimal, InvalidOperation

from tondex_paths.core.constants.base import MAX_COINS, NANOTONS_PER_TON
from tondex_paths.core.errors import InvalidParameterError


def _to_decimal(value: str | int | float | Decimal) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return Decimal(value)
    return Decimal(str(value).strip())


def to_nano(amount_ton: str | int | float | Decimal) -> int:
    """``to_nano("0.3") == 300_000_000``; fractions below one nanoton are dropped."""
    try:
        amt = _to_decimal(amount_ton)
    except InvalidOperation as exc:
        raise ValueError(f"Invalid TON amount: {amount_ton}") from exc
    if amt < 0:
        raise ValueError("Amount must be non-negative")
    return int((amt * NANOTONS_PER_TON).to_integral_value(rounding=ROUND_DOWN))


def from_nano(amount_nano: int) -> Decimal:
    return Decimal(int(amount_nano)) / NANOTONS_PER_TON


def to_coins(amount: int | str) -> int:
    """Validate an amount destined for a ``coins`` field."""
    try:
        value = int(amount)
    except (TypeError, ValueError) as exc:
        raise InvalidParameterError(f"Invalid coins amount: {amount!r}") from exc
    if value < 0 or value > MAX_COINS:
        raise InvalidParameterError(f"Coins amount out of range: {value}")
    return value

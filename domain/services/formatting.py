from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from domain.services.number_parser import parse_user_number


def round_to(value: Any, decimals: int = 1) -> Decimal | None:
    dec = parse_user_number(value)
    if dec is None or not dec.is_finite():
        return None
    quant = Decimal("1") if decimals <= 0 else Decimal(f"1.{'0' * decimals}")
    return dec.quantize(quant, rounding=ROUND_HALF_UP)


def fmt_decimal(value: Any, decimals: int = 1) -> str:
    rounded = round_to(value, decimals)
    if rounded is None:
        return "-"
    return f"{rounded:.{max(decimals, 0)}f}"


def format_weight(grams: Any, decimals: int = 0) -> str:
    """Weight with unit, e.g. ``"501g"``."""
    return f"{fmt_decimal(grams, decimals)}g"


def format_percent(percent: Any, decimals: int = 1) -> str:
    return f"{fmt_decimal(percent, decimals)}%"


def format_hours(hours: Any) -> str:
    """Duration as ``"45 min"``, ``"4h"`` or ``"4h 30m"``."""
    dec = parse_user_number(hours)
    if dec is None or not dec.is_finite():
        return "-"
    if dec < 1:
        return f"{round_to(dec * 60, 0):.0f} min"
    whole = int(dec)
    minutes = int(round_to((dec - whole) * 60, 0))
    if minutes == 60:
        whole, minutes = whole + 1, 0
    if minutes == 0:
        return f"{whole}h"
    return f"{whole}h {minutes}m"

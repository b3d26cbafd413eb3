from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

from domain.exceptions import InvalidInputError


def parse_user_number(value: Any) -> Decimal | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value
    if isinstance(value, (int, float)):
        return Decimal(str(value))

    text = str(value).strip()
    if not text:
        return None

    cleaned = text.replace(" ", "")
    if "," in cleaned:
        cleaned = cleaned.replace(".", "")
        cleaned = cleaned.replace(",", ".")

    try:
        return Decimal(cleaned)
    except (InvalidOperation, ValueError):
        return None


def to_decimal(value: Any, field: str = "value") -> Decimal:
    """Coerce a user or caller supplied number to a finite Decimal.

    Raises:
        InvalidInputError: If the value is missing, unparsable or non-finite
    """
    number = parse_user_number(value)
    if number is None:
        raise InvalidInputError(f"{field} must be a valid number", field=field)
    if not number.is_finite():
        raise InvalidInputError(f"{field} must be a finite number", field=field)
    return number


def require_positive(value: Any, field: str = "value") -> Decimal:
    number = to_decimal(value, field)
    if number <= 0:
        raise InvalidInputError(f"{field} must be positive: {number}", field=field)
    return number


def require_non_negative(value: Any, field: str = "value") -> Decimal:
    number = to_decimal(value, field)
    if number < 0:
        raise InvalidInputError(f"{field} cannot be negative: {number}", field=field)
    return number


def require_range(
    value: Any,
    low: Decimal | int,
    high: Decimal | int,
    field: str = "value",
) -> Decimal:
    """Coerce and check ``low <= value <= high``."""
    number = to_decimal(value, field)
    if number < low or number > high:
        raise InvalidInputError(
            f"{field} must be between {low} and {high}: {number}", field=field
        )
    return number

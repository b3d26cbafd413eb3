"""Tests for number parsing and validation helpers."""

from decimal import Decimal

import pytest

from domain.exceptions import InvalidInputError
from domain.services.number_parser import (
    parse_user_number,
    require_non_negative,
    require_positive,
    require_range,
    to_decimal,
)


class TestParseUserNumber:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("12,5", Decimal("12.5")),
            (" 70 ", Decimal("70")),
            (3, Decimal("3")),
            (0.1, Decimal("0.1")),
            (Decimal("2.25"), Decimal("2.25")),
        ],
    )
    def test_parses(self, value, expected) -> None:
        assert parse_user_number(value) == expected

    @pytest.mark.parametrize("value", [None, "", "abc", True])
    def test_rejects(self, value) -> None:
        assert parse_user_number(value) is None


class TestToDecimal:
    def test_rejects_missing(self) -> None:
        with pytest.raises(InvalidInputError, match="must be a valid number") as exc_info:
            to_decimal(None, "Flour weight")

        assert exc_info.value.field == "Flour weight"

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), "Infinity"])
    def test_rejects_non_finite(self, value) -> None:
        with pytest.raises(InvalidInputError, match="finite"):
            to_decimal(value)


class TestRequire:
    def test_positive(self) -> None:
        assert require_positive("1") == Decimal("1")
        with pytest.raises(InvalidInputError, match="must be positive"):
            require_positive(0)

    def test_non_negative(self) -> None:
        assert require_non_negative(0) == Decimal("0")
        with pytest.raises(InvalidInputError, match="cannot be negative"):
            require_non_negative(-0.5)

    def test_range_is_inclusive(self) -> None:
        assert require_range(1, 1, 5) == Decimal("1")
        assert require_range(5, 1, 5) == Decimal("5")
        with pytest.raises(InvalidInputError, match="between 1 and 5"):
            require_range("5.1", 1, 5)

    def test_invalid_input_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            require_positive("abc")

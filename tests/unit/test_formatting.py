"""Tests for display formatting helpers."""

from decimal import Decimal

import pytest

from domain.services.formatting import (
    fmt_decimal,
    format_hours,
    format_percent,
    format_weight,
    round_to,
)


class TestRounding:
    def test_half_up(self) -> None:
        assert round_to(Decimal("2.25"), 1) == Decimal("2.3")
        assert round_to(Decimal("2.5"), 0) == Decimal("3")

    def test_invalid(self) -> None:
        assert round_to("abc") is None
        assert fmt_decimal(None) == "-"


class TestFormatters:
    def test_weight(self) -> None:
        assert format_weight(Decimal("500.5")) == "501g"

    def test_percent(self) -> None:
        assert format_percent(Decimal("70.05")) == "70.1%"

    @pytest.mark.parametrize(
        "hours, expected",
        [
            (Decimal("0.75"), "45 min"),
            (Decimal("4"), "4h"),
            (Decimal("4.5"), "4h 30m"),
            (Decimal("2.999"), "3h"),
            ("abc", "-"),
        ],
    )
    def test_hours(self, hours, expected: str) -> None:
        assert format_hours(hours) == expected

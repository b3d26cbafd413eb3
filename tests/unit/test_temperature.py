"""Tests for the desired dough temperature solver."""

from decimal import Decimal

import pytest

from domain.exceptions import InvalidInputError
from domain.services.temperature import (
    WaterTemperatureAdvice,
    classify_water_temperature,
    required_water_temp_f,
    solve_water_temperature,
)


class TestRequiredWaterTemp:
    def test_four_factor_formula(self) -> None:
        assert required_water_temp_f(78, 72, 70, 75, 25) == Decimal("70")

    def test_friction_defaults_to_zero(self) -> None:
        assert required_water_temp_f(75, 70, 70, 70) == Decimal("90")

    def test_no_clamping(self) -> None:
        assert required_water_temp_f(70, 90, 90, 90, 30) == Decimal("-20")

    @pytest.mark.parametrize("bad", [None, "warm", float("nan")])
    def test_non_finite_input_rejected(self, bad) -> None:
        with pytest.raises(InvalidInputError):
            required_water_temp_f(78, bad, 70, 75, 25)


class TestClassifyWaterTemperature:
    @pytest.mark.parametrize(
        "temperature, advice",
        [
            ("31.9", WaterTemperatureAdvice.ICE_WATER),
            ("32", WaterTemperatureAdvice.ROOM_WATER),
            ("85", WaterTemperatureAdvice.ROOM_WATER),
            ("85.1", WaterTemperatureAdvice.WARM_WATER),
            ("100", WaterTemperatureAdvice.WARM_WATER),
            ("100.1", WaterTemperatureAdvice.TOO_HOT),
        ],
    )
    def test_boundaries(self, temperature: str, advice: WaterTemperatureAdvice) -> None:
        assert classify_water_temperature(temperature) is advice

    def test_severity(self) -> None:
        assert WaterTemperatureAdvice.TOO_HOT.severity == "error"
        assert WaterTemperatureAdvice.ICE_WATER.text == "Use ice water"


class TestSolveWaterTemperature:
    def test_solve(self) -> None:
        result = solve_water_temperature(78, 72, 70, 75, 25)

        assert result.temperature_f == Decimal("70")
        assert result.advice is WaterTemperatureAdvice.ROOM_WATER

    def test_hot_kitchen_needs_ice(self) -> None:
        result = solve_water_temperature(76, 85, 85, 85, 30)

        assert result.temperature_f == Decimal("19")
        assert result.advice is WaterTemperatureAdvice.ICE_WATER

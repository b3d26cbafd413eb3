"""Desired dough temperature (DDT) solver.

DDT x 4 = room + flour + starter + water + friction, solved for water.
Temperatures are in °F.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from config.constants import (
    DDT_FACTOR_COUNT,
    WATER_TEMP_ICE_BELOW_F,
    WATER_TEMP_TOO_HOT_ABOVE_F,
    WATER_TEMP_WARM_ABOVE_F,
)
from domain.services.number_parser import to_decimal


class WaterTemperatureAdvice(Enum):
    """Advice for a solved water temperature, with its severity."""

    ICE_WATER = ("Use ice water", "info")
    TOO_HOT = ("Temp too high! Adjust inputs", "error")
    WARM_WATER = ("Warm water needed", "warning")
    ROOM_WATER = ("Cold/room temp water", "ok")

    def __init__(self, text: str, severity: str) -> None:
        self.text = text
        self.severity = severity


@dataclass(frozen=True)
class WaterTemperature:
    temperature_f: Decimal
    advice: WaterTemperatureAdvice


def required_water_temp_f(
    target_ddt: Any,
    room_temp: Any,
    flour_temp: Any,
    starter_temp: Any,
    friction_factor: Any = 0,
) -> Decimal:
    """Mix-water temperature that lands the dough at the target.

    No clamping; see ``classify_water_temperature``.

    Raises:
        InvalidInputError: If any input is not a finite number
    """
    target = to_decimal(target_ddt, "Target dough temperature")
    room = to_decimal(room_temp, "Room temperature")
    flour = to_decimal(flour_temp, "Flour temperature")
    starter = to_decimal(starter_temp, "Starter temperature")
    friction = to_decimal(friction_factor, "Friction factor")
    return target * DDT_FACTOR_COUNT - room - flour - starter - friction


def classify_water_temperature(temperature_f: Any) -> WaterTemperatureAdvice:
    temp = to_decimal(temperature_f, "Water temperature")
    if temp < WATER_TEMP_ICE_BELOW_F:
        return WaterTemperatureAdvice.ICE_WATER
    if temp > WATER_TEMP_TOO_HOT_ABOVE_F:
        return WaterTemperatureAdvice.TOO_HOT
    if temp > WATER_TEMP_WARM_ABOVE_F:
        return WaterTemperatureAdvice.WARM_WATER
    return WaterTemperatureAdvice.ROOM_WATER


def solve_water_temperature(
    target_ddt: Any,
    room_temp: Any,
    flour_temp: Any,
    starter_temp: Any,
    friction_factor: Any = 0,
) -> WaterTemperature:
    temperature = required_water_temp_f(
        target_ddt, room_temp, flour_temp, starter_temp, friction_factor
    )
    return WaterTemperature(
        temperature_f=temperature,
        advice=classify_water_temperature(temperature),
    )

"""Hydration calculations: water as a percentage of flour."""

from decimal import Decimal
from enum import Enum
from typing import Any

from config.constants import HYDRATION_HIGH_BELOW, HYDRATION_LOW_BELOW, HYDRATION_MEDIUM_BELOW
from domain.services.number_parser import require_non_negative, require_positive

HUNDRED = Decimal("100")


class HydrationLevel(Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    VERY_HIGH = "Very High"


def hydration_percent(flour_g: Any, water_g: Any) -> Decimal:
    """Hydration of a dough, defined only for positive flour."""
    flour = require_positive(flour_g, "Flour weight")
    water = require_non_negative(water_g, "Water weight")
    return water / flour * HUNDRED


def water_for_target_hydration(flour_g: Any, target_percent: Any) -> Decimal:
    flour = require_positive(flour_g, "Flour weight")
    target = require_non_negative(target_percent, "Target hydration")
    return flour * target / HUNDRED


def flour_for_target_hydration(water_g: Any, target_percent: Any) -> Decimal:
    """Flour needed so that the given water reaches the target hydration.

    Raises:
        InvalidInputError: If the target hydration is not positive
    """
    water = require_non_negative(water_g, "Water weight")
    target = require_positive(target_percent, "Target hydration")
    return water * HUNDRED / target


def classify_hydration(percent: Any) -> HydrationLevel:
    value = require_non_negative(percent, "Hydration")
    if value < HYDRATION_LOW_BELOW:
        return HydrationLevel.LOW
    if value < HYDRATION_MEDIUM_BELOW:
        return HydrationLevel.MEDIUM
    if value < HYDRATION_HIGH_BELOW:
        return HydrationLevel.HIGH
    return HydrationLevel.VERY_HIGH

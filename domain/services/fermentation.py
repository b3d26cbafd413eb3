"""Bulk fermentation time estimation.

Empirical model: a 4 hour base at 24°C with 20% strong starter, scaled
by temperature, starter amount, starter strength, hydration and whole
grain content. The constants are tuning values and live in
``config.constants``.
"""

from dataclasses import dataclass, field
from decimal import Decimal, Overflow
from enum import Enum
from typing import Any, Optional

from config.constants import (
    FERMENTATION_BASE_HOURS,
    FERMENTATION_BASE_TEMP_C,
    FERMENTATION_DOUBLING_DEGREES_C,
    FERMENTATION_HYDRATION_EXPONENT,
    FERMENTATION_MAX_HOURS,
    FERMENTATION_MIN_HOURS,
    FERMENTATION_RANGE_HIGH_FACTOR,
    FERMENTATION_RANGE_LOW_FACTOR,
    FERMENTATION_REFERENCE_HYDRATION,
    FERMENTATION_REFERENCE_STARTER_PERCENT,
    FERMENTATION_STARTER_NOTES,
    FERMENTATION_TEMPERATURE_NOTES,
    FERMENTATION_WHOLE_GRAIN_BASE,
    FERMENTATION_WHOLE_GRAIN_STEP,
    RISE_FAST_STARTER_ABOVE,
    RISE_FAST_TEMP_ABOVE,
    RISE_SLOW_STARTER_BELOW,
    RISE_SLOW_TEMP_BELOW,
    RISE_TARGET_DEFAULT,
    RISE_TARGET_FAST,
    RISE_TARGET_SLOW,
    STRENGTH_DESCRIPTIONS,
    STRENGTH_FACTORS,
    WEAK_STARTER_NOTE,
    WHOLE_GRAIN_NOTE,
    WHOLE_GRAIN_NOTE_ABOVE,
)
from domain.exceptions import InvalidInputError
from domain.services.number_parser import require_non_negative, require_positive

ONE = Decimal("1")
TWO = Decimal("2")


class StarterStrength(Enum):
    WEAK = "weak"
    MODERATE = "moderate"
    STRONG = "strong"
    VERY_STRONG = "very_strong"

    @property
    def factor(self) -> Decimal:
        return STRENGTH_FACTORS[self.value]

    @property
    def description(self) -> str:
        return STRENGTH_DESCRIPTIONS[self.value]


@dataclass(frozen=True)
class FermentationEstimate:
    min_hours: Decimal
    optimal_hours: Decimal
    max_hours: Decimal
    rise_target: str
    notes: tuple[str, ...] = field(default_factory=tuple)


class BulkFermentationEstimator:
    """Estimate bulk fermentation time ranges."""

    def estimate(
        self,
        temperature_c: Any,
        starter_percent: Any,
        strength: StarterStrength = StarterStrength.STRONG,
        hydration_pct: Optional[Any] = None,
        whole_grain_pct: Optional[Any] = None,
    ) -> FermentationEstimate:
        """Estimate the bulk fermentation window.

        Args:
            temperature_c: Dough temperature in °C
            starter_percent: Starter as baker's percentage
            strength: How vigorous the starter is
            hydration_pct: Dough hydration; factor is 1 when omitted
            whole_grain_pct: Whole grain share of the flour; factor is 1 when omitted

        Returns:
            Minimum, optimal and maximum hours with rise target and notes

        Raises:
            InvalidInputError: If temperature or starter percent is non-finite
                or not positive, hydration is not positive, or the inputs
                are too extreme to compute
        """
        temp = require_positive(temperature_c, "Temperature")
        starter = require_positive(starter_percent, "Starter percent")
        if not isinstance(strength, StarterStrength):
            raise InvalidInputError(f"Unknown starter strength: {strength!r}", field="strength")
        hydration = (
            require_positive(hydration_pct, "Hydration") if hydration_pct is not None else None
        )
        whole_grain = (
            require_non_negative(whole_grain_pct, "Whole grain percent")
            if whole_grain_pct is not None
            else None
        )

        try:
            optimal = FERMENTATION_BASE_HOURS * self._multiplier(
                temp, starter, strength, hydration, whole_grain
            )
        except Overflow as exc:
            raise InvalidInputError("Fermentation inputs are out of range") from exc
        optimal = min(max(optimal, FERMENTATION_MIN_HOURS), FERMENTATION_MAX_HOURS)

        return FermentationEstimate(
            min_hours=optimal * FERMENTATION_RANGE_LOW_FACTOR,
            optimal_hours=optimal,
            max_hours=min(FERMENTATION_MAX_HOURS, optimal * FERMENTATION_RANGE_HIGH_FACTOR),
            rise_target=rise_target(temp, starter),
            notes=fermentation_notes(temp, starter, strength, whole_grain),
        )

    def _multiplier(
        self,
        temp: Decimal,
        starter: Decimal,
        strength: StarterStrength,
        hydration: Optional[Decimal],
        whole_grain: Optional[Decimal],
    ) -> Decimal:
        temp_factor = TWO ** (-(temp - FERMENTATION_BASE_TEMP_C) / FERMENTATION_DOUBLING_DEGREES_C)
        starter_factor = FERMENTATION_REFERENCE_STARTER_PERCENT / starter
        hydration_factor = ONE
        if hydration is not None:
            hydration_factor = (
                FERMENTATION_REFERENCE_HYDRATION / hydration
            ) ** FERMENTATION_HYDRATION_EXPONENT
        whole_grain_factor = ONE
        if whole_grain is not None:
            whole_grain_factor = FERMENTATION_WHOLE_GRAIN_BASE ** (
                whole_grain / FERMENTATION_WHOLE_GRAIN_STEP
            )
        return temp_factor * starter_factor * strength.factor * hydration_factor * whole_grain_factor


def rise_target(temperature_c: Decimal, starter_percent: Decimal) -> str:
    """Volume increase to aim for before ending bulk fermentation."""
    if temperature_c > RISE_FAST_TEMP_ABOVE or starter_percent > RISE_FAST_STARTER_ABOVE:
        return RISE_TARGET_FAST
    if temperature_c < RISE_SLOW_TEMP_BELOW or starter_percent < RISE_SLOW_STARTER_BELOW:
        return RISE_TARGET_SLOW
    return RISE_TARGET_DEFAULT


def fermentation_notes(
    temperature_c: Decimal,
    starter_percent: Decimal,
    strength: StarterStrength,
    whole_grain_pct: Optional[Decimal],
) -> tuple[str, ...]:
    notes: list[str] = []

    temperature_note = _first_match(temperature_c, FERMENTATION_TEMPERATURE_NOTES)
    if temperature_note:
        notes.append(temperature_note)

    starter_note = _first_match(starter_percent, FERMENTATION_STARTER_NOTES)
    if starter_note:
        notes.append(starter_note)

    if strength is StarterStrength.WEAK:
        notes.append(WEAK_STARTER_NOTE)

    if whole_grain_pct is not None and whole_grain_pct > WHOLE_GRAIN_NOTE_ABOVE:
        notes.append(WHOLE_GRAIN_NOTE)

    return tuple(notes)


def _first_match(value: Decimal, table: tuple[tuple[str, Decimal, str], ...]) -> Optional[str]:
    for operator, threshold, note in table:
        if operator == "<" and value < threshold:
            return note
        if operator == ">" and value > threshold:
            return note
    return None

"""Levain and preferment decomposition.

Splits starters and preferments into their flour and water components,
plans levain feedings and classifies how fast a given starter percentage
will ferment.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from config.constants import PREFERMENT_PROFILES, STARTER_SPEED_ADVICE, STARTER_SPEED_BOUNDS
from domain.exceptions import InvalidInputError
from domain.models import FeedingRatio
from domain.services.number_parser import require_non_negative, require_positive

HUNDRED = Decimal("100")


class PrefermentKind(Enum):
    POOLISH = "poolish"
    BIGA = "biga"
    PATE_FERMENTEE = "pate_fermentee"


class FermentationSpeed(Enum):
    VERY_SLOW = "very_slow"
    SLOW = "slow"
    MODERATE = "moderate"
    FAST = "fast"
    VERY_FAST = "very_fast"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()

    @property
    def advice(self) -> str:
        return STARTER_SPEED_ADVICE[self.value]


@dataclass(frozen=True)
class LevainSplit:
    flour_g: Decimal
    water_g: Decimal


@dataclass(frozen=True)
class FeedingBuild:
    """Amounts to combine for a levain build, plus what to discard."""

    use_starter_g: Decimal
    add_flour_g: Decimal
    add_water_g: Decimal
    discard_g: Decimal

    @property
    def total_g(self) -> Decimal:
        return self.use_starter_g + self.add_flour_g + self.add_water_g


@dataclass(frozen=True)
class PrefermentComposition:
    kind: PrefermentKind
    hydration_percent: Decimal
    flour_g: Decimal
    water_g: Decimal
    yeast_g: Decimal
    salt_g: Decimal
    main_dough_flour_g: Decimal

    @property
    def total_g(self) -> Decimal:
        return self.flour_g + self.water_g + self.yeast_g + self.salt_g


@dataclass(frozen=True)
class StarterSpeedClass:
    speed: FermentationSpeed
    advice: str


@dataclass(frozen=True)
class StarterPercentage:
    starter_flour_g: Decimal
    starter_water_g: Decimal
    starter_percent: Decimal
    speed: FermentationSpeed
    advice: str


def decompose_levain(total_mass_g: Any, hydration_pct: Any) -> LevainSplit:
    """Split a levain mass into flour and water by its hydration.

    Raises:
        InvalidInputError: If mass is not positive or hydration is negative
    """
    mass = require_positive(total_mass_g, "Levain mass")
    hydration = require_non_negative(hydration_pct, "Levain hydration")
    flour = mass / (1 + hydration / HUNDRED)
    return LevainSplit(flour_g=flour, water_g=mass - flour)


def build_feeding(
    recipe_starter_needed_g: Any,
    current_starter_mass_g: Any,
    ratio: FeedingRatio | str,
) -> FeedingBuild:
    """Plan a levain build that yields exactly the starter a recipe needs.

    Args:
        recipe_starter_needed_g: Levain the recipe calls for
        current_starter_mass_g: Starter currently on hand
        ratio: Starter:flour:water ratio (value or ``"S:F:W"`` string)

    Raises:
        InvalidInputError: On non-positive recipe amount or invalid ratio
    """
    if isinstance(ratio, str):
        ratio = FeedingRatio.parse(ratio)
    needed = require_positive(recipe_starter_needed_g, "Recipe starter amount")
    current = require_non_negative(current_starter_mass_g, "Current starter mass")

    total = ratio.total
    use_starter = needed * ratio.starter / total
    return FeedingBuild(
        use_starter_g=use_starter,
        add_flour_g=needed * ratio.flour / total,
        add_water_g=needed * ratio.water / total,
        discard_g=max(Decimal("0"), current - use_starter),
    )


def preferment(total_flour_g: Any, preferment_pct: Any, kind: PrefermentKind) -> PrefermentComposition:
    """Compose a preferment from a share of the recipe's flour.

    Raises:
        InvalidInputError: If flour is not positive or the share is outside (0, 100]
    """
    flour = require_positive(total_flour_g, "Total flour")
    share = require_positive(preferment_pct, "Preferment percent")
    if share > HUNDRED:
        raise InvalidInputError(
            f"Preferment percent must be between 0 and 100: {share}", field="preferment_pct"
        )
    if not isinstance(kind, PrefermentKind):
        raise InvalidInputError(f"Unknown preferment kind: {kind!r}", field="kind")

    hydration, yeast_pct, salt_pct = PREFERMENT_PROFILES[kind.value]
    pref_flour = flour * share / HUNDRED
    return PrefermentComposition(
        kind=kind,
        hydration_percent=hydration,
        flour_g=pref_flour,
        water_g=pref_flour * hydration / HUNDRED,
        yeast_g=pref_flour * yeast_pct / HUNDRED,
        salt_g=pref_flour * salt_pct / HUNDRED,
        main_dough_flour_g=flour - pref_flour,
    )


def starter_percent_class(starter_percent: Any) -> StarterSpeedClass:
    """Fermentation speed for a starter percentage (bounds inclusive-low)."""
    percent = require_non_negative(starter_percent, "Starter percent")
    speed = FermentationSpeed.VERY_SLOW
    for lower_bound, key in STARTER_SPEED_BOUNDS:
        if percent >= lower_bound:
            speed = FermentationSpeed(key)
    return StarterSpeedClass(speed=speed, advice=speed.advice)


def starter_percentage(total_flour_g: Any, starter_mass_g: Any, starter_hydration_pct: Any) -> StarterPercentage:
    """Share of a recipe's flour contributed by its starter."""
    flour = require_positive(total_flour_g, "Total flour")
    split = decompose_levain(starter_mass_g, require_positive(starter_hydration_pct, "Starter hydration"))
    percent = split.flour_g / flour * HUNDRED
    speed_class = starter_percent_class(percent)
    return StarterPercentage(
        starter_flour_g=split.flour_g,
        starter_water_g=split.water_g,
        starter_percent=percent,
        speed=speed_class.speed,
        advice=speed_class.advice,
    )

"""Recipe rescue.

Recovers a dough when one of flour, water, salt or starter was
mis-measured: either by bringing the other ingredients up to the
original ratios ("fix forward") or by accepting the change.
"""

from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum
from typing import Any

from domain.services.number_parser import require_positive

HUNDRED = Decimal("100")
ZERO = Decimal("0")


class RescueIngredient(Enum):
    FLOUR = "flour"
    WATER = "water"
    SALT = "salt"
    STARTER = "starter"


class RescueProblem(Enum):
    TOO_MUCH = "too_much"
    NOT_ENOUGH = "not_enough"


@dataclass(frozen=True)
class DoughAmounts:
    flour_g: Decimal
    water_g: Decimal
    salt_g: Decimal
    starter_g: Decimal

    @property
    def total_g(self) -> Decimal:
        return self.flour_g + self.water_g + self.salt_g + self.starter_g

    @property
    def water_percent(self) -> Decimal:
        return self.water_g / self.flour_g * HUNDRED

    @property
    def salt_percent(self) -> Decimal:
        return self.salt_g / self.flour_g * HUNDRED

    @property
    def starter_percent(self) -> Decimal:
        return self.starter_g / self.flour_g * HUNDRED

    def get(self, ingredient: RescueIngredient) -> Decimal:
        return getattr(self, f"{ingredient.value}_g")

    def scaled(self, factor: Decimal) -> "DoughAmounts":
        return DoughAmounts(
            flour_g=self.flour_g * factor,
            water_g=self.water_g * factor,
            salt_g=self.salt_g * factor,
            starter_g=self.starter_g * factor,
        )

    def minus(self, other: "DoughAmounts") -> "DoughAmounts":
        return DoughAmounts(
            flour_g=self.flour_g - other.flour_g,
            water_g=self.water_g - other.water_g,
            salt_g=self.salt_g - other.salt_g,
            starter_g=self.starter_g - other.starter_g,
        )


@dataclass(frozen=True)
class RescuePlan:
    """Two ways out of a measuring mistake.

    ``fix_forward`` keeps the original ratios, ``additions`` is what to add
    to get there, ``accepted`` is the dough if the mistake is kept.
    """

    fix_forward: DoughAmounts
    additions: DoughAmounts
    accepted: DoughAmounts


def rescue_recipe(
    flour_g: Any,
    water_g: Any,
    salt_g: Any,
    starter_g: Any,
    ingredient: RescueIngredient,
    problem: RescueProblem,
    actual_g: Any,
) -> RescuePlan:
    """Plan how to recover a dough from a mis-measured ingredient.

    Raises:
        InvalidInputError: If any base amount or the actual amount is not positive
    """
    base = DoughAmounts(
        flour_g=require_positive(flour_g, "Flour"),
        water_g=require_positive(water_g, "Water"),
        salt_g=require_positive(salt_g, "Salt"),
        starter_g=require_positive(starter_g, "Starter"),
    )
    actual = require_positive(actual_g, "Actual amount")

    if problem is RescueProblem.NOT_ENOUGH:
        scaled = base.scaled(actual / base.get(ingredient))
        nothing = DoughAmounts(ZERO, ZERO, ZERO, ZERO)
        return RescuePlan(fix_forward=scaled, additions=nothing, accepted=scaled)

    # Re-derive the flour from the over-measured ingredient, then the rest
    # from the original percentages.
    if ingredient is RescueIngredient.FLOUR:
        new_flour = actual
    else:
        new_flour = actual / (base.get(ingredient) / base.flour_g)
    fix_forward = DoughAmounts(
        flour_g=new_flour,
        water_g=new_flour * base.water_percent / HUNDRED,
        salt_g=new_flour * base.salt_percent / HUNDRED,
        starter_g=new_flour * base.starter_percent / HUNDRED,
    )
    fix_forward = replace(fix_forward, **{f"{ingredient.value}_g": actual})
    accepted = replace(base, **{f"{ingredient.value}_g": actual})
    return RescuePlan(
        fix_forward=fix_forward,
        additions=fix_forward.minus(accepted),
        accepted=accepted,
    )

"""Recipe scaling and dough weight conversion.

Scales ingredient lists between yields and converts between pre-bake
and post-bake weights through a baking loss percentage.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable

from domain.exceptions import InvalidInputError
from domain.models import Ingredient
from domain.services.number_parser import require_non_negative, require_positive, to_decimal

HUNDRED = Decimal("100")


@dataclass(frozen=True)
class DoughWeightPlan:
    """Dough to mix for a batch of loaves of a given baked weight."""

    loaves: int
    post_bake_per_loaf_g: Decimal
    pre_bake_per_loaf_g: Decimal
    total_post_bake_g: Decimal
    total_pre_bake_g: Decimal

    @property
    def total_loss_g(self) -> Decimal:
        return weight_loss(self.total_pre_bake_g, self.total_post_bake_g)


def scale_factor(original_yield: Any, target_yield: Any) -> Decimal:
    """Multiplier from the original yield to the target yield.

    Raises:
        InvalidInputError: If the original yield is not positive
    """
    original = require_positive(original_yield, "Original yield")
    target = require_non_negative(target_yield, "Target yield")
    return target / original


def scale(
    ingredients: Iterable[Ingredient],
    original_yield: Any,
    target_yield: Any,
) -> list[Ingredient]:
    """Scale every ingredient amount by target/original yield."""
    factor = scale_factor(original_yield, target_yield)
    if factor == 1:
        return list(ingredients)
    return [ing.with_amount(ing.amount * factor) for ing in ingredients]


def pre_bake_weight(post_bake_weight_g: Any, baking_loss_pct: Any) -> Decimal:
    """Dough weight needed to bake down to the given weight.

    Raises:
        InvalidInputError: If the loss is negative or 100% or more
    """
    post_bake = require_non_negative(post_bake_weight_g, "Post-bake weight")
    loss = _baking_loss(baking_loss_pct)
    return post_bake / (1 - loss / HUNDRED)


def post_bake_weight(pre_bake_weight_g: Any, baking_loss_pct: Any) -> Decimal:
    pre_bake = require_non_negative(pre_bake_weight_g, "Pre-bake weight")
    loss = _baking_loss(baking_loss_pct)
    return pre_bake * (1 - loss / HUNDRED)


def weight_loss(pre_bake_weight_g: Any, post_bake_weight_g: Any) -> Decimal:
    return to_decimal(pre_bake_weight_g, "Pre-bake weight") - to_decimal(
        post_bake_weight_g, "Post-bake weight"
    )


def weight_loss_percent(pre_bake_weight_g: Any, post_bake_weight_g: Any) -> Decimal:
    pre_bake = require_positive(pre_bake_weight_g, "Pre-bake weight")
    return weight_loss(pre_bake, post_bake_weight_g) / pre_bake * HUNDRED


def plan_dough_weight(loaves: int, weight_per_loaf_g: Any, baking_loss_pct: Any) -> DoughWeightPlan:
    """Total dough to mix for ``loaves`` loaves of a baked target weight."""
    if isinstance(loaves, bool) or not isinstance(loaves, int) or loaves <= 0:
        raise InvalidInputError(f"Number of loaves must be positive: {loaves}", field="loaves")
    per_loaf = require_positive(weight_per_loaf_g, "Loaf weight")
    pre_bake_per_loaf = pre_bake_weight(per_loaf, baking_loss_pct)
    return DoughWeightPlan(
        loaves=loaves,
        post_bake_per_loaf_g=per_loaf,
        pre_bake_per_loaf_g=pre_bake_per_loaf,
        total_post_bake_g=per_loaf * loaves,
        total_pre_bake_g=pre_bake_per_loaf * loaves,
    )


def _baking_loss(value: Any) -> Decimal:
    loss = to_decimal(value, "Baking loss")
    if loss < 0 or loss >= HUNDRED:
        raise InvalidInputError(
            f"Baking loss must be at least 0% and below 100%: {loss}", field="baking_loss_pct"
        )
    return loss

"""Tests for recipe rescue."""

from decimal import Decimal

import pytest

from domain.exceptions import InvalidInputError
from domain.services.recipe_rescue import (
    DoughAmounts,
    RescueIngredient,
    RescueProblem,
    rescue_recipe,
)


def _amounts(plan_part: DoughAmounts) -> tuple[Decimal, Decimal, Decimal, Decimal]:
    return (plan_part.flour_g, plan_part.water_g, plan_part.salt_g, plan_part.starter_g)


class TestTooMuch:
    def test_too_much_water(self) -> None:
        plan = rescue_recipe(500, 350, 10, 100, RescueIngredient.WATER, RescueProblem.TOO_MUCH, 420)

        assert _amounts(plan.fix_forward) == (
            Decimal("600"),
            Decimal("420"),
            Decimal("12"),
            Decimal("120"),
        )
        assert _amounts(plan.additions) == (
            Decimal("100"),
            Decimal("0"),
            Decimal("2"),
            Decimal("20"),
        )
        assert _amounts(plan.accepted) == (
            Decimal("500"),
            Decimal("420"),
            Decimal("10"),
            Decimal("100"),
        )

    def test_too_much_flour(self) -> None:
        plan = rescue_recipe(500, 350, 10, 100, RescueIngredient.FLOUR, RescueProblem.TOO_MUCH, 600)

        assert plan.fix_forward.water_g == Decimal("420")
        assert plan.additions.flour_g == Decimal("0")
        assert plan.additions.water_g == Decimal("70")
        assert plan.fix_forward.total_g == Decimal("1152")

    @pytest.mark.parametrize("ingredient", list(RescueIngredient))
    def test_over_measured_ingredient_needs_no_addition(self, ingredient: RescueIngredient) -> None:
        plan = rescue_recipe(500, 350, 10, 100, ingredient, RescueProblem.TOO_MUCH, 1000)

        assert plan.additions.get(ingredient) == Decimal("0")
        assert plan.accepted.get(ingredient) == Decimal("1000")

    def test_fix_forward_keeps_ratios(self) -> None:
        plan = rescue_recipe(500, 350, 10, 100, RescueIngredient.SALT, RescueProblem.TOO_MUCH, 15)

        assert plan.fix_forward.water_percent == Decimal("70")
        assert plan.fix_forward.salt_percent == Decimal("2")
        assert plan.fix_forward.starter_percent == Decimal("20")


class TestNotEnough:
    def test_scales_down(self) -> None:
        plan = rescue_recipe(500, 350, 10, 100, RescueIngredient.FLOUR, RescueProblem.NOT_ENOUGH, 400)

        assert _amounts(plan.fix_forward) == (
            Decimal("400"),
            Decimal("280"),
            Decimal("8"),
            Decimal("80"),
        )
        assert plan.additions.total_g == Decimal("0")
        assert plan.accepted == plan.fix_forward


class TestValidation:
    def test_zero_actual_rejected(self) -> None:
        with pytest.raises(InvalidInputError, match="Actual amount"):
            rescue_recipe(500, 350, 10, 100, RescueIngredient.WATER, RescueProblem.TOO_MUCH, 0)

    def test_zero_base_rejected(self) -> None:
        with pytest.raises(InvalidInputError, match="Salt"):
            rescue_recipe(500, 350, 0, 100, RescueIngredient.WATER, RescueProblem.TOO_MUCH, 400)

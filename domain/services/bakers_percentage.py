"""Baker's percentage conversions.

Converts ingredient amounts between grams and percentages of flour and
aggregates total dough weight. Flour is the only fixed reference (100%);
the remaining percentages can sum to anything.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, Sequence

from config.constants import (
    DEFAULT_SALT_PERCENT,
    DEFAULT_STARTER_PERCENT,
    DEFAULT_WATER_PERCENT,
    FLOUR_NAME_KEYWORDS,
    FLOUR_PERCENT,
    RECIPE_PRESETS,
    SALT_NAMES,
    STARTER_NAME_KEYWORDS,
    WATER_NAMES,
)
from domain.exceptions import InvalidInputError
from domain.models import Formula, Ingredient, IngredientCategory, IngredientUnit
from domain.services.number_parser import require_non_negative, require_positive

HUNDRED = Decimal("100")


@dataclass(frozen=True)
class FormulaWeights:
    """Absolute gram weights derived from a formula."""

    flour_g: Decimal
    water_g: Decimal
    salt_g: Decimal
    starter_g: Decimal
    additional: tuple[Ingredient, ...]

    @property
    def total_g(self) -> Decimal:
        extras = sum((ing.amount for ing in self.additional), Decimal("0"))
        return self.flour_g + self.water_g + self.salt_g + self.starter_g + extras


def amount_from_percentage(flour_weight_g: Any, percentage: Any) -> Decimal:
    """Grams for a baker's percentage of the given flour weight."""
    flour = require_positive(flour_weight_g, "Flour weight")
    percent = require_non_negative(percentage, "Percentage")
    return flour * percent / HUNDRED


def percentage_from_amount(flour_weight_g: Any, amount_g: Any) -> Decimal:
    """Baker's percentage of an ingredient weight."""
    flour = require_positive(flour_weight_g, "Flour weight")
    amount = require_non_negative(amount_g, "Amount")
    return amount / flour * HUNDRED


def to_weights(flour_weight_g: Any, ingredients: Iterable[Ingredient]) -> list[Ingredient]:
    """Convert percentage ingredients to grams.

    Ingredients already in grams are passed through unchanged.

    Raises:
        InvalidInputError: If flour weight is not positive
    """
    flour = require_positive(flour_weight_g, "Flour weight")
    return [
        ing.with_amount(flour * ing.amount / HUNDRED, IngredientUnit.GRAMS)
        if ing.is_percentage
        else ing
        for ing in ingredients
    ]


def to_percentages(flour_weight_g: Any, ingredients: Iterable[Ingredient]) -> list[Ingredient]:
    """Convert gram ingredients to percentages of flour.

    Raises:
        InvalidInputError: If flour weight is not positive
    """
    flour = require_positive(flour_weight_g, "Flour weight")
    return [
        ing
        if ing.is_percentage
        else ing.with_amount(ing.amount / flour * HUNDRED, IngredientUnit.PERCENT_OF_FLOUR)
        for ing in ingredients
    ]


def total_weight(flour_weight_g: Any, ingredients: Iterable[Ingredient]) -> Decimal:
    """Flour plus every ingredient, in grams."""
    flour = require_positive(flour_weight_g, "Flour weight")
    weights = to_weights(flour, ingredients)
    return flour + sum((ing.amount for ing in weights), Decimal("0"))


def flour_for_total_weight(total_weight_g: Any, percentages: Sequence[Any]) -> Decimal:
    """Work backwards from a target dough weight to the flour weight.

    Args:
        total_weight_g: Desired total dough weight in grams
        percentages: Baker's percentages of every non-flour ingredient

    Returns:
        Flour weight in grams
    """
    total = require_positive(total_weight_g, "Total dough weight")
    percent_sum = FLOUR_PERCENT + sum(
        (require_non_negative(p, "Percentage") for p in percentages), Decimal("0")
    )
    return total / (percent_sum / HUNDRED)


def formula_weights(formula: Formula) -> FormulaWeights:
    """Resolve every percentage of a formula into grams."""
    flour = formula.flour_weight_g
    return FormulaWeights(
        flour_g=flour,
        water_g=flour * formula.water_percent / HUNDRED,
        salt_g=flour * formula.salt_percent / HUNDRED,
        starter_g=flour * formula.starter_percent / HUNDRED,
        additional=tuple(to_weights(flour, formula.additional_ingredients)),
    )


def formula_from_amounts(amounts: Sequence[tuple[str, Any]]) -> Formula:
    """Build a formula from named gram amounts.

    Flour-named rows are summed into the flour weight; water, salt and
    starter/levain rows become their percentages (defaults apply when a
    row is missing); anything else becomes an additional percentage.

    Raises:
        InvalidInputError: If there is no usable flour weight
    """
    parsed: list[tuple[str, Decimal]] = []
    for name, amount in amounts:
        label = (name or "").strip()
        if not label:
            continue
        parsed.append((label, require_non_negative(amount, label)))

    if not parsed:
        raise InvalidInputError("At least one ingredient amount is required")

    flour_rows = [
        amount for label, amount in parsed if _contains(label, FLOUR_NAME_KEYWORDS)
    ]
    flour = sum(flour_rows, Decimal("0")) if flour_rows else parsed[0][1]
    if flour <= 0:
        raise InvalidInputError(f"Flour weight must be positive: {flour}", field="flour")

    def percent_of(keywords: tuple[str, ...], exact: bool, default: Decimal) -> Decimal:
        for label, amount in parsed:
            lower = label.lower()
            if (lower in keywords) if exact else _contains(label, keywords):
                return amount / flour * HUNDRED
        return default

    extras: list[Ingredient] = []
    for index, (label, amount) in enumerate(parsed):
        if amount <= 0 or (not flour_rows and index == 0):
            continue
        if _contains(label, FLOUR_NAME_KEYWORDS + STARTER_NAME_KEYWORDS):
            continue
        if label.lower() in WATER_NAMES + SALT_NAMES:
            continue
        extras.append(
            Ingredient(
                name=label,
                amount=amount / flour * HUNDRED,
                unit=IngredientUnit.PERCENT_OF_FLOUR,
                category=IngredientCategory.OTHER,
            )
        )

    return Formula(
        flour_weight_g=flour,
        water_percent=percent_of(WATER_NAMES, True, DEFAULT_WATER_PERCENT),
        salt_percent=percent_of(SALT_NAMES, True, DEFAULT_SALT_PERCENT),
        starter_percent=percent_of(STARTER_NAME_KEYWORDS, False, DEFAULT_STARTER_PERCENT),
        additional_ingredients=tuple(extras),
    )


def _contains(label: str, keywords: tuple[str, ...]) -> bool:
    lower = label.lower()
    return any(keyword in lower for keyword in keywords)


def preset_formula(name: str, flour_weight_g: Any) -> Formula:
    """Formula for a named recipe preset at the given flour weight.

    Raises:
        InvalidInputError: If the preset is unknown or flour is not positive
    """
    if name not in RECIPE_PRESETS:
        raise InvalidInputError(f"Unknown recipe preset: {name}", field="name")
    water, salt, starter, extras = RECIPE_PRESETS[name]
    return Formula(
        flour_weight_g=flour_weight_g,
        water_percent=water,
        salt_percent=salt,
        starter_percent=starter,
        additional_ingredients=tuple(
            Ingredient(name=extra, amount=percent, unit=IngredientUnit.PERCENT_OF_FLOUR)
            for extra, percent in extras
        ),
    )

"""Domain models.

Core value types shared by every calculator: formulas, ingredients,
flours, starters and their feeding logs. Models validate on construction
so an invalid value cannot exist once built; all of them are immutable
and are changed by building a new value.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Union

from config.constants import (
    ACTIVITY_LEVEL_MAX,
    ACTIVITY_LEVEL_MIN,
    HEALTH_STATUS_DESCRIPTIONS,
    STARTER_TYPE_NAMES,
)
from domain.exceptions import InvalidInputError
from domain.services.number_parser import (
    require_non_negative,
    require_positive,
    require_range,
    to_decimal,
)

RecordId = Union[int, str]


def _set(instance: Any, name: str, value: Any) -> None:
    # Frozen dataclasses normalise their own fields during validation
    object.__setattr__(instance, name, value)


def _require_name(value: str, what: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise InvalidInputError(f"{what} name cannot be empty", field="name")
    return cleaned


class IngredientUnit(Enum):
    GRAMS = "g"
    PERCENT_OF_FLOUR = "%"


class IngredientCategory(Enum):
    FLOUR = "flour"
    FAT = "fat"
    SWEETENER = "sweetener"
    INCLUSION = "inclusion"
    OTHER = "other"


class HealthStatus(Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    INACTIVE = "inactive"

    @property
    def description(self) -> str:
        return HEALTH_STATUS_DESCRIPTIONS[self.value]


class StarterType(Enum):
    LEVAIN = "levain"
    LIQUID_LEVAIN = "liquid-levain"
    STIFF_LEVAIN = "stiff-levain"
    POOLISH = "poolish"
    BIGA = "biga"
    PATE_FERMENTEE = "pate-fermentee"
    SOURDOUGH = "sourdough"

    @property
    def display_name(self) -> str:
        return STARTER_TYPE_NAMES[self.value]


@dataclass(frozen=True)
class Ingredient:
    """An additional formula ingredient, in grams or baker's percent.

    Immutable value object; conversions return new instances.
    """

    name: str
    amount: Decimal
    unit: IngredientUnit = IngredientUnit.GRAMS
    category: IngredientCategory = IngredientCategory.OTHER

    def __post_init__(self) -> None:
        """Validate ingredient data."""
        _set(self, "name", _require_name(self.name, "Ingredient"))
        _set(self, "amount", require_non_negative(self.amount, f"{self.name} amount"))
        if not isinstance(self.unit, IngredientUnit):
            raise InvalidInputError(f"Invalid ingredient unit: {self.unit}", field="unit")
        if not isinstance(self.category, IngredientCategory):
            raise InvalidInputError(
                f"Invalid ingredient category: {self.category}", field="category"
            )

    @property
    def is_percentage(self) -> bool:
        return self.unit is IngredientUnit.PERCENT_OF_FLOUR

    def with_amount(self, amount: Decimal, unit: Optional[IngredientUnit] = None) -> "Ingredient":
        """Return a copy with a new amount (and optionally a new unit)."""
        return replace(self, amount=amount, unit=unit or self.unit)


@dataclass(frozen=True)
class Formula:
    """A bread formula expressed in baker's percentages.

    Flour is always the 100% reference; water, salt and starter are
    percentages of the flour weight, not of the total dough weight.
    """

    flour_weight_g: Decimal
    water_percent: Decimal
    salt_percent: Decimal = Decimal("0")
    starter_percent: Decimal = Decimal("0")
    additional_ingredients: tuple[Ingredient, ...] = field(default_factory=tuple)
    starter_id: Optional[RecordId] = None

    def __post_init__(self) -> None:
        """Validate formula data."""
        _set(self, "flour_weight_g", require_positive(self.flour_weight_g, "Flour weight"))
        _set(self, "water_percent", require_non_negative(self.water_percent, "Water percent"))
        _set(self, "salt_percent", require_non_negative(self.salt_percent, "Salt percent"))
        _set(
            self,
            "starter_percent",
            require_non_negative(self.starter_percent, "Starter percent"),
        )
        ingredients = tuple(self.additional_ingredients)
        for ingredient in ingredients:
            if not isinstance(ingredient, Ingredient):
                raise InvalidInputError(f"Invalid ingredient: {ingredient!r}")
        _set(self, "additional_ingredients", ingredients)

    @property
    def hydration_percent(self) -> Decimal:
        """Water as a percentage of flour."""
        return self.water_percent

    def with_ingredient(self, ingredient: Ingredient) -> "Formula":
        """Return a new formula snapshot with the ingredient appended."""
        return replace(
            self,
            additional_ingredients=self.additional_ingredients + (ingredient,),
        )

    def without_ingredient(self, index: int) -> "Formula":
        """Return a new formula snapshot without the ingredient at index."""
        if not 0 <= index < len(self.additional_ingredients):
            raise IndexError(f"Invalid ingredient index: {index}")
        remaining = (
            self.additional_ingredients[:index] + self.additional_ingredients[index + 1:]
        )
        return replace(self, additional_ingredients=remaining)


@dataclass(frozen=True)
class FlourType:
    """A flour with its protein content, used by the blend solver."""

    name: str
    protein_percent: Decimal

    def __post_init__(self) -> None:
        _set(self, "name", _require_name(self.name, "Flour"))
        _set(
            self,
            "protein_percent",
            require_range(self.protein_percent, 0, 100, f"{self.name} protein"),
        )


@dataclass(frozen=True)
class FeedingRatio:
    """Starter:flour:water feeding ratio, e.g. 1:2:2."""

    starter: Decimal
    flour: Decimal
    water: Decimal

    def __post_init__(self) -> None:
        _set(self, "starter", require_positive(self.starter, "Starter ratio"))
        _set(self, "flour", require_positive(self.flour, "Flour ratio"))
        _set(self, "water", require_positive(self.water, "Water ratio"))

    @classmethod
    def parse(cls, text: str) -> "FeedingRatio":
        """Parse an ``S:F:W`` string.

        Raises:
            InvalidInputError: On wrong arity, non-numeric or non-positive parts
        """
        if not isinstance(text, str):
            raise InvalidInputError(f"Feeding ratio must be text: {text!r}", field="ratio")
        parts = text.strip().split(":")
        if len(parts) != 3:
            raise InvalidInputError(
                f"Feeding ratio must have three parts (S:F:W): {text!r}", field="ratio"
            )
        starter, flour, water = (to_decimal(part.strip(), "Feeding ratio") for part in parts)
        return cls(starter=starter, flour=flour, water=water)

    @property
    def total(self) -> Decimal:
        return self.starter + self.flour + self.water

    def __str__(self) -> str:
        return ":".join(
            format(part.normalize(), "f") for part in (self.starter, self.flour, self.water)
        )


@dataclass(frozen=True)
class Starter:
    """A sourdough starter and its feeding schedule.

    Never mutated in place: scheduler functions return updated copies so
    ``next_feeding_due_at`` always matches ``last_fed_at`` plus frequency.
    """

    name: str
    flour_type: str
    feeding_ratio: FeedingRatio
    feeding_frequency_hours: int
    id: Optional[RecordId] = None
    starter_type: StarterType = StarterType.SOURDOUGH
    is_active: bool = True
    last_fed_at: Optional[datetime] = None
    next_feeding_due_at: Optional[datetime] = None
    health_status: HealthStatus = HealthStatus.GOOD
    avg_activity_level: Optional[Decimal] = None
    avg_rise_time_hours: Optional[Decimal] = None
    created_at: Optional[datetime] = None
    notes: str = ""
    reminder_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate starter data."""
        _set(self, "name", _require_name(self.name, "Starter"))
        if isinstance(self.feeding_ratio, str):
            _set(self, "feeding_ratio", FeedingRatio.parse(self.feeding_ratio))
        if not isinstance(self.feeding_ratio, FeedingRatio):
            raise InvalidInputError(f"Invalid feeding ratio: {self.feeding_ratio!r}")
        frequency = self.feeding_frequency_hours
        if isinstance(frequency, bool) or not isinstance(frequency, int) or frequency <= 0:
            raise InvalidInputError(
                f"Feeding frequency must be a positive number of hours: {frequency}",
                field="feeding_frequency_hours",
            )
        if self.avg_activity_level is not None:
            _set(
                self,
                "avg_activity_level",
                require_range(
                    self.avg_activity_level,
                    ACTIVITY_LEVEL_MIN,
                    ACTIVITY_LEVEL_MAX,
                    "Average activity level",
                ),
            )
        if self.avg_rise_time_hours is not None:
            _set(
                self,
                "avg_rise_time_hours",
                require_non_negative(self.avg_rise_time_hours, "Average rise time"),
            )

    def with_reminder(self, reminder_id: Optional[str]) -> "Starter":
        """Return a copy tracking a different pending reminder."""
        return replace(self, reminder_id=reminder_id)


@dataclass(frozen=True)
class FeedingLog:
    """A single feeding observation. Append-only."""

    starter_id: RecordId
    created_at: datetime
    id: Optional[RecordId] = None
    activity_level: Optional[int] = None
    peak_time_hours: Optional[Decimal] = None
    starter_amount_g: Optional[Decimal] = None
    flour_amount_g: Optional[Decimal] = None
    water_amount_g: Optional[Decimal] = None
    temperature: Optional[Decimal] = None
    notes: str = ""

    def __post_init__(self) -> None:
        """Validate feeding log data."""
        if self.activity_level is not None:
            level = self.activity_level
            if isinstance(level, bool) or not isinstance(level, int) or not 1 <= level <= 5:
                raise InvalidInputError(
                    f"Activity level must be 1-5: {level}", field="activity_level"
                )
        if self.peak_time_hours is not None:
            _set(self, "peak_time_hours", require_non_negative(self.peak_time_hours, "Peak time"))
        for name in ("starter_amount_g", "flour_amount_g", "water_amount_g"):
            value = getattr(self, name)
            if value is not None:
                _set(self, name, require_non_negative(value, name))
        if self.temperature is not None:
            _set(self, "temperature", to_decimal(self.temperature, "Temperature"))


@dataclass(frozen=True)
class Recipe:
    """A named formula as kept by the recipe store."""

    name: str
    formula: Formula
    id: Optional[RecordId] = None
    description: str = ""
    instructions: str = ""
    yield_description: str = ""

    def __post_init__(self) -> None:
        _set(self, "name", _require_name(self.name, "Recipe"))
        if not isinstance(self.formula, Formula):
            raise InvalidInputError(f"Invalid recipe formula: {self.formula!r}")

"""Flour blend protein calculations.

Weighted-average protein of a blend and the inverse two-flour solve for
a target protein percentage.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, Sequence

from config.constants import BLEND_TOLERANCE_PERCENT, FLOUR_PRESETS, TARGET_PROTEIN_PRESETS
from domain.exceptions import InvalidInputError, UnachievableError
from domain.models import FlourType
from domain.services.number_parser import (
    require_non_negative,
    require_positive,
    require_range,
    to_decimal,
)

HUNDRED = Decimal("100")


@dataclass(frozen=True)
class BlendComponent:
    percent: Decimal
    protein_percent: Decimal

    def __post_init__(self) -> None:
        object.__setattr__(self, "percent", require_non_negative(self.percent, "Blend percent"))
        object.__setattr__(
            self,
            "protein_percent",
            require_range(self.protein_percent, 0, 100, "Protein percent"),
        )


@dataclass(frozen=True)
class BlendProtein:
    """Protein of a blend and the sum of its percentages.

    A blend that does not sum to 100% (within tolerance) is still
    computed; ``is_complete`` lets callers warn about it.
    """

    protein_percent: Decimal
    total_percent: Decimal

    @property
    def is_complete(self) -> bool:
        return abs(self.total_percent - HUNDRED) <= BLEND_TOLERANCE_PERCENT


@dataclass(frozen=True)
class TwoFlourBlend:
    percent_a: Decimal
    percent_b: Decimal


def preset_flours() -> list[FlourType]:
    """Reference flours with typical protein percentages."""
    return [FlourType(name=name, protein_percent=protein) for name, protein in FLOUR_PRESETS]


def blend_protein(components: Iterable[BlendComponent | tuple[Any, Any]]) -> BlendProtein:
    """Weighted-average protein of a blend.

    Args:
        components: ``BlendComponent`` values or ``(percent, protein)`` pairs
    """
    parsed = [
        c if isinstance(c, BlendComponent) else BlendComponent(percent=c[0], protein_percent=c[1])
        for c in components
    ]
    if not parsed:
        raise InvalidInputError("A blend needs at least one flour")

    protein = sum((c.percent / HUNDRED * c.protein_percent for c in parsed), Decimal("0"))
    total = sum((c.percent for c in parsed), Decimal("0"))
    return BlendProtein(protein_percent=protein, total_percent=total)


def solve_two_flour_blend(
    target_protein: Any,
    protein_a: Any,
    protein_b: Any,
) -> TwoFlourBlend:
    """Percentages of two flours whose blend hits the target protein.

    Raises:
        InvalidInputError: If the target is not a finite number or a
            flour protein is outside 0-100
        UnachievableError: If the flours have equal protein or the target
            lies outside their range; carries the achievable range
    """
    target = to_decimal(target_protein, "Target protein")
    p1 = require_range(protein_a, 0, 100, "Flour A protein")
    p2 = require_range(protein_b, 0, 100, "Flour B protein")
    achievable = (min(p1, p2), max(p1, p2))

    if p1 == p2:
        raise UnachievableError(
            f"Both flours have {p1}% protein; a blend cannot change it",
            achievable_range=achievable,
        )

    if not achievable[0] <= target <= achievable[1]:
        raise UnachievableError(
            f"Target must be between {achievable[0]}% and {achievable[1]}%",
            achievable_range=achievable,
        )
    percent_a = (target - p2) / (p1 - p2) * HUNDRED
    return TwoFlourBlend(percent_a=percent_a, percent_b=HUNDRED - percent_a)


def blend_weights(total_weight_g: Any, percents: Sequence[Any]) -> list[Decimal]:
    """Gram weight of each flour for a blend of the given total weight."""
    total = require_positive(total_weight_g, "Total flour weight")
    return [total * require_non_negative(p, "Blend percent") / HUNDRED for p in percents]


@dataclass(frozen=True)
class TargetProteinPreset:
    label: str
    range_text: str
    protein_percent: Decimal


def target_protein_presets() -> list[TargetProteinPreset]:
    """Typical protein targets by kind of bake."""
    return [
        TargetProteinPreset(label=label, range_text=range_text, protein_percent=protein)
        for label, range_text, protein in TARGET_PROTEIN_PRESETS
    ]

"""Tests for flour blend calculations."""

from decimal import Decimal

import pytest

from domain.exceptions import InvalidInputError, UnachievableError
from domain.services.flour_blend import (
    BlendComponent,
    blend_protein,
    blend_weights,
    preset_flours,
    solve_two_flour_blend,
    target_protein_presets,
)


class TestBlendProtein:
    def test_weighted_average(self) -> None:
        result = blend_protein([(50, 14), (50, 10)])

        assert result.protein_percent == Decimal("12")
        assert result.total_percent == Decimal("100")
        assert result.is_complete

    def test_accepts_components(self) -> None:
        result = blend_protein(
            [
                BlendComponent(percent=Decimal("80"), protein_percent=Decimal("12.5")),
                BlendComponent(percent=Decimal("20"), protein_percent=Decimal("14")),
            ]
        )

        assert result.protein_percent == Decimal("12.8")

    def test_incomplete_blend_still_computed(self) -> None:
        result = blend_protein([(60, 12), (30, 10)])

        assert result.total_percent == Decimal("90")
        assert not result.is_complete
        assert result.protein_percent == Decimal("10.2")

    def test_tolerance(self) -> None:
        assert blend_protein([("99.95", 12)]).is_complete
        assert not blend_protein([("99.8", 12)]).is_complete

    @pytest.mark.parametrize(
        "percents",
        [(100, 0, 0), (50, 50, 0), (70, 20, 10), ("33.3", "33.3", "33.4"), (10, 10, 80)],
    )
    def test_result_within_protein_bounds(self, percents) -> None:
        proteins = [Decimal("14"), Decimal("9.5"), Decimal("12.5")]

        result = blend_protein(list(zip(percents, proteins)))

        assert result.is_complete
        assert min(proteins) <= result.protein_percent <= max(proteins)

    def test_empty_blend_rejected(self) -> None:
        with pytest.raises(InvalidInputError, match="at least one flour"):
            blend_protein([])

    def test_protein_out_of_range(self) -> None:
        with pytest.raises(InvalidInputError, match="Protein percent"):
            blend_protein([(100, 101)])


class TestSolveTwoFlourBlend:
    def test_solves(self) -> None:
        blend = solve_two_flour_blend(12, 14, 10)

        assert blend.percent_a == Decimal("50")
        assert blend.percent_b == Decimal("50")

    def test_solution_hits_target(self) -> None:
        blend = solve_two_flour_blend("11.5", "12.5", "10.5")

        result = blend_protein([(blend.percent_a, "12.5"), (blend.percent_b, "10.5")])
        assert result.protein_percent == Decimal("11.5")

    def test_target_at_range_edge(self) -> None:
        blend = solve_two_flour_blend("10.5", "12.5", "10.5")

        assert blend.percent_a == Decimal("0")
        assert blend.percent_b == Decimal("100")

    def test_target_out_of_range(self) -> None:
        with pytest.raises(UnachievableError, match="between 10.5% and 12.5%") as exc_info:
            solve_two_flour_blend(20, "12.5", "10.5")

        assert exc_info.value.achievable_range == (Decimal("10.5"), Decimal("12.5"))

    @pytest.mark.parametrize("target", [150, -5])
    def test_target_outside_percent_scale(self, target: int) -> None:
        with pytest.raises(UnachievableError) as exc_info:
            solve_two_flour_blend(target, "12.5", "10.5")

        assert exc_info.value.achievable_range == (Decimal("10.5"), Decimal("12.5"))

    def test_target_must_be_a_number(self) -> None:
        with pytest.raises(InvalidInputError, match="Target protein"):
            solve_two_flour_blend("lots", "12.5", "10.5")

    def test_equal_proteins(self) -> None:
        with pytest.raises(UnachievableError) as exc_info:
            solve_two_flour_blend(12, 12, 12)

        assert exc_info.value.achievable_range == (Decimal("12"), Decimal("12"))


class TestPresetsAndWeights:
    def test_presets(self) -> None:
        presets = {flour.name: flour.protein_percent for flour in preset_flours()}

        assert presets["Bread Flour"] == Decimal("12.5")
        assert presets["All-Purpose Flour"] == Decimal("10.5")

    def test_blend_weights(self) -> None:
        assert blend_weights(1000, [70, 30]) == [Decimal("700"), Decimal("300")]

    def test_target_presets(self) -> None:
        presets = target_protein_presets()

        assert presets[3].label == "Artisan Sourdough & Country Loaves"
        assert presets[3].protein_percent == Decimal("12.5")

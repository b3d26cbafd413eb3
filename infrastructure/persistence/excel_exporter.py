"""Excel export functionality.

Exports a bread formula to Excel as a baker's percentage sheet.
"""

from decimal import Decimal
from pathlib import Path
from typing import List, Tuple

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from domain.exceptions import ExportError
from domain.models import Formula
from domain.services.bakers_percentage import formula_weights
from domain.services.formatting import round_to

HEADERS = ["Ingredient", "Baker's %", "Grams"]


class ExcelExporter:
    """Export formulas to Excel format."""

    def export_formula(
        self,
        formula: Formula,
        output_path: Path | str,
        name: str = "Formula",
    ) -> None:
        """Export formula with baker's percentages and gram weights.

        Args:
            formula: Formula to export
            output_path: Path to save Excel file
            name: Sheet title

        Raises:
            ExportError: If export fails
        """
        try:
            wb = Workbook()
            wb.remove(wb.active)  # Remove default sheet

            self._create_formula_sheet(wb, formula, name)

            wb.save(output_path)

        except Exception as exc:
            raise ExportError(f"Failed to export to Excel: {exc}") from exc

    def _create_formula_sheet(self, wb: Workbook, formula: Formula, name: str) -> None:
        # Excel caps sheet titles at 31 characters
        ws = wb.create_sheet((name or "Formula")[:31])

        ws.append(HEADERS)

        # Style headers
        header_fill = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
        for col_num, _ in enumerate(HEADERS, 1):
            cell = ws.cell(1, col_num)
            cell.fill = header_fill
            cell.alignment = Alignment(horizontal="center", vertical="center")

        rows = formula_rows(formula)
        for label, percent, grams in rows:
            ws.append([label, _number(percent), _number(grams)])

        total_percent = sum((percent for _, percent, _ in rows), Decimal("0"))
        total_grams = sum((grams for _, _, grams in rows), Decimal("0"))
        ws.append(["TOTAL", _number(total_percent), _number(total_grams)])
        for cell in ws[ws.max_row]:
            cell.font = Font(bold=True)

        # Auto-size columns
        for column in ws.columns:
            max_length = 0
            column_letter = get_column_letter(column[0].column)
            for cell in column:
                if cell.value:
                    max_length = max(max_length, len(str(cell.value)))
            ws.column_dimensions[column_letter].width = min(max_length + 2, 50)


def formula_rows(formula: Formula) -> List[Tuple[str, Decimal, Decimal]]:
    """(ingredient, baker's %, grams) rows, flour first."""
    weights = formula_weights(formula)
    rows = [
        ("Flour", Decimal("100"), weights.flour_g),
        ("Water", formula.water_percent, weights.water_g),
    ]
    if formula.salt_percent > 0:
        rows.append(("Salt", formula.salt_percent, weights.salt_g))
    if formula.starter_percent > 0:
        rows.append(("Starter", formula.starter_percent, weights.starter_g))
    for ingredient in weights.additional:
        rows.append(
            (
                ingredient.name,
                ingredient.amount / weights.flour_g * Decimal("100"),
                ingredient.amount,
            )
        )
    return rows


def _number(value: Decimal) -> float:
    return float(round_to(value, 1))

"""
Export service: inventory CSV/Excel downloads and the upload template.
"""

from io import BytesIO
from typing import Optional

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Font, Border, Side, PatternFill
import structlog

from models.inventory import InventoryItem
from models.product import PRODUCT_COLUMNS

logger = structlog.get_logger(__name__)

EXPORT_COLUMNS = [
    "product_id",
    "name",
    "category",
    "current_stock",
    "min_stock_level",
    "max_stock_level",
    "unit_price",
    "cost_price",
    "status",
]

SAMPLE_ROWS = [
    {
        "product_id": "P001",
        "name": "Basmati Rice 5kg",
        "category": "Groceries",
        "unit_price": "12.50",
        "cost_price": "9.00",
        "current_stock": "40",
        "min_stock_level": "10",
        "max_stock_level": "120",
    },
    {
        "product_id": "P002",
        "name": "Whole Milk 1L",
        "category": "Dairy",
        "unit_price": "1.20",
        "cost_price": "0.80",
        "current_stock": "8",
        "min_stock_level": "24",
        "max_stock_level": "",
    },
]

# Fills keyed by derived status for the Excel export
STATUS_FILLS = {
    "low_stock": PatternFill(start_color="FFE5E5", end_color="FFE5E5", fill_type="solid"),
    "overstock": PatternFill(start_color="FFF4E0", end_color="FFF4E0", fill_type="solid"),
    "dead_stock": PatternFill(start_color="EEEEEE", end_color="EEEEEE", fill_type="solid"),
    "demand_spike": PatternFill(start_color="E5F0FF", end_color="E5F0FF", fill_type="solid"),
}


def _frame(items: list[InventoryItem]) -> pd.DataFrame:
    return pd.DataFrame(
        [item.model_dump(include=set(EXPORT_COLUMNS)) for item in items],
        columns=EXPORT_COLUMNS,
        dtype=object,  # keep ints as ints next to None
    )


class ExportService:
    """Service for generating inventory export files."""

    def inventory_csv(self, items: list[InventoryItem]) -> str:
        """
        Inventory table as CSV text.

        Missing thresholds and costs are written as empty cells.
        """
        logger.info("generating_inventory_csv", item_count=len(items))
        return _frame(items).to_csv(index=False)

    def inventory_excel(self, items: list[InventoryItem]) -> BytesIO:
        """
        Inventory table as an .xlsx workbook.

        Rows are shaded by status so alerts stand out.
        """
        logger.info("generating_inventory_excel", item_count=len(items))

        wb = Workbook()
        ws = wb.active
        ws.title = "Inventory"

        bold_font = Font(bold=True)
        thin_border = Border(
            bottom=Side(style="thin", color="000000")
        )

        for col, header in enumerate(EXPORT_COLUMNS, start=1):
            cell = ws.cell(row=1, column=col, value=header)
            cell.font = bold_font
            cell.border = thin_border

        ws.column_dimensions["A"].width = 14
        ws.column_dimensions["B"].width = 30
        ws.column_dimensions["C"].width = 18

        for row, item in enumerate(items, start=2):
            values = item.model_dump(include=set(EXPORT_COLUMNS))
            fill = STATUS_FILLS.get(item.status)
            for col, column in enumerate(EXPORT_COLUMNS, start=1):
                cell = ws.cell(row=row, column=col, value=values[column])
                if fill is not None:
                    cell.fill = fill

        output = BytesIO()
        wb.save(output)
        output.seek(0)

        return output

    def sample_csv(self) -> str:
        """Upload template: every accepted column plus two example rows."""
        return pd.DataFrame(SAMPLE_ROWS, columns=list(PRODUCT_COLUMNS)).to_csv(index=False)


# Singleton instance
_export_service: Optional[ExportService] = None


def get_export_service() -> ExportService:
    """Get or create ExportService instance."""
    global _export_service
    if _export_service is None:
        _export_service = ExportService()
    return _export_service

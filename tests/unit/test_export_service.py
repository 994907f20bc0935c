"""
Unit tests for ExportService.

Run: pytest tests/unit/test_export_service.py -v
"""

import csv
from io import StringIO

from openpyxl import load_workbook

from models.inventory import InventoryItem
from models.product import PRODUCT_COLUMNS
from services.export_service import EXPORT_COLUMNS, ExportService


def _item(**overrides) -> InventoryItem:
    data = {
        "product_id": "P1",
        "name": "Basmati Rice",
        "category": "Groceries",
        "current_stock": 5,
        "min_stock_level": 10,
        "max_stock_level": None,
        "unit_price": 12.5,
        "cost_price": None,
        "status": "low_stock",
    }
    data.update(overrides)
    return InventoryItem(**data)


class TestInventoryCsv:

    def test_header_and_rows(self):
        text = ExportService().inventory_csv([_item(), _item(product_id="P2", name="Milk", status="healthy")])

        rows = list(csv.reader(StringIO(text)))

        assert rows[0] == EXPORT_COLUMNS
        assert rows[1] == ["P1", "Basmati Rice", "Groceries", "5", "10", "", "12.5", "", "low_stock"]
        assert rows[2][1] == "Milk"

    def test_empty_items_gives_header_only(self):
        rows = list(csv.reader(StringIO(ExportService().inventory_csv([]))))

        assert rows == [EXPORT_COLUMNS]


class TestInventoryExcel:

    def test_workbook_contents(self):
        output = ExportService().inventory_excel([_item()])

        ws = load_workbook(output).active

        assert ws.title == "Inventory"
        assert [c.value for c in ws[1]] == EXPORT_COLUMNS
        assert ws.cell(row=2, column=1).value == "P1"
        assert ws.cell(row=2, column=4).value == 5
        assert ws.cell(row=1, column=1).font.bold is True

    def test_low_stock_rows_are_shaded(self):
        ws = load_workbook(ExportService().inventory_excel([_item()])).active

        assert ws.cell(row=2, column=2).fill.fill_type == "solid"

    def test_healthy_rows_are_not_shaded(self):
        ws = load_workbook(ExportService().inventory_excel([_item(status="healthy")])).active

        assert ws.cell(row=2, column=2).fill.fill_type is None


class TestSampleCsv:

    def test_template_has_every_column_and_two_rows(self):
        rows = list(csv.DictReader(StringIO(ExportService().sample_csv())))

        assert len(rows) == 2
        assert tuple(rows[0].keys()) == PRODUCT_COLUMNS
        assert rows[0]["product_id"] == "P001"
        assert rows[1]["max_stock_level"] == ""

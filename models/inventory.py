"""
Inventory view schemas: classified product list, summary and report.
"""

from pydantic import Field
from typing import Optional
from datetime import datetime

from models.base import BaseSchema


class InventoryItem(BaseSchema):
    """
    Product with its derived display status.

    Used for the inventory table and CSV export.
    """

    product_id: str
    name: str
    category: Optional[str] = None
    current_stock: int = 0
    min_stock_level: Optional[int] = None
    max_stock_level: Optional[int] = None
    unit_price: float = 0
    cost_price: Optional[float] = None
    status: str = Field(..., description="Derived display status")
    anomaly: bool = False
    advisories: list[str] = Field(default_factory=list)


class InventoryListResponse(BaseSchema):
    """Filtered inventory table."""

    data: list[InventoryItem]
    total: int


class InventorySummary(BaseSchema):
    """Headline counters for the inventory page."""

    total_products: int = 0
    healthy_products: int = 0
    alert_products: int = Field(default=0, description="Products with the anomaly flag set")
    low_stock_products: int = 0


class StockLevel(BaseSchema):
    """One row of the stock-levels table in the optimization report."""

    name: str
    stock: int
    status: str


class InventoryReport(BaseSchema):
    """Inventory optimization report across all of an owner's products."""

    generated_at: datetime
    stock_levels: list[StockLevel] = Field(default_factory=list)
    anomalies: list[str] = Field(default_factory=list)
    reorder: list[str] = Field(default_factory=list)
    dead_stock: list[str] = Field(default_factory=list)
    turnover: list[str] = Field(default_factory=list)

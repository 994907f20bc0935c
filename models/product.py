"""
Product schemas for validation and serialization.
"""

from pydantic import Field, field_validator
from typing import Optional
from enum import Enum

from models.base import BaseSchema, TimestampMixin


class StockStatus(str, Enum):
    """Display status of a product."""
    HEALTHY = "healthy"
    LOW_STOCK = "low_stock"
    OVERSTOCK = "overstock"
    DEAD_STOCK = "dead_stock"
    DEMAND_SPIKE = "demand_spike"
    UNKNOWN = "unknown"


# Columns accepted from uploads and written to the products table
PRODUCT_COLUMNS = (
    "product_id",
    "name",
    "category",
    "unit_price",
    "cost_price",
    "current_stock",
    "min_stock_level",
    "max_stock_level",
)


class ProductRecord(BaseSchema):
    """
    One inventory item for one owner.

    `status`, `anomaly` and `dead_stock` are overrides supplied by upstream
    data. They are read when present but never written by uploads.
    """

    product_id: str = Field(..., min_length=1, description="Business key, unique per owner")
    name: str = Field(..., min_length=1, description="Product name")
    category: Optional[str] = Field(None, description="Free-text category")
    current_stock: int = Field(default=0, ge=0, description="Units on hand")
    min_stock_level: Optional[int] = Field(None, ge=0, description="Reorder threshold")
    max_stock_level: Optional[int] = Field(
        None,
        ge=0,
        description="Overstock threshold (None = unbounded)"
    )
    unit_price: float = Field(default=0, ge=0, description="Selling price")
    cost_price: Optional[float] = Field(None, ge=0, description="Purchase cost")
    status: Optional[str] = Field(None, description="Explicit status override")
    anomaly: bool = Field(default=False, description="Anomaly override flag")
    dead_stock: bool = Field(default=False, description="Dead stock flag")

    @field_validator("current_stock", "unit_price", mode="before")
    @classmethod
    def null_to_zero(cls, v):
        """Stored rows may carry nulls the upload defaults never produce."""
        return 0 if v is None else v

    @field_validator("anomaly", "dead_stock", mode="before")
    @classmethod
    def null_to_false(cls, v):
        return False if v is None else v

    def to_row(self) -> dict:
        """Columns written to the products table."""
        return self.model_dump(include=set(PRODUCT_COLUMNS))


class ProductCreate(BaseSchema):
    """
    Create a product manually.

    Required: product_id, name, category
    """

    product_id: str = Field(..., min_length=1, max_length=100)
    name: str = Field(..., min_length=1, max_length=255)
    category: str = Field(..., min_length=1, max_length=100)
    current_stock: int = Field(default=0, ge=0)
    unit_price: float = Field(default=0, ge=0)
    cost_price: Optional[float] = Field(None, ge=0)
    min_stock_level: Optional[int] = Field(None, ge=0)
    max_stock_level: Optional[int] = Field(None, ge=0)


class ProductUpdate(BaseSchema):
    """
    Update existing product.

    All fields optional - only provided fields are updated.
    """

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    current_stock: Optional[int] = Field(None, ge=0)
    unit_price: Optional[float] = Field(None, ge=0)
    cost_price: Optional[float] = Field(None, ge=0)
    min_stock_level: Optional[int] = Field(None, ge=0)
    max_stock_level: Optional[int] = Field(None, ge=0)


class ProductResponse(ProductRecord, TimestampMixin):
    """Product as stored, including storage identity and owner."""

    id: str = Field(..., description="Storage UUID")
    user_id: str = Field(..., description="Owner id")


class ProductListResponse(BaseSchema):
    """List of an owner's products."""

    data: list[ProductResponse]
    total: int

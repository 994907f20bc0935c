"""
Pydantic models for validation and serialization.
"""

from models.base import (
    BaseSchema,
    TimestampMixin,
)
from models.product import (
    StockStatus,
    PRODUCT_COLUMNS,
    ProductRecord,
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    ProductListResponse,
)
from models.classification import ClassificationResult
from models.imports import (
    ImportRow,
    Absent,
    Invalid,
    Value,
    FieldValue,
    ImportOutcome,
)
from models.inventory import (
    InventoryItem,
    InventoryListResponse,
    InventorySummary,
    StockLevel,
    InventoryReport,
)

__all__ = [
    # Base
    "BaseSchema",
    "TimestampMixin",

    # Product
    "StockStatus",
    "PRODUCT_COLUMNS",
    "ProductRecord",
    "ProductCreate",
    "ProductUpdate",
    "ProductResponse",
    "ProductListResponse",

    # Classification
    "ClassificationResult",

    # Imports
    "ImportRow",
    "Absent",
    "Invalid",
    "Value",
    "FieldValue",
    "ImportOutcome",

    # Inventory
    "InventoryItem",
    "InventoryListResponse",
    "InventorySummary",
    "StockLevel",
    "InventoryReport",
]

"""
Field-level parsing of uploaded product rows.

Each reader returns a FieldValue (Absent, Invalid or Value) so the defaulting
rules are applied in one visible place, `build_product_record`.

Numbers use leading-number semantics: "12.7" reads as 12 for integer
columns and "7 units" reads as 7.
"""

import re
from typing import Optional

from models.imports import Absent, FieldValue, ImportRow, Invalid, Value
from models.product import ProductRecord

_INT_PATTERN = re.compile(r"^\s*([+-]?\d+)")
_FLOAT_PATTERN = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def read_text(row: ImportRow, column: str) -> FieldValue:
    """Trimmed string, or Absent when missing or blank."""
    raw = row.get(column)
    if raw is None:
        return Absent()
    text = str(raw).strip()
    if not text:
        return Absent()
    return Value(text)


def read_int(row: ImportRow, column: str) -> FieldValue:
    raw = row.get(column)
    if raw is None or not str(raw).strip():
        return Absent()
    match = _INT_PATTERN.match(str(raw))
    if not match:
        return Invalid(str(raw))
    return Value(int(match.group(1)))


def read_float(row: ImportRow, column: str) -> FieldValue:
    raw = row.get(column)
    if raw is None or not str(raw).strip():
        return Absent()
    match = _FLOAT_PATTERN.match(str(raw))
    if not match:
        return Invalid(str(raw))
    return Value(float(match.group(1)))


def _non_negative(column: str, value: Optional[float]) -> None:
    if value is not None and value < 0:
        raise ValueError(f"{column} must be 0 or more")


def build_product_record(row: ImportRow, product_id: str, name: str) -> ProductRecord:
    """
    Build the record written for one upload row.

    Defaults: prices and stock/min levels fall back to 0, the max level
    falls back to None (unbounded).

    Args:
        row: Raw row from the CSV parser
        product_id: Already validated, trimmed product id
        name: Already validated, trimmed name

    Raises:
        ValueError: If a numeric column holds a negative value
    """
    unit_price = read_float(row, "unit_price").or_default(0.0)
    cost_price = read_float(row, "cost_price").or_default(0.0)
    current_stock = read_int(row, "current_stock").or_default(0)
    min_stock_level = read_int(row, "min_stock_level").or_default(0)
    max_stock_level = read_int(row, "max_stock_level").or_default(None)

    for column, value in (
        ("unit_price", unit_price),
        ("cost_price", cost_price),
        ("current_stock", current_stock),
        ("min_stock_level", min_stock_level),
        ("max_stock_level", max_stock_level),
    ):
        _non_negative(column, value)

    return ProductRecord(
        product_id=product_id,
        name=name,
        category=read_text(row, "category").or_default(None),
        unit_price=unit_price,
        cost_price=cost_price,
        current_stock=current_stock,
        min_stock_level=min_stock_level,
        max_stock_level=max_stock_level,
    )

"""
Upload file parsers module.
"""

from parsers.csv_parser import parse_product_csv
from parsers.row_parser import (
    read_text,
    read_int,
    read_float,
    build_product_record,
)

__all__ = [
    "parse_product_csv",
    "read_text",
    "read_int",
    "read_float",
    "build_product_record",
]

"""
CSV parser for product uploads.

Turns raw upload bytes into ordered ImportRow mappings. Any failure to read
the file is fatal for the whole upload and raised as CSVParseError; per-row
problems are left to the importer.
"""

from io import BytesIO
from pathlib import Path
from typing import Union, BinaryIO
import structlog

import pandas as pd

from exceptions import CSVParseError
from models.imports import ImportRow

logger = structlog.get_logger(__name__)


def parse_product_csv(
    file: Union[bytes, str, Path, BinaryIO],
) -> list[ImportRow]:
    """
    Parse an uploaded CSV file.

    The first line is the header. Blank lines are skipped and every cell is
    kept as a string. Cells missing from short rows come back as empty
    strings, which the row parser treats as absent.

    Args:
        file: Raw bytes, a file path, or a binary file-like object

    Returns:
        Rows in file order (row 0 is the first data line)

    Raises:
        CSVParseError: If the file cannot be decoded or tokenized, or a data
            row has more fields than the header
    """
    logger.info("parsing_csv", file_type=type(file).__name__)

    if isinstance(file, bytes):
        file = BytesIO(file)

    try:
        df = pd.read_csv(
            file,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            encoding="utf-8-sig",
        )
    except pd.errors.EmptyDataError as e:
        logger.warning("csv_empty", error=str(e))
        raise CSVParseError(
            message="File is empty or has no header row",
            details={"original_error": str(e)}
        )
    except (pd.errors.ParserError, UnicodeDecodeError, ValueError) as e:
        logger.error("csv_read_failed", error=str(e))
        raise CSVParseError(
            message="Failed to read CSV file",
            details={"original_error": str(e)}
        )

    # pandas moves the leading fields of an over-long first row into the index
    if not isinstance(df.index, pd.RangeIndex):
        logger.warning("csv_extra_fields", header_columns=len(df.columns))
        raise CSVParseError(
            message="Failed to read CSV file: a data row has more fields than the header",
            details={"header_columns": len(df.columns)}
        )

    df.columns = [_normalize_column(col) for col in df.columns]

    rows: list[ImportRow] = [
        {column: value for column, value in record.items() if not pd.isna(value)}
        for record in df.to_dict(orient="records")
    ]

    logger.info(
        "csv_parsed",
        row_count=len(rows),
        columns=list(df.columns)
    )

    return rows


def _normalize_column(col: object) -> str:
    """Trim and lower-case a header so 'Product_ID ' matches 'product_id'."""
    return str(col).strip().lower()

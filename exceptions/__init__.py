"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    NotFoundError,
    ValidationError,
    ConflictError,
    DuplicateError,
    AuthenticationError,
    DatabaseError,

    # Product-specific
    ProductNotFoundError,
    ProductIdExistsError,

    # CSV import
    CSVParseError,
    ImportLimitError,
)

__all__ = [
    # Base
    "AppError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "DuplicateError",
    "AuthenticationError",
    "DatabaseError",

    # Product
    "ProductNotFoundError",
    "ProductIdExistsError",

    # CSV import
    "CSVParseError",
    "ImportLimitError",
]

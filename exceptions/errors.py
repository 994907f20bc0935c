"""
Custom exception classes for the application.

Every error raised across a service boundary derives from AppError so routes
can render it in the standard error envelope.
"""

from typing import Optional, Any
from datetime import datetime, timezone


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "PRODUCT_NOT_FOUND")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class NotFoundError(AppError):
    """Resource not found (404)."""

    def __init__(
        self,
        resource: str,
        identifier: str,
        code: Optional[str] = None
    ):
        super().__init__(
            code=code or f"{resource.upper()}_NOT_FOUND",
            message=f"{resource} not found",
            status_code=404,
            details={"id": identifier}
        )


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


class ConflictError(AppError):
    """Conflict with existing resource (409)."""

    def __init__(
        self,
        message: str,
        code: str = "CONFLICT",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=409,
            details=details
        )


class DuplicateError(ConflictError):
    """Duplicate resource (409)."""

    def __init__(
        self,
        resource: str,
        field: str,
        value: str
    ):
        super().__init__(
            code=f"{resource.upper()}_{field.upper()}_EXISTS",
            message=f"{resource} with this {field} already exists",
            details={field: value}
        )


class AuthenticationError(AppError):
    """Caller did not identify an owner (401)."""

    def __init__(self, message: str = "Owner identity is required"):
        super().__init__(
            code="OWNER_REQUIRED",
            message=message,
            status_code=401
        )


class DatabaseError(AppError):
    """
    Database operation failed (500).

    `reason` keeps the storage-provided message untouched so callers that
    report per-row failures can quote it verbatim.
    """

    def __init__(
        self,
        operation: str,
        message: str,
        details: Optional[dict] = None
    ):
        self.operation = operation
        self.reason = message
        super().__init__(
            code="DATABASE_ERROR",
            message=f"Database {operation} failed: {message}",
            status_code=500,
            details={"operation": operation, **(details or {})}
        )


# ===================
# PRODUCT ERRORS
# ===================

class ProductNotFoundError(NotFoundError):
    """Product not found for this owner."""

    def __init__(self, product_id: str):
        super().__init__(
            resource="Product",
            identifier=product_id,
            code="PRODUCT_NOT_FOUND"
        )


class ProductIdExistsError(DuplicateError):
    """Owner already has a product with this product_id."""

    def __init__(self, product_id: str):
        super().__init__(
            resource="Product",
            field="product_id",
            value=product_id
        )


# ===================
# CSV IMPORT ERRORS
# ===================

class CSVParseError(ValidationError):
    """Uploaded file could not be parsed as CSV."""

    def __init__(
        self,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="CSV_PARSE_ERROR",
            message=message,
            details=details
        )


class ImportLimitError(ValidationError):
    """Upload exceeds the configured size or row limits."""

    def __init__(self, limit: str, actual: int, maximum: int):
        super().__init__(
            code="IMPORT_LIMIT_EXCEEDED",
            message=f"Upload exceeds the {limit} limit ({actual} > {maximum})",
            details={"limit": limit, "actual": actual, "maximum": maximum}
        )

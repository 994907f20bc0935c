"""
Import schemas: raw rows, per-field parse results and run outcome.
"""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from pydantic import Field

from models.base import BaseSchema

T = TypeVar("T")

# One line of an uploaded file: column name -> raw string value
ImportRow = dict[str, str]


@dataclass(frozen=True)
class Absent:
    """Column missing or blank."""

    def or_default(self, default: Any) -> Any:
        return default


@dataclass(frozen=True)
class Invalid:
    """Column present but not parseable as the expected type."""
    raw: str

    def or_default(self, default: Any) -> Any:
        return default


@dataclass(frozen=True)
class Value(Generic[T]):
    """Successfully parsed column value."""
    value: T

    def or_default(self, default: Any) -> T:
        return self.value


FieldValue = Union[Absent, Invalid, Value]


class ImportOutcome(BaseSchema):
    """
    Aggregate result of one import run.

    Transient: returned to the caller once and never persisted.
    """

    created: int = 0
    updated: int = 0
    failed: int = 0
    errors: list[str] = Field(default_factory=list)
    total_rows: int = 0
    cancelled: bool = False

    @property
    def processed(self) -> int:
        return self.created + self.updated + self.failed

    def record_failure(self, message: str) -> None:
        """Count a failed row and keep its message in file order."""
        self.failed += 1
        self.errors.append(message)

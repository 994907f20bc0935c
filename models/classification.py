"""
Classification result schema.
"""

from pydantic import Field

from models.base import BaseSchema


class ClassificationResult(BaseSchema):
    """Status and advisory messages derived for one product."""

    status: str = Field(..., description="Display status")
    anomalies: list[str] = Field(default_factory=list)
    reorder: list[str] = Field(default_factory=list)
    dead_stock: list[str] = Field(default_factory=list)
    turnover: list[str] = Field(default_factory=list)

    @property
    def advisories(self) -> list[str]:
        """Anomaly, reorder and dead stock messages (turnover excluded)."""
        return [*self.anomalies, *self.reorder, *self.dead_stock]

"""
Inventory status classification.

Maps a product record to one display status plus advisory messages.

Status precedence:
    1. Explicit status on the record, used verbatim
    2. low_stock when current_stock <= min_stock_level (min set)
    3. overstock when current_stock >= max_stock_level (max set)
    4. healthy

The reorder advisory uses a strict current_stock < min_stock_level, so a
product sitting exactly on its minimum is low_stock without a reorder line.
"""

import random
from typing import Callable, Iterable, Optional
import structlog

from models.classification import ClassificationResult
from models.product import ProductRecord, StockStatus

logger = structlog.get_logger(__name__)

TurnoverProvider = Callable[[ProductRecord], float]

TURNOVER_MIN = 1.0
TURNOVER_SPAN = 5.0


def placeholder_turnover(
    record: ProductRecord,
    rng: Optional[random.Random] = None,
) -> float:
    """
    Placeholder turnover rate in [1.0, 6.0).

    There is no sales-velocity data behind this value. Inject a real
    TurnoverProvider wherever deterministic output matters.
    """
    source = rng or random
    return TURNOVER_MIN + source.random() * TURNOVER_SPAN


def classify_status(record: ProductRecord) -> str:
    """Derive the display status for a single record."""
    if record.status:
        return record.status

    if record.min_stock_level is not None and record.current_stock <= record.min_stock_level:
        return StockStatus.LOW_STOCK.value
    if record.max_stock_level is not None and record.current_stock >= record.max_stock_level:
        return StockStatus.OVERSTOCK.value

    return StockStatus.HEALTHY.value


def anomaly_messages(record: ProductRecord) -> list[str]:
    if record.status == StockStatus.DEMAND_SPIKE.value or record.anomaly:
        return [f"{record.name}: Demand spike detected!"]
    return []


def reorder_messages(record: ProductRecord) -> list[str]:
    if record.min_stock_level is not None and record.current_stock < record.min_stock_level:
        return [
            f"{record.name}: Current stock {record.current_stock}, "
            f"reorder recommended (min: {record.min_stock_level})"
        ]
    return []


def dead_stock_messages(record: ProductRecord) -> list[str]:
    if record.status == StockStatus.DEAD_STOCK.value or record.dead_stock:
        return [f"{record.name}: Dead stock detected"]
    return []


def classify(
    record: ProductRecord,
    turnover_provider: Optional[TurnoverProvider] = None,
) -> ClassificationResult:
    """
    Classify one product.

    Args:
        record: Product to classify
        turnover_provider: Computes the turnover rate; defaults to the
            random placeholder

    Returns:
        ClassificationResult with status and advisory lists
    """
    provider = turnover_provider or placeholder_turnover
    rate = provider(record)

    return ClassificationResult(
        status=classify_status(record),
        anomalies=anomaly_messages(record),
        reorder=reorder_messages(record),
        dead_stock=dead_stock_messages(record),
        turnover=[f"{record.name}: Turnover rate {rate:.2f}"],
    )


class ClassifierService:
    """
    Stateless classifier with a configurable turnover provider.

    Safe to share between requests.
    """

    def __init__(self, turnover_provider: Optional[TurnoverProvider] = None):
        self.turnover_provider = turnover_provider

    def classify(self, record: ProductRecord) -> ClassificationResult:
        return classify(record, self.turnover_provider)

    def classify_many(
        self,
        records: Iterable[ProductRecord],
    ) -> list[tuple[ProductRecord, ClassificationResult]]:
        """Classify records, keeping input order."""
        results = [(record, self.classify(record)) for record in records]
        logger.debug("products_classified", count=len(results))
        return results


# Singleton instance for convenience
_classifier_service: Optional[ClassifierService] = None

def get_classifier_service() -> ClassifierService:
    """Get or create ClassifierService instance."""
    global _classifier_service
    if _classifier_service is None:
        _classifier_service = ClassifierService()
    return _classifier_service

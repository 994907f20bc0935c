"""
Inventory views built on the classifier.

Lists an owner's products with derived status, computes the headline
counters and assembles the inventory optimization report.
"""

from datetime import datetime, timezone
from typing import Optional
import structlog

from models.inventory import (
    InventoryItem,
    InventorySummary,
    InventoryReport,
    StockLevel,
)
from models.product import ProductResponse, StockStatus
from services.classifier_service import ClassifierService, get_classifier_service
from services.product_service import ProductService, get_product_service
from utils.text_utils import contains_text

logger = structlog.get_logger(__name__)


class InventoryService:
    """
    Inventory business logic.

    Read-only; all writes go through ProductService or the importer.
    """

    def __init__(
        self,
        product_service: Optional[ProductService] = None,
        classifier: Optional[ClassifierService] = None,
    ):
        self.product_service = product_service or get_product_service()
        self.classifier = classifier or get_classifier_service()

    def _to_item(self, product: ProductResponse) -> InventoryItem:
        result = self.classifier.classify(product)
        return InventoryItem(
            product_id=product.product_id,
            name=product.name,
            category=product.category,
            current_stock=product.current_stock,
            min_stock_level=product.min_stock_level,
            max_stock_level=product.max_stock_level,
            unit_price=product.unit_price,
            cost_price=product.cost_price,
            status=result.status,
            anomaly=product.anomaly,
            advisories=result.advisories,
        )

    def list_inventory(
        self,
        owner: str,
        search: Optional[str] = None,
        category: Optional[str] = None,
        status: Optional[str] = None,
    ) -> list[InventoryItem]:
        """
        Get an owner's classified products with optional filters.

        Args:
            owner: Owner id
            search: Matches name or category, ignoring case and accents
            category: Substring match on category
            status: Exact match on derived status

        Returns:
            Filtered inventory items ordered by name
        """
        logger.info(
            "listing_inventory",
            owner=owner,
            search=search,
            category=category,
            status=status
        )

        items = [self._to_item(p) for p in self.product_service.get_all(owner)]

        filtered = [
            item for item in items
            if (contains_text(item.name, search) or contains_text(item.category, search))
            and contains_text(item.category, category)
            and (not status or item.status == status)
        ]

        logger.info(
            "inventory_listed",
            owner=owner,
            total=len(items),
            matched=len(filtered)
        )

        return filtered

    def summary(self, owner: str) -> InventorySummary:
        """Headline counters over derived statuses."""
        items = self.list_inventory(owner)

        return InventorySummary(
            total_products=len(items),
            healthy_products=sum(1 for i in items if i.status == StockStatus.HEALTHY.value),
            alert_products=sum(1 for i in items if i.anomaly),
            low_stock_products=sum(1 for i in items if i.status == StockStatus.LOW_STOCK.value),
        )

    def optimization_report(self, owner: str) -> InventoryReport:
        """
        Build the inventory optimization report.

        Stock levels for every product plus the anomaly, reorder, dead stock
        and turnover advisories concatenated in product order.
        """
        logger.info("building_optimization_report", owner=owner)

        products = self.product_service.get_all(owner)
        report = InventoryReport(generated_at=datetime.now(timezone.utc))

        for product, result in self.classifier.classify_many(products):
            report.stock_levels.append(StockLevel(
                name=product.name,
                stock=product.current_stock,
                status=result.status,
            ))
            report.anomalies.extend(result.anomalies)
            report.reorder.extend(result.reorder)
            report.dead_stock.extend(result.dead_stock)
            report.turnover.extend(result.turnover)

        logger.info(
            "optimization_report_built",
            owner=owner,
            products=len(report.stock_levels),
            anomalies=len(report.anomalies),
            reorder=len(report.reorder),
            dead_stock=len(report.dead_stock)
        )

        return report


# Singleton instance for convenience
_inventory_service: Optional[InventoryService] = None

def get_inventory_service() -> InventoryService:
    """Get or create InventoryService instance."""
    global _inventory_service
    if _inventory_service is None:
        _inventory_service = InventoryService()
    return _inventory_service

"""
Business logic services.

Each service handles one domain area.
"""

from services.classifier_service import ClassifierService, get_classifier_service
from services.product_service import ProductService, get_product_service
from services.product_store import ProductStore, SupabaseProductStore
from services.import_service import ImportService, get_import_service
from services.inventory_service import InventoryService, get_inventory_service
from services.export_service import ExportService, get_export_service

__all__ = [
    "ClassifierService",
    "get_classifier_service",
    "ProductService",
    "get_product_service",
    "ProductStore",
    "SupabaseProductStore",
    "ImportService",
    "get_import_service",
    "InventoryService",
    "get_inventory_service",
    "ExportService",
    "get_export_service",
]

"""
API route modules.

Each module defines routes for one domain area.
"""

from routes.products import router as products_router
from routes.inventory import router as inventory_router
from routes.uploads import router as uploads_router

__all__ = [
    "products_router",
    "inventory_router",
    "uploads_router",
]

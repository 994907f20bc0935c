"""
Inventory API routes.

Classified inventory table, summary counters, optimization report and
exports.
"""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from typing import Optional
import structlog

from models.inventory import (
    InventoryListResponse,
    InventorySummary,
    InventoryReport,
)
from models.product import StockStatus
from routes.dependencies import get_owner, handle_error
from services.export_service import get_export_service
from services.inventory_service import get_inventory_service

logger = structlog.get_logger(__name__)

router = APIRouter()

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


# ===================
# ROUTES
# ===================

@router.get("", response_model=InventoryListResponse)
async def list_inventory(
    search: Optional[str] = Query(None, description="Match name or category"),
    category: Optional[str] = Query(None, description="Category contains"),
    status: Optional[StockStatus] = Query(None, description="Derived status"),
    owner: str = Depends(get_owner),
):
    """List classified products with optional filters."""
    try:
        service = get_inventory_service()
        items = service.list_inventory(
            owner,
            search=search,
            category=category,
            status=status.value if status else None,
        )

        return InventoryListResponse(data=items, total=len(items))

    except Exception as e:
        return handle_error(e)


@router.get("/summary", response_model=InventorySummary)
async def inventory_summary(owner: str = Depends(get_owner)):
    """Headline counters: total, healthy, alerts, low stock."""
    try:
        service = get_inventory_service()
        return service.summary(owner)

    except Exception as e:
        return handle_error(e)


@router.get("/report", response_model=InventoryReport)
async def optimization_report(owner: str = Depends(get_owner)):
    """
    Inventory optimization report.

    Turnover lines are placeholders, not computed from sales history.
    """
    try:
        service = get_inventory_service()
        return service.optimization_report(owner)

    except Exception as e:
        return handle_error(e)


@router.get("/export")
async def export_inventory(
    format: str = Query("csv", pattern="^(csv|xlsx)$", description="csv or xlsx"),
    owner: str = Depends(get_owner),
):
    """Download the full inventory table."""
    try:
        items = get_inventory_service().list_inventory(owner)
        export_service = get_export_service()

        if format == "xlsx":
            content = export_service.inventory_excel(items).getvalue()
            media_type = XLSX_MEDIA_TYPE
        else:
            content = export_service.inventory_csv(items)
            media_type = "text/csv"

        logger.info("inventory_exported", owner=owner, format=format, rows=len(items))

        return Response(
            content=content,
            media_type=media_type,
            headers={"Content-Disposition": f'attachment; filename="inventory.{format}"'},
        )

    except Exception as e:
        return handle_error(e)

"""
Upload API routes.

CSV product import and the downloadable template.
"""

from fastapi import APIRouter, Depends, UploadFile, File
from fastapi.responses import Response
import structlog

from models.imports import ImportOutcome
from routes.dependencies import get_owner, handle_error
from services.export_service import get_export_service
from services.import_service import get_import_service

logger = structlog.get_logger(__name__)

router = APIRouter()


# ===================
# ROUTES
# ===================

@router.post("/products", response_model=ImportOutcome)
async def upload_products(
    file: UploadFile = File(...),
    owner: str = Depends(get_owner),
):
    """
    Import products from a CSV file.

    New product_ids are created, known ones updated. Individual bad rows are
    reported in the outcome and never abort the upload.

    Raises:
        422: File cannot be parsed, or exceeds size/row limits
    """
    logger.info(
        "product_upload_started",
        owner=owner,
        filename=file.filename,
        content_type=file.content_type
    )

    try:
        content = await file.read()
        service = get_import_service()
        outcome = await service.import_file(content, owner)

        logger.info(
            "product_upload_complete",
            owner=owner,
            filename=file.filename,
            created=outcome.created,
            updated=outcome.updated,
            failed=outcome.failed
        )

        return outcome

    except Exception as e:
        return handle_error(e)


@router.get("/template")
async def download_template():
    """Sample CSV with every accepted column."""
    content = get_export_service().sample_csv()
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="products_template.csv"'},
    )

"""
Product service for business logic operations.

Every query is scoped to one owner through the `user_id` column. Products
are addressed by their business key `product_id`, never by storage id.
"""

from datetime import datetime, timezone
from typing import Optional
import structlog

from supabase import Client

from config import get_supabase_client, settings
from models.product import (
    ProductCreate,
    ProductUpdate,
    ProductRecord,
    ProductResponse,
)
from exceptions import (
    ProductNotFoundError,
    ProductIdExistsError,
    DatabaseError
)

logger = structlog.get_logger(__name__)


def _reason(e: Exception) -> str:
    """Storage-provided message for an exception (APIError carries .message)."""
    return getattr(e, "message", None) or str(e)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class ProductService:
    """
    Product business logic.

    Handles owner-scoped CRUD operations and the insert/update primitives
    used by the CSV importer.
    """

    def __init__(self, client: Optional[Client] = None):
        self.db = client or get_supabase_client()
        self.table = settings.products_table

    # ===================
    # READ OPERATIONS
    # ===================

    def list_ids(self, owner: str) -> set[str]:
        """
        Snapshot of product_ids currently stored for an owner.

        Args:
            owner: Owner id

        Returns:
            Set of product_id strings
        """
        logger.debug("listing_product_ids", owner=owner)

        try:
            result = (
                self.db.table(self.table)
                .select("product_id")
                .eq("user_id", owner)
                .execute()
            )
            ids = {row["product_id"] for row in result.data if row.get("product_id")}

            logger.info("product_ids_listed", owner=owner, count=len(ids))
            return ids

        except Exception as e:
            logger.error("list_product_ids_failed", owner=owner, error=str(e))
            raise DatabaseError("select", _reason(e))

    def get_all(
        self,
        owner: str,
        category: Optional[str] = None,
    ) -> list[ProductResponse]:
        """
        Get all products for an owner.

        Args:
            owner: Owner id
            category: Exact category filter

        Returns:
            Products ordered by name
        """
        logger.info("getting_products", owner=owner, category=category)

        try:
            query = (
                self.db.table(self.table)
                .select("*")
                .eq("user_id", owner)
            )
            if category:
                query = query.eq("category", category)

            result = query.order("name").execute()

            products = [ProductResponse(**row) for row in result.data]

            logger.info("products_retrieved", owner=owner, count=len(products))
            return products

        except Exception as e:
            logger.error("get_products_failed", owner=owner, error=str(e))
            raise DatabaseError("select", _reason(e))

    def get_by_product_id(self, owner: str, product_id: str) -> Optional[ProductResponse]:
        """
        Get one product by its business key.

        Returns:
            ProductResponse or None if not found
        """
        logger.debug("getting_product", owner=owner, product_id=product_id)

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("user_id", owner)
                .eq("product_id", product_id)
                .execute()
            )

            if not result.data:
                return None

            return ProductResponse(**result.data[0])

        except Exception as e:
            logger.error(
                "get_product_failed",
                owner=owner,
                product_id=product_id,
                error=str(e)
            )
            raise DatabaseError("select", _reason(e))

    def get_or_raise(self, owner: str, product_id: str) -> ProductResponse:
        """Same as get_by_product_id but raises ProductNotFoundError."""
        product = self.get_by_product_id(owner, product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    def count(self, owner: str) -> int:
        """Count an owner's products."""
        try:
            result = (
                self.db.table(self.table)
                .select("id", count="exact")
                .eq("user_id", owner)
                .execute()
            )
            return result.count or 0
        except Exception as e:
            logger.error("count_products_failed", owner=owner, error=str(e))
            raise DatabaseError("count", _reason(e))

    # ===================
    # IMPORT PRIMITIVES
    # ===================

    def insert(self, owner: str, record: ProductRecord) -> None:
        """
        Insert a record for an owner.

        Raises:
            DatabaseError: With the storage reason if the insert is rejected
        """
        payload = {**record.to_row(), "user_id": owner, "updated_at": _now()}

        try:
            self.db.table(self.table).insert(payload).execute()
        except Exception as e:
            logger.warning(
                "insert_product_failed",
                owner=owner,
                product_id=record.product_id,
                error=str(e)
            )
            raise DatabaseError("insert", _reason(e))

    def update(self, owner: str, product_id: str, record: ProductRecord) -> None:
        """
        Overwrite the stored record keyed on (owner, product_id).

        Raises:
            DatabaseError: With the storage reason if the update is rejected
        """
        payload = {**record.to_row(), "user_id": owner, "updated_at": _now()}

        try:
            (
                self.db.table(self.table)
                .update(payload)
                .eq("user_id", owner)
                .eq("product_id", product_id)
                .execute()
            )
        except Exception as e:
            logger.warning(
                "update_product_failed",
                owner=owner,
                product_id=product_id,
                error=str(e)
            )
            raise DatabaseError("update", _reason(e))

    # ===================
    # MANUAL ENTRY
    # ===================

    def create(self, owner: str, data: ProductCreate) -> ProductResponse:
        """
        Create a product from the manual entry form.

        Raises:
            ProductIdExistsError: If the owner already has this product_id
        """
        logger.info("creating_product", owner=owner, product_id=data.product_id)

        if self.get_by_product_id(owner, data.product_id):
            raise ProductIdExistsError(data.product_id)

        try:
            insert_data = {
                **data.model_dump(),
                "user_id": owner,
                "updated_at": _now(),
            }

            result = (
                self.db.table(self.table)
                .insert(insert_data)
                .execute()
            )

            product = ProductResponse(**result.data[0])

            logger.info(
                "product_created",
                owner=owner,
                product_id=product.product_id
            )

            return product

        except Exception as e:
            logger.error(
                "create_product_failed",
                owner=owner,
                product_id=data.product_id,
                error=str(e)
            )
            raise DatabaseError("insert", _reason(e))

    def update_product(
        self,
        owner: str,
        product_id: str,
        data: ProductUpdate,
    ) -> ProductResponse:
        """
        Update an existing product from the edit form.

        Only provided fields are written.

        Raises:
            ProductNotFoundError: If the product doesn't exist
        """
        logger.info("updating_product", owner=owner, product_id=product_id)

        existing = self.get_or_raise(owner, product_id)

        update_data = data.model_dump(exclude_unset=True)
        if not update_data:
            return existing

        try:
            result = (
                self.db.table(self.table)
                .update({**update_data, "updated_at": _now()})
                .eq("user_id", owner)
                .eq("product_id", product_id)
                .execute()
            )

            product = ProductResponse(**result.data[0])

            logger.info(
                "product_updated",
                owner=owner,
                product_id=product_id,
                fields=list(update_data.keys())
            )

            return product

        except Exception as e:
            logger.error(
                "update_product_failed",
                owner=owner,
                product_id=product_id,
                error=str(e)
            )
            raise DatabaseError("update", _reason(e))

    def delete(self, owner: str, product_id: str) -> bool:
        """
        Permanently delete a product.

        Raises:
            ProductNotFoundError: If the product doesn't exist
        """
        logger.info("deleting_product", owner=owner, product_id=product_id)

        self.get_or_raise(owner, product_id)

        try:
            (
                self.db.table(self.table)
                .delete()
                .eq("user_id", owner)
                .eq("product_id", product_id)
                .execute()
            )

            logger.info("product_deleted", owner=owner, product_id=product_id)
            return True

        except Exception as e:
            logger.error(
                "delete_product_failed",
                owner=owner,
                product_id=product_id,
                error=str(e)
            )
            raise DatabaseError("delete", _reason(e))


# Singleton instance for convenience
_product_service: Optional[ProductService] = None

def get_product_service() -> ProductService:
    """Get or create ProductService instance."""
    global _product_service
    if _product_service is None:
        _product_service = ProductService()
    return _product_service

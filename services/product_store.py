"""
Storage boundary used by the importer.

The importer only needs three calls, each awaited before the next row is
handled. SupabaseProductStore adapts the synchronous ProductService by
running its calls in FastAPI's threadpool.
"""

from typing import Optional, Protocol

from fastapi.concurrency import run_in_threadpool

from models.product import ProductRecord
from services.product_service import ProductService, get_product_service


class ProductStore(Protocol):
    """
    Owner-scoped product storage.

    insert and update raise DatabaseError (with `.reason`) when the store
    rejects the operation.
    """

    async def list_ids(self, owner: str) -> set[str]: ...

    async def insert(self, owner: str, record: ProductRecord) -> None: ...

    async def update(self, owner: str, product_id: str, record: ProductRecord) -> None: ...


class SupabaseProductStore:
    """ProductStore backed by the Supabase products table."""

    def __init__(self, service: Optional[ProductService] = None):
        self.service = service or get_product_service()

    async def list_ids(self, owner: str) -> set[str]:
        return await run_in_threadpool(self.service.list_ids, owner)

    async def insert(self, owner: str, record: ProductRecord) -> None:
        await run_in_threadpool(self.service.insert, owner, record)

    async def update(self, owner: str, product_id: str, record: ProductRecord) -> None:
        await run_in_threadpool(self.service.update, owner, product_id, record)

"""
Shared test fixtures.
"""

import os
import sys
from pathlib import Path

# Add project root to Python path
root_dir = Path(__file__).parent.parent
sys.path.insert(0, str(root_dir))

# Settings are loaded at import time; give them something to validate
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")

import pytest
from unittest.mock import patch
from datetime import datetime, timezone
from typing import Generator, Optional
from uuid import uuid4

from exceptions import DatabaseError
from models.product import ProductRecord


# ===================
# MOCK SUPABASE CLIENT
# ===================

class MockAPIError(Exception):
    """Stand-in for postgrest APIError (exposes .message)."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class MockSupabaseResponse:
    """Mock Supabase query response."""

    def __init__(self, data=None, count: int = None):
        self.data = data if data is not None else []
        self.count = count if count is not None else (len(self.data) if isinstance(self.data, list) else 1)


class MockSupabaseQuery:
    """
    Mock Supabase query builder with chainable methods.

    Filters are applied for real against the table's rows so owner scoping
    can be asserted.
    """

    def __init__(self, table: "MockSupabaseTable", operation: str, payload=None):
        self._table = table
        self._operation = operation
        self._payload = payload
        self._filters: list[tuple[str, object]] = []
        self._order: Optional[str] = None
        self._limit: Optional[int] = None

    def eq(self, column, value):
        self._filters.append((column, value))
        return self

    def order(self, column, **kwargs):
        self._order = column
        return self

    def limit(self, count):
        self._limit = count
        return self

    def _matches(self, row: dict) -> bool:
        return all(row.get(column) == value for column, value in self._filters)

    def execute(self) -> MockSupabaseResponse:
        table = self._table
        table.calls.append((self._operation, self._payload, list(self._filters)))

        if table.fail_on.get(self._operation):
            raise MockAPIError(table.fail_on[self._operation])

        now = datetime.now(timezone.utc).isoformat()

        if self._operation == "insert":
            items = self._payload if isinstance(self._payload, list) else [self._payload]
            inserted = []
            for item in items:
                row = {"id": str(uuid4()), "created_at": now, **item}
                table.rows.append(row)
                inserted.append(dict(row))
            return MockSupabaseResponse(data=inserted)

        matched = [row for row in table.rows if self._matches(row)]

        if self._operation == "update":
            for row in matched:
                row.update(self._payload)
            return MockSupabaseResponse(data=[dict(r) for r in matched])

        if self._operation == "delete":
            table.rows = [row for row in table.rows if not self._matches(row)]
            return MockSupabaseResponse(data=[dict(r) for r in matched])

        data = [dict(r) for r in matched]
        if self._order:
            data.sort(key=lambda r: str(r.get(self._order) or ""))
        count = len(data)
        if self._limit is not None:
            data = data[:self._limit]
        return MockSupabaseResponse(data=data, count=count)


class MockSupabaseTable:
    """In-memory table with optional failure injection per operation."""

    def __init__(self):
        self.rows: list[dict] = []
        self.calls: list[tuple] = []
        self.fail_on: dict[str, str] = {}

    def select(self, *args, **kwargs):
        return MockSupabaseQuery(self, "select")

    def insert(self, data):
        return MockSupabaseQuery(self, "insert", data)

    def update(self, data):
        return MockSupabaseQuery(self, "update", data)

    def delete(self):
        return MockSupabaseQuery(self, "delete")


class MockSupabaseClient:
    """Mock Supabase client."""

    def __init__(self):
        self._tables: dict[str, MockSupabaseTable] = {}

    def set_table_data(self, table_name: str, data: list):
        """Configure mock data for a table."""
        self.table(table_name).rows = [dict(row) for row in data]

    def fail(self, table_name: str, operation: str, message: str):
        """Make every `operation` on the table raise with `message`."""
        self.table(table_name).fail_on[operation] = message

    def table(self, name: str) -> MockSupabaseTable:
        if name not in self._tables:
            self._tables[name] = MockSupabaseTable()
        return self._tables[name]


# ===================
# FAKE PRODUCT STORE
# ===================

class FakeProductStore:
    """
    Async in-memory ProductStore for importer tests.

    `fail_inserts` / `fail_updates` map product_id to a rejection reason.
    """

    def __init__(self, existing: Optional[dict[str, dict[str, ProductRecord]]] = None):
        self.records: dict[str, dict[str, ProductRecord]] = existing or {}
        self.calls: list[tuple[str, str, str]] = []
        self.fail_inserts: dict[str, str] = {}
        self.fail_updates: dict[str, str] = {}
        self.list_ids_calls = 0

    async def list_ids(self, owner: str) -> set[str]:
        self.list_ids_calls += 1
        return set(self.records.get(owner, {}))

    async def insert(self, owner: str, record: ProductRecord) -> None:
        self.calls.append(("insert", owner, record.product_id))
        if record.product_id in self.fail_inserts:
            raise DatabaseError("insert", self.fail_inserts[record.product_id])
        owned = self.records.setdefault(owner, {})
        if record.product_id in owned:
            raise DatabaseError("insert", "duplicate key value violates unique constraint")
        owned[record.product_id] = record

    async def update(self, owner: str, product_id: str, record: ProductRecord) -> None:
        self.calls.append(("update", owner, product_id))
        if product_id in self.fail_updates:
            raise DatabaseError("update", self.fail_updates[product_id])
        self.records.setdefault(owner, {})[product_id] = record

    def get(self, owner: str, product_id: str) -> ProductRecord:
        return self.records[owner][product_id]


# ===================
# FIXTURES
# ===================

@pytest.fixture
def mock_supabase() -> MockSupabaseClient:
    """
    Create a mock Supabase client.

    Usage:
        def test_something(mock_supabase):
            mock_supabase.set_table_data("products", [
                {"id": "1", "product_id": "P1", "user_id": "owner-1", ...}
            ])
    """
    return MockSupabaseClient()


@pytest.fixture
def mock_db(mock_supabase) -> Generator:
    """
    Patch the database client with mock.

    Any code using get_supabase_client() gets the mock, and the cached
    service singletons are reset around the test.
    """
    import services.product_service as product_module
    import services.inventory_service as inventory_module
    import services.import_service as import_module

    with patch("config.database.get_supabase_client", return_value=mock_supabase):
        with patch("services.product_service.get_supabase_client", return_value=mock_supabase):
            product_module._product_service = None
            inventory_module._inventory_service = None
            import_module._import_service = None
            yield mock_supabase
            product_module._product_service = None
            inventory_module._inventory_service = None
            import_module._import_service = None


@pytest.fixture
def fake_store() -> FakeProductStore:
    return FakeProductStore()


@pytest.fixture
def owner() -> str:
    return "owner-1"


@pytest.fixture
def fixed_turnover():
    """Deterministic turnover provider."""
    return lambda record: 2.5


@pytest.fixture
def sample_product_data(owner) -> dict:
    """Sample stored product row."""
    return {
        "id": "test-uuid-123",
        "user_id": owner,
        "product_id": "P001",
        "name": "Basmati Rice",
        "category": "Groceries",
        "current_stock": 5,
        "min_stock_level": 10,
        "max_stock_level": 100,
        "unit_price": 12.5,
        "cost_price": 9.0,
        "created_at": "2025-06-01T10:00:00Z",
        "updated_at": "2025-06-01T10:00:00Z"
    }


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client_with_mock_db(mock_db):
    """
    Create FastAPI test client with mocked database.

    Usage:
        def test_endpoint(test_client_with_mock_db, mock_supabase):
            mock_supabase.set_table_data("products", [...])
            response = test_client_with_mock_db.get(
                "/api/products", headers={"X-Owner-Id": "owner-1"}
            )
    """
    from fastapi.testclient import TestClient
    from main import app

    yield TestClient(app)

"""
Unit tests for ProductService.

Uses the in-memory Supabase mock from conftest.

Run: pytest tests/unit/test_product_service.py -v
"""

import pytest

from exceptions import DatabaseError, ProductIdExistsError, ProductNotFoundError
from models.product import ProductCreate, ProductUpdate
from services.product_service import ProductService, get_product_service

from tests.factories import ProductFactory


@pytest.fixture
def service(mock_db):
    return ProductService(mock_db)


@pytest.fixture
def products_table(mock_db):
    return mock_db.table("products")


# ===================
# READ OPERATIONS
# ===================

class TestReads:

    def test_list_ids_scoped_to_owner(self, service, mock_db, owner):
        mock_db.set_table_data("products", [
            ProductFactory.create(owner=owner, product_id="A"),
            ProductFactory.create(owner=owner, product_id="B"),
            ProductFactory.create(owner="other", product_id="C"),
        ])

        assert service.list_ids(owner) == {"A", "B"}

    def test_list_ids_empty(self, service, owner):
        assert service.list_ids(owner) == set()

    def test_get_all_ordered_by_name(self, service, mock_db, owner):
        mock_db.set_table_data("products", [
            ProductFactory.create(owner=owner, name="Tea"),
            ProductFactory.create(owner=owner, name="Apples"),
            ProductFactory.create(owner="other", name="Bread"),
        ])

        products = service.get_all(owner)

        assert [p.name for p in products] == ["Apples", "Tea"]
        assert all(p.user_id == owner for p in products)

    def test_get_all_category_filter(self, service, mock_db, owner):
        mock_db.set_table_data("products", [
            ProductFactory.create(owner=owner, category="Dairy"),
            ProductFactory.create(owner=owner, category="Groceries"),
        ])

        products = service.get_all(owner, category="Dairy")

        assert [p.category for p in products] == ["Dairy"]

    def test_get_all_tolerates_null_columns(self, service, mock_db, owner):
        mock_db.set_table_data("products", [
            ProductFactory.create(
                owner=owner,
                current_stock=None,
                unit_price=None,
                min_stock_level=None,
                max_stock_level=None,
                cost_price=None,
            ),
        ])

        product = service.get_all(owner)[0]

        assert product.current_stock == 0
        assert product.unit_price == 0
        assert product.max_stock_level is None

    def test_get_by_product_id_other_owner_is_none(self, service, mock_db, owner):
        mock_db.set_table_data("products", [
            ProductFactory.create(owner="other", product_id="P1"),
        ])

        assert service.get_by_product_id(owner, "P1") is None

    def test_get_or_raise_not_found(self, service, owner):
        with pytest.raises(ProductNotFoundError) as exc_info:
            service.get_or_raise(owner, "missing")

        assert exc_info.value.status_code == 404

    def test_count(self, service, mock_db, owner):
        mock_db.set_table_data("products", ProductFactory.create_batch(3, owner=owner))

        assert service.count(owner) == 3

    def test_select_failure_raises_database_error(self, service, mock_db, owner):
        mock_db.fail("products", "select", "relation does not exist")

        with pytest.raises(DatabaseError) as exc_info:
            service.get_all(owner)

        assert exc_info.value.reason == "relation does not exist"


# ===================
# IMPORT PRIMITIVES
# ===================

class TestImportPrimitives:

    def test_insert_writes_owner_and_columns(self, service, products_table, owner):
        record = ProductFactory.record(product_id="P1", name="Rice", current_stock=5)

        service.insert(owner, record)

        row = products_table.rows[0]
        assert row["user_id"] == owner
        assert row["product_id"] == "P1"
        assert row["current_stock"] == 5
        assert "status" not in row
        assert "updated_at" in row

    def test_insert_failure_keeps_storage_reason(self, service, mock_db, owner):
        mock_db.fail("products", "insert", 'duplicate key value violates unique constraint "products_user_product_key"')

        with pytest.raises(DatabaseError) as exc_info:
            service.insert(owner, ProductFactory.record(product_id="P1"))

        assert exc_info.value.operation == "insert"
        assert exc_info.value.reason.startswith("duplicate key value")

    def test_update_only_touches_owner_row(self, service, mock_db, products_table, owner):
        mock_db.set_table_data("products", [
            ProductFactory.create(owner=owner, product_id="P1", name="Old"),
            ProductFactory.create(owner="other", product_id="P1", name="Theirs"),
        ])

        service.update(owner, "P1", ProductFactory.record(product_id="P1", name="New"))

        names = {(r["user_id"], r["name"]) for r in products_table.rows}
        assert names == {(owner, "New"), ("other", "Theirs")}

    def test_update_failure_keeps_storage_reason(self, service, mock_db, owner):
        mock_db.fail("products", "update", "row is locked")

        with pytest.raises(DatabaseError) as exc_info:
            service.update(owner, "P1", ProductFactory.record(product_id="P1"))

        assert exc_info.value.reason == "row is locked"


# ===================
# MANUAL ENTRY
# ===================

class TestManualEntry:

    def test_create(self, service, owner):
        data = ProductCreate(product_id="P1", name="Rice", category="Groceries", current_stock=12)

        product = service.create(owner, data)

        assert product.product_id == "P1"
        assert product.user_id == owner
        assert product.id

    def test_create_duplicate_product_id(self, service, mock_db, owner):
        mock_db.set_table_data("products", [ProductFactory.create(owner=owner, product_id="P1")])
        data = ProductCreate(product_id="P1", name="Rice", category="Groceries")

        with pytest.raises(ProductIdExistsError) as exc_info:
            service.create(owner, data)

        assert exc_info.value.status_code == 409

    def test_same_product_id_for_another_owner_is_allowed(self, service, mock_db, owner):
        mock_db.set_table_data("products", [ProductFactory.create(owner="other", product_id="P1")])
        data = ProductCreate(product_id="P1", name="Rice", category="Groceries")

        assert service.create(owner, data).user_id == owner

    def test_update_product_partial(self, service, mock_db, owner):
        mock_db.set_table_data("products", [
            ProductFactory.create(owner=owner, product_id="P1", name="Rice", current_stock=5),
        ])

        product = service.update_product(owner, "P1", ProductUpdate(current_stock=40))

        assert product.current_stock == 40
        assert product.name == "Rice"

    def test_update_product_with_no_fields_returns_existing(self, service, mock_db, products_table, owner):
        mock_db.set_table_data("products", [ProductFactory.create(owner=owner, product_id="P1")])

        service.update_product(owner, "P1", ProductUpdate())

        assert not any(call[0] == "update" for call in products_table.calls)

    def test_update_product_not_found(self, service, owner):
        with pytest.raises(ProductNotFoundError):
            service.update_product(owner, "nope", ProductUpdate(name="X"))

    def test_delete(self, service, mock_db, products_table, owner):
        mock_db.set_table_data("products", [
            ProductFactory.create(owner=owner, product_id="P1"),
            ProductFactory.create(owner=owner, product_id="P2"),
        ])

        assert service.delete(owner, "P1") is True
        assert [r["product_id"] for r in products_table.rows] == ["P2"]

    def test_delete_not_found(self, service, owner):
        with pytest.raises(ProductNotFoundError):
            service.delete(owner, "nope")


def test_get_product_service_singleton(mock_db):
    assert get_product_service() is get_product_service()

"""Unit tests for the in-memory product store."""

import threading

import pytest

from src.catalog_api.core.errors import ApiError, ErrorKind
from src.catalog_api.entities.service.product import (
    ProductCreate,
    ProductStore,
    ProductUpdate,
    normalize_name,
)


def _payload(name: str = "Widget", **overrides) -> ProductCreate:
    fields = {
        "name": name,
        "description": "d",
        "price": 9.99,
        "category": "X",
        "in_stock": True,
    }
    fields.update(overrides)
    return ProductCreate(**fields)


class TestProductStoreReads:
    """Test lookups and listing."""

    def test_list_all_preserves_insertion_order(self, store):
        assert [p.id for p in store.list_all()] == [1, 2, 3]

    def test_list_all_returns_copies(self, store):
        snapshot = store.list_all()
        snapshot[0].name = "Changed"
        assert store.get(1).name == "Laptop Pro"

    def test_get_existing(self, store):
        assert store.get(2).name == "Wireless Mouse"

    def test_get_missing_raises_not_found(self, store):
        with pytest.raises(ApiError) as exc_info:
            store.get(999)
        assert exc_info.value.kind is ErrorKind.NOT_FOUND
        assert exc_info.value.message == "Product with ID 999 not found"

    def test_index_of(self, store):
        assert store.index_of(3) == 2
        with pytest.raises(ApiError):
            store.index_of(42)

    def test_find_by_name_ignores_case_and_whitespace(self, store):
        assert store.find_by_name("  LAPTOP pro ").id == 1
        assert store.find_by_name("Laptop") is None

    def test_find_by_name_can_exclude_a_record(self, store):
        assert store.find_by_name("Laptop Pro", exclude_id=1) is None


class TestProductStoreWrites:
    """Test create, update and delete."""

    def test_create_assigns_next_id(self, store):
        created = store.create(_payload())
        assert created.id == 4
        assert store.count() == 4
        assert store.list_all()[-1].name == "Widget"

    def test_ids_are_never_reused(self, store):
        first = store.create(_payload("A"))
        store.delete(first.id)
        store.delete(3)
        second = store.create(_payload("B"))
        assert second.id > first.id

    def test_ids_strictly_increase(self):
        store = ProductStore()
        ids = [store.create(_payload(f"P{i}")).id for i in range(5)]
        assert ids == sorted(ids)
        assert len(set(ids)) == 5

    def test_update_changes_only_supplied_fields(self, store):
        updated = store.update(1, ProductUpdate(price=999.0))
        assert updated.price == 999.0
        assert updated.name == "Laptop Pro"
        assert updated.in_stock is True
        assert store.get(1).price == 999.0

    def test_empty_update_is_noop(self, store):
        before = store.get(2)
        assert store.update(2, ProductUpdate()) == before

    def test_update_missing_raises_not_found(self, store):
        with pytest.raises(ApiError) as exc_info:
            store.update(50, ProductUpdate(price=1.0))
        assert exc_info.value.kind is ErrorKind.NOT_FOUND

    def test_delete_returns_removed_record(self, store):
        removed = store.delete(1)
        assert removed.name == "Laptop Pro"
        assert [p.id for p in store.list_all()] == [2, 3]
        with pytest.raises(ApiError):
            store.delete(1)

    def test_reset_keeps_id_counter_ahead(self, store, make_product):
        store.reset([make_product(10)])
        assert store.create(_payload()).id == 11


class TestProductStoreConcurrency:
    """Check-then-create under the store lock never admits duplicate names."""

    def test_parallel_creates_of_same_name(self):
        store = ProductStore()
        barrier = threading.Barrier(8)
        created = []

        def worker():
            barrier.wait()
            with store.locked():
                if store.find_by_name("Widget") is None:
                    created.append(store.create(_payload()))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(created) == 1
        assert store.count() == 1


def test_normalize_name_folds_compatibility_forms():
    assert normalize_name(" Ｗidget ") == normalize_name("widget")

"""Tests for the in-memory Database and its transactions."""

import threading

import pytest

from orderdesk.domain.exceptions import (
    DeadlineExceeded,
    OrderNotFound,
    OrderVersionConflict,
    ProductNotFound,
)
from orderdesk.domain.model.deadline import Deadline
from orderdesk.infrastructure.persistence.database import ORDERS, PRODUCTS, Database
from orderdesk.infrastructure.persistence.database_order_repository import (
    DatabaseOrderRepository,
)
from orderdesk.infrastructure.persistence.database_product_repository import (
    DatabaseProductRepository,
)
from tests.fakes import make_order, make_product, seeded_database


class TestReadsAndWrites:

    def test_get_returns_a_copy(self):
        db = seeded_database()
        product = db.get(PRODUCTS, "PRODUCT1")
        product.quantity = 0
        assert db.get(PRODUCTS, "PRODUCT1").quantity == 200

    def test_put_stores_a_copy(self):
        db = Database()
        product = make_product()
        db.put(PRODUCTS, product.id, product)
        product.quantity = 0
        assert db.get(PRODUCTS, product.id).quantity == 200

    def test_missing_row_raises_table_specific_error(self):
        db = Database()
        with pytest.raises(ProductNotFound, match="Product 'X' not found"):
            db.get(PRODUCTS, "X")

    def test_is_empty(self):
        assert Database().is_empty()
        assert not seeded_database().is_empty()


class TestTransactions:

    def test_staged_writes_visible_inside_only(self):
        db = seeded_database()
        with db.begin() as tx:
            product = tx.get_product("PRODUCT1")
            product.quantity = 1
            tx.put_product(product)
            assert tx.get_product("PRODUCT1").quantity == 1
            assert db._tables[PRODUCTS]["PRODUCT1"].quantity == 200
            tx.commit()
        assert db.get(PRODUCTS, "PRODUCT1").quantity == 1

    def test_leaving_without_commit_discards(self):
        db = seeded_database()
        with db.begin() as tx:
            product = tx.get_product("PRODUCT1")
            product.quantity = 1
            tx.put_product(product)
        assert db.get(PRODUCTS, "PRODUCT1").quantity == 200

    def test_exception_discards(self):
        db = seeded_database()
        with pytest.raises(ZeroDivisionError):
            with db.begin() as tx:
                product = tx.get_product("PRODUCT1")
                product.quantity = 1
                tx.put_product(product)
                1 / 0
        assert db.get(PRODUCTS, "PRODUCT1").quantity == 200

    def test_closed_transaction_unusable(self):
        db = seeded_database()
        with db.begin() as tx:
            pass
        with pytest.raises(RuntimeError, match="closed"):
            tx.get_product("PRODUCT1")

    def test_lock_wait_honours_deadline(self):
        db = seeded_database()
        held = threading.Event()
        release = threading.Event()

        def hold_lock():
            with db.begin():
                held.set()
                release.wait(5)

        holder = threading.Thread(target=hold_lock)
        holder.start()
        held.wait(5)
        try:
            with pytest.raises(DeadlineExceeded):
                db.get(PRODUCTS, "PRODUCT1", Deadline(timeout=0.05))
        finally:
            release.set()
            holder.join()


class TestOrderVersions:

    def test_store_assigns_id_and_version(self):
        repo = DatabaseOrderRepository(seeded_database())
        order = make_order(order_id=None)

        repo.store(order)

        assert order.id is not None
        assert order.version == 1
        assert repo.find_by_id(order.id).version == 1

    def test_update_bumps_version(self):
        repo = DatabaseOrderRepository(seeded_database())
        order = make_order()
        repo.store(order)

        repo.update(order)

        assert order.version == 2
        assert repo.find_by_id(order.id).version == 2

    def test_stale_update_rejected(self):
        repo = DatabaseOrderRepository(seeded_database())
        order = make_order()
        repo.store(order)
        first = repo.find_by_id(order.id)
        second = repo.find_by_id(order.id)

        first.add_product(make_product(), 1)
        repo.update(first)
        second.add_product(make_product(), 3)

        with pytest.raises(OrderVersionConflict):
            repo.update(second)

        assert repo.find_by_id(order.id).cart[0].quantity.value == 1

    def test_update_of_unknown_order(self):
        repo = DatabaseOrderRepository(seeded_database())
        with pytest.raises(OrderNotFound):
            repo.update(make_order("ghost"))

    def test_storing_same_new_order_twice_rejected(self):
        db = seeded_database()
        repo = DatabaseOrderRepository(db)
        repo.store(make_order("ORDER1"))

        with pytest.raises(OrderVersionConflict):
            repo.store(make_order("ORDER1"))

        assert len(db.get_all(ORDERS)) == 1


class TestProductRepository:

    def test_find_all_sorted(self):
        repo = DatabaseProductRepository(seeded_database())
        assert [p.id for p in repo.find_all()] == ["PRODUCT1", "PRODUCT2"]

    def test_update(self):
        repo = DatabaseProductRepository(seeded_database())
        product = repo.find_by_id("PRODUCT2")
        product.quantity = 7
        repo.update(product)
        assert repo.find_by_id("PRODUCT2").quantity == 7

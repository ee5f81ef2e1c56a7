"""Tests for the JSON-file-backed Database."""

import json
import threading

import pytest
from filelock import FileLock

from orderdesk.domain.exceptions import DeadlineExceeded, QuantityExceedsStock, StorageError
from orderdesk.domain.model.deadline import Deadline
from orderdesk.domain.model.order import OrderStatus
from orderdesk.domain.model.value_objects import Money
from orderdesk.infrastructure.persistence.database import COUPONS, ORDERS, PRODUCTS
from orderdesk.infrastructure.persistence.json_database import JsonDatabase
from tests.fakes import NOW, FailingJsonDatabase, make_container, seeded_database


class TestJsonDatabase:

    def test_seed_is_written_to_disk(self, tmp_path):
        path = tmp_path / "db.json"
        seeded_database(JsonDatabase(path))

        document = json.loads(path.read_text())

        assert [p["id"] for p in document["products"]] == ["PRODUCT1", "PRODUCT2"]
        assert document["products"][0]["price"] == {"amount": "500", "currency": "USD"}
        assert document["orders"] == []

    def test_creates_missing_directories(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "db.json"
        seeded_database(JsonDatabase(path))
        assert path.exists()

    def test_full_order_survives_reload(self, tmp_path):
        path = tmp_path / "db.json"
        c = make_container(db=seeded_database(JsonDatabase(path)))
        order_id = c.service.make_order.handle("CUSTOMER1").id
        c.service.add_product.handle(order_id, "PRODUCT1", 5)
        c.service.apply_coupon.handle(order_id, "DISCOUNT_20%")
        c.service.submit_order.handle(order_id)

        reloaded = JsonDatabase(path)

        order = reloaded.get(ORDERS, order_id)
        assert order.status is OrderStatus.SUBMITTED
        assert order.price == Money.of("2500")
        assert order.price_after_reduction == Money.of("2000")
        assert order.coupon.begin < NOW < order.coupon.end
        assert order.version == 4
        assert reloaded.get(PRODUCTS, "PRODUCT1").quantity == 195
        assert reloaded.get(COUPONS, "DISCOUNT_20%").quantity == 99

    def test_reloaded_database_is_not_reseeded(self, tmp_path):
        path = tmp_path / "db.json"
        seeded_database(JsonDatabase(path))
        assert not JsonDatabase(path).is_empty()

    def test_failed_write_leaves_disk_and_memory_unchanged(self, tmp_path):
        path = tmp_path / "db.json"
        db = seeded_database(FailingJsonDatabase(path))
        before = path.read_text()
        db.fail_writes = True

        product = db.get(PRODUCTS, "PRODUCT1")
        product.quantity = 1
        with pytest.raises(StorageError, match="No space left"):
            db.put(PRODUCTS, product.id, product)

        assert path.read_text() == before
        assert db.get(PRODUCTS, "PRODUCT1").quantity == 200
        assert not list(tmp_path.glob("*.tmp"))

    def test_corrupt_file_reported(self, tmp_path):
        path = tmp_path / "db.json"
        path.write_text("{not json")
        with pytest.raises(StorageError, match="Cannot read database file"):
            JsonDatabase(path)


class TestSharedFile:
    """Two JsonDatabase instances on one file behave like two CLI processes."""

    def _open_order(self, c, quantity):
        order_id = c.service.make_order.handle("CUSTOMER1").id
        c.service.add_product.handle(order_id, "PRODUCT1", quantity)
        return order_id

    def test_second_instance_sees_committed_reservation(self, tmp_path):
        path = tmp_path / "db.json"
        first = make_container(db=seeded_database(JsonDatabase(path)))
        second = make_container(db=JsonDatabase(path))
        first_id = self._open_order(first, 150)
        second_id = self._open_order(second, 150)

        first.service.submit_order.handle(first_id)
        with pytest.raises(QuantityExceedsStock):
            second.service.submit_order.handle(second_id)

        on_disk = JsonDatabase(path)
        assert on_disk.get(PRODUCTS, "PRODUCT1").quantity == 50
        assert on_disk.get(ORDERS, first_id).status is OrderStatus.SUBMITTED
        assert on_disk.get(ORDERS, second_id).status is OrderStatus.OPEN

    def test_orders_from_both_instances_are_kept(self, tmp_path):
        path = tmp_path / "db.json"
        first = make_container(db=seeded_database(JsonDatabase(path)))
        second = make_container(db=JsonDatabase(path))

        ids = [self._open_order(first, 1), self._open_order(second, 1)]

        assert sorted(o.id for o in JsonDatabase(path).get_all(ORDERS)) == sorted(ids)

    def test_concurrent_submits_never_oversell(self, tmp_path):
        path = tmp_path / "db.json"
        seeded_database(JsonDatabase(path))
        containers = [make_container(db=JsonDatabase(path)) for _ in range(2)]
        order_ids = [self._open_order(c, 150) for c in containers]

        barrier = threading.Barrier(len(containers))
        outcomes: list[str] = []
        lock = threading.Lock()

        def submit(c, order_id):
            barrier.wait()
            try:
                c.service.submit_order.handle(order_id)
                result = "ok"
            except QuantityExceedsStock:
                result = "short"
            with lock:
                outcomes.append(result)

        threads = [
            threading.Thread(target=submit, args=(c, oid))
            for c, oid in zip(containers, order_ids)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sorted(outcomes) == ["ok", "short"]
        on_disk = JsonDatabase(path)
        assert on_disk.get(PRODUCTS, "PRODUCT1").quantity == 50
        assert len(on_disk.get_all(ORDERS)) == 2

    def test_lock_wait_honours_deadline(self, tmp_path):
        path = tmp_path / "db.json"
        db = seeded_database(JsonDatabase(path))

        with FileLock(str(path) + ".lock"):
            with pytest.raises(DeadlineExceeded, match="Timed out"):
                db.get(PRODUCTS, "PRODUCT1", Deadline.after(0.05))

        assert db.get(PRODUCTS, "PRODUCT1").quantity == 200

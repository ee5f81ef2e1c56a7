"""Test doubles and builders.

Everything runs against the real in-memory Database; the doubles here
only add ways to make it fail at a chosen point.
"""

from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from orderdesk.domain.model.coupon import Coupon, CouponKind
from orderdesk.domain.model.customer import Customer
from orderdesk.domain.model.deadline import Deadline
from orderdesk.domain.model.order import Order
from orderdesk.domain.model.product import Product
from orderdesk.domain.model.value_objects import Money
from orderdesk.domain.repository.logistics_partner import LogisticsPartner
from orderdesk.infrastructure.bootstrap import Container, build_container
from orderdesk.infrastructure.config import Settings
from orderdesk.infrastructure.persistence.database import PRODUCTS, Database
from orderdesk.infrastructure.persistence.json_database import JsonDatabase
from orderdesk.infrastructure.seed import seed_database

# Coupons in the seeded database are valid from SEEDED_AT for ten days.
SEEDED_AT = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)
NOW = SEEDED_AT + timedelta(hours=1)


def fixed_clock(at: datetime = NOW):
    return lambda: at


# ── Builders ─────────────────────────────────────────────────────────────────


def make_customer(customer_id: str = "CUSTOMER1") -> Customer:
    return Customer(id=customer_id, name="Hari")


def make_product(
    product_id: str = "PRODUCT1",
    price: str = "500",
    quantity: int = 200,
    name: str = "Sony Xperia 10",
) -> Product:
    return Product(id=product_id, name=name, price=Money.of(price), quantity=quantity)


def make_coupon(
    code: str = "DISCOUNT_20%",
    kind: CouponKind = CouponKind.PERCENTAGE,
    amount: str = "0.2",
    quantity: int = 100,
    begin: datetime = SEEDED_AT,
    end: datetime = SEEDED_AT + timedelta(days=10),
) -> Coupon:
    return Coupon(
        code=code,
        quantity=quantity,
        amount=Decimal(amount),
        kind=kind,
        begin=begin,
        end=end,
    )


def make_order(order_id: str | None = "ORDER1") -> Order:
    order = Order.create(make_customer())
    order.id = order_id
    return order


def seeded_database(db: Database | None = None) -> Database:
    db = db if db is not None else Database()
    seed_database(db, now=SEEDED_AT)
    return db


def make_container(db: Database | None = None, **settings) -> Container:
    """A fully wired container on a seeded in-memory database."""
    settings.setdefault("storage", "memory")
    settings.setdefault("metrics_enabled", False)
    return build_container(
        Settings(**settings),
        db=db if db is not None else seeded_database(),
        clock=fixed_clock(),
    )


# ── Failing doubles ──────────────────────────────────────────────────────────


class FailingJsonDatabase(JsonDatabase):
    """A JsonDatabase whose writes fail once ``fail_writes`` is set."""

    def __init__(self, file_path) -> None:
        super().__init__(file_path)
        self.fail_writes = False

    def _write(self, fd: int, payload: str) -> None:
        if self.fail_writes:
            os.close(fd)
            raise OSError("No space left on device")
        super()._write(fd, payload)


class InterruptingDatabase(Database):
    """Cancels a deadline after a given number of product reads."""

    def __init__(self) -> None:
        super().__init__()
        self._deadline: Deadline | None = None
        self._reads_left = 0

    def interrupt(self, deadline: Deadline, after_product_reads: int) -> None:
        self._deadline = deadline
        self._reads_left = after_product_reads

    def _row(self, table, key):
        if self._deadline is not None and table == PRODUCTS:
            self._reads_left -= 1
            if self._reads_left == 0:
                self._deadline.cancel()
        return super()._row(table, key)


class UnreachableLogisticsPartner(LogisticsPartner):

    def register_shipment(self, order_id, deadline=None):
        raise ConnectionError("logistics partner unreachable")

    def check_shipment_status(self, shipping_id, deadline=None):
        raise ConnectionError("logistics partner unreachable")

    def find_shipping_id(self, order_id, deadline=None):
        raise ConnectionError("logistics partner unreachable")

"""In-memory database shared by every repository and the coordinator.

All tables live behind one re-entrant lock.  Single reads, single writes
and whole coordinator transactions take that same lock, so a stock check
and the decrement that follows it can never interleave with another
request.

Rows are deep-copied on the way in and on the way out: callers only ever
hold snapshots, and a mutated snapshot changes nothing until it is
written back.
"""

from __future__ import annotations

import copy
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog

from orderdesk.domain.exceptions import (
    AdminNotFound,
    CouponNotFound,
    CustomerNotFound,
    DeadlineExceeded,
    EntityNotFoundError,
    OrderNotFound,
    OrderVersionConflict,
    ProductNotFound,
    ShipmentNotFound,
)
from orderdesk.domain.model.coupon import Coupon
from orderdesk.domain.model.deadline import Deadline, check_deadline
from orderdesk.domain.model.order import Order
from orderdesk.domain.model.product import Product
from orderdesk.domain.repository.ledger import Ledger, LedgerTransaction

logger = structlog.get_logger(__name__)

PRODUCTS = "products"
COUPONS = "coupons"
CUSTOMERS = "customers"
ADMINS = "admins"
ORDERS = "orders"
SHIPMENTS = "shipments"

TABLES = (PRODUCTS, COUPONS, CUSTOMERS, ADMINS, ORDERS, SHIPMENTS)

_NOT_FOUND: dict[str, type[EntityNotFoundError]] = {
    PRODUCTS: ProductNotFound,
    COUPONS: CouponNotFound,
    CUSTOMERS: CustomerNotFound,
    ADMINS: AdminNotFound,
    ORDERS: OrderNotFound,
    SHIPMENTS: ShipmentNotFound,
}

Tables = dict[str, dict[str, Any]]


def not_found(table: str, key: str) -> EntityNotFoundError:
    label = table[:-1].capitalize()
    return _NOT_FOUND[table](f"{label} '{key}' not found")


class Database(Ledger):

    def __init__(self) -> None:
        self._tables: Tables = {name: {} for name in TABLES}
        self._lock = threading.RLock()

    # --- Reads ----------------------------------------------------------------

    def get(self, table: str, key: str, deadline: Deadline | None = None) -> Any:
        """Return a copy of a row, or raise the table's not-found error."""
        with self.locked(deadline):
            row = self._row(table, key)
            if row is None:
                raise not_found(table, key)
            return copy.deepcopy(row)

    def get_all(self, table: str, deadline: Deadline | None = None) -> list[Any]:
        with self.locked(deadline):
            return [copy.deepcopy(row) for row in self._tables[table].values()]

    def is_empty(self) -> bool:
        with self.locked():
            return not any(self._tables.values())

    # --- Writes ---------------------------------------------------------------

    def put(self, table: str, key: str, value: Any, deadline: Deadline | None = None) -> None:
        """Write a single row in its own transaction."""
        with self.begin(deadline) as tx:
            tx.put(table, key, value)
            tx.commit()

    @contextmanager
    def begin(self, deadline: Deadline | None = None) -> Iterator[DatabaseTransaction]:
        with self.locked(deadline):
            tx = DatabaseTransaction(self, deadline)
            try:
                yield tx
            except Exception as exc:
                if tx.staged:
                    logger.warning(
                        "transaction_rolled_back",
                        staged=tx.staged,
                        error=type(exc).__name__,
                    )
                raise
            finally:
                tx.close()

    # --- Locking --------------------------------------------------------------

    @contextmanager
    def locked(self, deadline: Deadline | None = None) -> Iterator[None]:
        check_deadline(deadline)
        timeout = deadline.remaining() if deadline is not None else None
        if timeout is None:
            acquired = self._lock.acquire()
        else:
            acquired = self._lock.acquire(timeout=timeout)
        if not acquired:
            raise DeadlineExceeded("Timed out waiting for the database lock")
        try:
            yield
        finally:
            self._lock.release()

    # --- Internals ------------------------------------------------------------

    def _row(self, table: str, key: str) -> Any:
        return self._tables[table].get(key)

    def _apply(self, writes: dict[tuple[str, str], Any]) -> None:
        """Build the next state, persist it, then swap it in.

        If ``_persist`` raises, the current tables are left untouched.
        """
        tables: Tables = {name: dict(rows) for name, rows in self._tables.items()}
        for (table, key), value in writes.items():
            tables[table][key] = copy.deepcopy(value)
        self._persist(tables)
        self._tables = tables

    def _persist(self, tables: Tables) -> None:
        """Hook for durable backends; the in-memory database keeps nothing."""


class DatabaseTransaction(LedgerTransaction):
    """Staged writes against a Database.  Only valid inside ``begin()``."""

    def __init__(self, db: Database, deadline: Deadline | None) -> None:
        self._db = db
        self._deadline = deadline
        self._writes: dict[tuple[str, str], Any] = {}
        self._orders: list[Order] = []
        self._closed = False

    @property
    def staged(self) -> int:
        return len(self._writes)

    # --- Generic access -------------------------------------------------------

    def get(self, table: str, key: str) -> Any:
        self._check()
        if (table, key) in self._writes:
            return copy.deepcopy(self._writes[(table, key)])
        row = self._db._row(table, key)
        if row is None:
            raise not_found(table, key)
        return copy.deepcopy(row)

    def put(self, table: str, key: str, value: Any) -> None:
        self._check()
        self._writes[(table, key)] = copy.deepcopy(value)

    # --- LedgerTransaction interface ------------------------------------------

    def get_product(self, product_id: str) -> Product:
        return self.get(PRODUCTS, product_id)

    def get_coupon(self, code: str) -> Coupon:
        return self.get(COUPONS, code)

    def get_order(self, order_id: str) -> Order:
        return self.get(ORDERS, order_id)

    def put_product(self, product: Product) -> None:
        self.put(PRODUCTS, product.id, product)

    def put_coupon(self, coupon: Coupon) -> None:
        self.put(COUPONS, coupon.code, coupon)

    def put_order(self, order: Order) -> None:
        if order.id is None:
            raise ValueError("Order must have an id before it is written")
        stored = self._db._row(ORDERS, order.id)
        expected = stored.version if stored is not None else 0
        if order.version != expected:
            raise OrderVersionConflict(
                f"Order {order.id} was modified concurrently "
                f"(have version {order.version}, stored version {expected})"
            )
        self.put(ORDERS, order.id, order)
        self._writes[(ORDERS, order.id)].version = expected + 1
        self._orders.append(order)

    def commit(self) -> None:
        self._check()
        self._db._apply(self._writes)
        for order in {id(o): o for o in self._orders}.values():
            order.version += 1
        logger.debug("transaction_committed", writes=len(self._writes))
        self._writes = {}
        self._orders = []

    def close(self) -> None:
        self._closed = True

    def _check(self) -> None:
        if self._closed:
            raise RuntimeError("Transaction is closed")
        check_deadline(self._deadline)

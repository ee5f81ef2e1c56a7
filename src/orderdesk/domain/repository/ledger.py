"""Transactional access to the product and coupon ledgers and the order store.

A LedgerTransaction is the unit the FulfillmentCoordinator works in:

- it holds the ledger's single coordination lock from ``begin`` until the
  block exits, so no other reader or writer interleaves;
- reads see committed state plus this transaction's own staged writes;
- ``put_*`` calls only stage writes; ``commit()`` applies all of them at
  once or none of them;
- leaving the block without committing discards every staged write.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager

from orderdesk.domain.model.coupon import Coupon
from orderdesk.domain.model.deadline import Deadline
from orderdesk.domain.model.order import Order
from orderdesk.domain.model.product import Product


class LedgerTransaction(ABC):

    @abstractmethod
    def get_product(self, product_id: str) -> Product:
        """Return a copy of the live product, or raise ProductNotFound."""

    @abstractmethod
    def get_coupon(self, code: str) -> Coupon:
        """Return a copy of the live coupon, or raise CouponNotFound."""

    @abstractmethod
    def get_order(self, order_id: str) -> Order:
        """Return a copy of the stored order, or raise OrderNotFound."""

    @abstractmethod
    def put_product(self, product: Product) -> None: ...

    @abstractmethod
    def put_coupon(self, coupon: Coupon) -> None: ...

    @abstractmethod
    def put_order(self, order: Order) -> None:
        """Stage *order*.  Raises OrderVersionConflict on a stale copy."""

    @abstractmethod
    def commit(self) -> None:
        """Apply every staged write atomically."""


class Ledger(ABC):

    @abstractmethod
    def begin(
        self, deadline: Deadline | None = None
    ) -> AbstractContextManager[LedgerTransaction]:
        """Open a transaction holding the ledger lock for its whole life."""

"""Domain service: Fulfillment Coordinator.

The only place where the product ledger, the coupon ledger and the order
store change together.  Submitting an order redeems its coupon, reserves
stock for every cart item and persists the order; cancelling does the
inverse.  Each of the two operations runs inside one LedgerTransaction,
so either every write becomes visible or none does.

Checks are made against the *live* ledgers at submit time, never against
the product and coupon snapshots embedded in the order: stock or coupon
quantity may have changed since the cart was built.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

from orderdesk.domain.model.deadline import Deadline, check_deadline
from orderdesk.domain.model.order import Order
from orderdesk.domain.repository.ledger import Ledger, LedgerTransaction


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class FulfillmentCoordinator:

    def __init__(
        self,
        ledger: Ledger,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._ledger = ledger
        self._clock = clock

    def finalize_and_reserve(self, order: Order, deadline: Deadline | None = None) -> None:
        """Redeem the coupon, reserve stock and persist *order*.

        Steps, all inside one transaction:
          1. if a coupon is applied, re-validate the live coupon and take
             one redemption off it;
          2. for every cart item, check then reserve the live stock;
          3. stage the order and commit.
        The first failure aborts the transaction and nothing is written.
        """
        with self._ledger.begin(deadline) as tx:
            if order.coupon is not None:
                coupon = tx.get_coupon(order.coupon.code)
                coupon.validate(self._clock())
                coupon.quantity -= 1
                tx.put_coupon(coupon)

            for item in order.cart:
                check_deadline(deadline)
                product = tx.get_product(item.product.id)
                product.try_reserve_quantity(item.quantity.value)
                product.reserve_quantity(item.quantity.value)
                tx.put_product(product)

            self._persist(tx, order, deadline)

    def cancel_and_release(self, order: Order, deadline: Deadline | None = None) -> None:
        """Give the coupon redemption back, release stock and persist *order*."""
        with self._ledger.begin(deadline) as tx:
            if order.coupon is not None:
                coupon = tx.get_coupon(order.coupon.code)
                coupon.quantity += 1
                tx.put_coupon(coupon)

            for item in order.cart:
                check_deadline(deadline)
                product = tx.get_product(item.product.id)
                product.rollback_quantity(item.quantity.value)
                tx.put_product(product)

            self._persist(tx, order, deadline)

    @staticmethod
    def _persist(tx: LedgerTransaction, order: Order, deadline: Deadline | None) -> None:
        tx.put_order(order)
        check_deadline(deadline)
        tx.commit()

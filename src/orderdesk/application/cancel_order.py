"""Application service: Cancel Order use case.

If the order was SUBMITTED or PAID, its coupon redemption and stock
reservation are given back in the same transaction that persists the
cancellation.  OPEN orders never reserved anything and are simply
marked CANCELLED.
"""

from __future__ import annotations

from orderdesk.domain.model.deadline import Deadline
from orderdesk.domain.model.order import OrderStatus
from orderdesk.domain.repository.customer_repository import AdminRepository
from orderdesk.domain.repository.order_repository import OrderRepository


class CancelOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        admin_repo: AdminRepository,
    ) -> None:
        self._order_repo = order_repo
        self._admin_repo = admin_repo

    def handle(self, order_id: str, admin_id: str, deadline: Deadline | None = None) -> None:
        self._admin_repo.find_by_id(admin_id, deadline)
        order = self._order_repo.find_by_id(order_id, deadline)

        reserved = order.holds_reservation
        order.advance_to(OrderStatus.CANCELLED)

        if reserved:
            self._order_repo.cancel_and_release(order, deadline)
        else:
            self._order_repo.update(order, deadline)

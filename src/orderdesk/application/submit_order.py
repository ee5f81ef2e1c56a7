"""Application service: Submit Order use case.

Finalizes an open order.  The order store hands the actual work to the
FulfillmentCoordinator, which redeems the coupon, reserves stock and
persists the order in one transaction.
"""

from __future__ import annotations

from orderdesk.domain.model.deadline import Deadline
from orderdesk.domain.model.order import OrderStatus
from orderdesk.domain.repository.order_repository import OrderRepository


class SubmitOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: str, deadline: Deadline | None = None) -> None:
        order = self._order_repo.find_by_id(order_id, deadline)

        order.advance_to(OrderStatus.SUBMITTED)

        self._order_repo.finalize_and_reserve(order, deadline)

"""Database-backed implementation of OrderRepository."""

from __future__ import annotations

import uuid

from orderdesk.domain.model.deadline import Deadline
from orderdesk.domain.model.order import Order
from orderdesk.domain.repository.order_repository import OrderRepository
from orderdesk.domain.service.fulfillment_coordinator import FulfillmentCoordinator
from orderdesk.infrastructure.persistence.database import ORDERS, Database


class DatabaseOrderRepository(OrderRepository):

    def __init__(
        self,
        db: Database,
        coordinator: FulfillmentCoordinator | None = None,
    ) -> None:
        self._db = db
        self._coordinator = coordinator or FulfillmentCoordinator(db)

    # --- OrderRepository interface --------------------------------------------

    def find_by_id(self, order_id: str, deadline: Deadline | None = None) -> Order:
        return self._db.get(ORDERS, order_id, deadline)

    def store(self, order: Order, deadline: Deadline | None = None) -> None:
        if order.id is None:
            order.id = str(uuid.uuid4())
        with self._db.begin(deadline) as tx:
            tx.put_order(order)
            tx.commit()

    def update(self, order: Order, deadline: Deadline | None = None) -> None:
        with self._db.begin(deadline) as tx:
            tx.get_order(order.id)  # raises OrderNotFound
            tx.put_order(order)
            tx.commit()

    def finalize_and_reserve(self, order: Order, deadline: Deadline | None = None) -> None:
        self._coordinator.finalize_and_reserve(order, deadline)

    def cancel_and_release(self, order: Order, deadline: Deadline | None = None) -> None:
        self._coordinator.cancel_and_release(order, deadline)

"""Application service: Complete Order use case.

A shipped order is completed once the logistics partner reports the
parcel as delivered.  COMPLETED is terminal.
"""

from __future__ import annotations

from orderdesk.domain.exceptions import ShipmentNotDelivered
from orderdesk.domain.model.deadline import Deadline
from orderdesk.domain.model.order import OrderStatus
from orderdesk.domain.model.shipment import ShipmentStatus
from orderdesk.domain.repository.customer_repository import AdminRepository
from orderdesk.domain.repository.logistics_partner import LogisticsPartner
from orderdesk.domain.repository.order_repository import OrderRepository


class CompleteOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        admin_repo: AdminRepository,
        logistics: LogisticsPartner,
    ) -> None:
        self._order_repo = order_repo
        self._admin_repo = admin_repo
        self._logistics = logistics

    def handle(self, order_id: str, admin_id: str, deadline: Deadline | None = None) -> None:
        self._admin_repo.find_by_id(admin_id, deadline)
        order = self._order_repo.find_by_id(order_id, deadline)

        order.advance_to(OrderStatus.COMPLETED)

        status = self._logistics.check_shipment_status(order.shipping_id, deadline)
        if status is not ShipmentStatus.DELIVERED:
            raise ShipmentNotDelivered(
                f"Order {order_id} cannot be completed, shipment is {status.value}"
            )

        self._order_repo.update(order, deadline)

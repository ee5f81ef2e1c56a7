"""Application service: Ship Order use case.

Hands a paid order to the logistics partner.  The status transition is
checked on the loaded order first, then the shipment is registered, and
only then is the order persisted as SHIPPED together with its shipping
ID.  A failed registration therefore leaves the stored order untouched.

If registration succeeded but persisting the order did not, a retry
finds the order already registered with the partner and attaches the
existing shipment instead of failing.
"""

from __future__ import annotations

from orderdesk.domain.exceptions import LogisticsAlreadyRegistered
from orderdesk.domain.model.deadline import Deadline
from orderdesk.domain.model.order import OrderStatus
from orderdesk.domain.repository.customer_repository import AdminRepository
from orderdesk.domain.repository.logistics_partner import LogisticsPartner
from orderdesk.domain.repository.order_repository import OrderRepository


class ShipOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        admin_repo: AdminRepository,
        logistics: LogisticsPartner,
    ) -> None:
        self._order_repo = order_repo
        self._admin_repo = admin_repo
        self._logistics = logistics

    def handle(self, order_id: str, admin_id: str, deadline: Deadline | None = None) -> str:
        """Ship the order and return the shipping ID."""
        self._admin_repo.find_by_id(admin_id, deadline)
        order = self._order_repo.find_by_id(order_id, deadline)

        order.advance_to(OrderStatus.SHIPPED)

        try:
            shipping_id = self._logistics.register_shipment(order_id, deadline)
        except LogisticsAlreadyRegistered:
            shipping_id = self._logistics.find_shipping_id(order_id, deadline)
        order.specify_shipping_id(shipping_id)

        self._order_repo.update(order, deadline)
        return shipping_id

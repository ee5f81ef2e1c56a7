"""Application service: order and shipment status queries."""

from __future__ import annotations

from orderdesk.domain.model.deadline import Deadline
from orderdesk.domain.model.order import OrderStatus
from orderdesk.domain.model.shipment import ShipmentStatus
from orderdesk.domain.repository.logistics_partner import LogisticsPartner
from orderdesk.domain.repository.order_repository import OrderRepository


class CheckOrderStatusHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: str, deadline: Deadline | None = None) -> OrderStatus:
        return self._order_repo.find_by_id(order_id, deadline).status


class CheckShipmentStatusHandler:

    def __init__(self, logistics: LogisticsPartner) -> None:
        self._logistics = logistics

    def handle(self, shipping_id: str, deadline: Deadline | None = None) -> ShipmentStatus:
        return self._logistics.check_shipment_status(shipping_id, deadline)

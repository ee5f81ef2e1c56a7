"""A stand-in logistics partner that keeps its shipments in the database.

Good enough for local runs and tests: registering hands out a UUID
shipping ID, and ``update_shipment_status`` lets an operator play the
partner's part and move a parcel along.
"""

from __future__ import annotations

import uuid

from orderdesk.domain.exceptions import LogisticsAlreadyRegistered, ShipmentNotFound
from orderdesk.domain.model.deadline import Deadline
from orderdesk.domain.model.shipment import Shipment, ShipmentStatus
from orderdesk.domain.repository.logistics_partner import LogisticsPartner
from orderdesk.infrastructure.persistence.database import SHIPMENTS, Database


class DatabaseLogisticsPartner(LogisticsPartner):

    def __init__(self, db: Database) -> None:
        self._db = db

    def register_shipment(self, order_id: str, deadline: Deadline | None = None) -> str:
        with self._db.locked(deadline):
            existing = self._shipment_of(order_id)
            if existing is not None:
                raise LogisticsAlreadyRegistered(
                    f"Order {order_id} is already registered "
                    f"as shipment {existing.shipping_id}"
                )
            shipping_id = str(uuid.uuid4())
            self._db.put(SHIPMENTS, shipping_id, Shipment(shipping_id, order_id), deadline)
        return shipping_id

    def find_shipping_id(self, order_id: str, deadline: Deadline | None = None) -> str:
        with self._db.locked(deadline):
            shipment = self._shipment_of(order_id)
        if shipment is None:
            raise ShipmentNotFound(f"No shipment registered for order {order_id}")
        return shipment.shipping_id

    def check_shipment_status(
        self, shipping_id: str, deadline: Deadline | None = None
    ) -> ShipmentStatus:
        shipment: Shipment = self._db.get(SHIPMENTS, shipping_id, deadline)
        return shipment.status

    def update_shipment_status(
        self,
        shipping_id: str,
        status: ShipmentStatus,
        deadline: Deadline | None = None,
    ) -> None:
        with self._db.locked(deadline):
            shipment: Shipment = self._db.get(SHIPMENTS, shipping_id)
            shipment.status = status
            self._db.put(SHIPMENTS, shipping_id, shipment, deadline)

    def _shipment_of(self, order_id: str) -> Shipment | None:
        for shipment in self._db.get_all(SHIPMENTS):
            if shipment.order_id == order_id:
                return shipment
        return None

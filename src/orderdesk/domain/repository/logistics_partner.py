"""Contract of the external logistics partner.

Only the request/response shape matters to the domain; how the partner
moves parcels is none of our business.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderdesk.domain.model.deadline import Deadline
from orderdesk.domain.model.shipment import ShipmentStatus


class LogisticsPartner(ABC):

    @abstractmethod
    def register_shipment(self, order_id: str, deadline: Deadline | None = None) -> str:
        """Register a shipment for the order and return its shipping ID.

        Raises LogisticsAlreadyRegistered if the order was registered before.
        """

    @abstractmethod
    def find_shipping_id(self, order_id: str, deadline: Deadline | None = None) -> str:
        """Return the shipping ID the order was registered under, or raise ShipmentNotFound."""

    @abstractmethod
    def check_shipment_status(
        self, shipping_id: str, deadline: Deadline | None = None
    ) -> ShipmentStatus:
        """Return the shipment status, or raise ShipmentNotFound."""

"""Shipment bookkeeping owned by the logistics partner."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ShipmentStatus(Enum):
    SHIPPED = "SHIPPED"
    ON_DELIVERY = "ON_DELIVERY"
    DELIVERED = "DELIVERED"


@dataclass
class Shipment:
    shipping_id: str
    order_id: str
    status: ShipmentStatus = ShipmentStatus.SHIPPED

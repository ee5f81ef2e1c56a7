"""The application service: every use case handler in one place.

This is what the presentation layer talks to.  ``wrap`` applies a
middleware to every handler and returns a new service, which is how the
composition root layers logging and metrics on top.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Callable

from orderdesk.application.add_product import AddProductHandler
from orderdesk.application.apply_coupon import ApplyCouponHandler
from orderdesk.application.cancel_order import CancelOrderHandler
from orderdesk.application.check_status import (
    CheckOrderStatusHandler,
    CheckShipmentStatusHandler,
)
from orderdesk.application.complete_order import CompleteOrderHandler
from orderdesk.application.list_products import ListProductsHandler
from orderdesk.application.make_order import MakeOrderHandler
from orderdesk.application.make_payment import MakePaymentHandler
from orderdesk.application.ship_order import ShipOrderHandler
from orderdesk.application.show_order import ShowOrderHandler
from orderdesk.application.submit_order import SubmitOrderHandler


@dataclass(frozen=True)
class OrderingService:
    # Ordering (customer facing)
    make_order: MakeOrderHandler
    add_product: AddProductHandler
    apply_coupon: ApplyCouponHandler
    submit_order: SubmitOrderHandler
    make_payment: MakePaymentHandler
    check_order_status: CheckOrderStatusHandler
    check_shipment_status: CheckShipmentStatusHandler
    list_products: ListProductsHandler

    # Handling (admin facing)
    show_order: ShowOrderHandler
    cancel_order: CancelOrderHandler
    ship_order: ShipOrderHandler
    complete_order: CompleteOrderHandler

    def wrap(self, middleware: Callable[[Any, str], Any]) -> OrderingService:
        """Return a copy with ``middleware(handler, method_name)`` applied
        to every handler."""
        return replace(
            self,
            **{f.name: middleware(getattr(self, f.name), f.name) for f in fields(self)},
        )

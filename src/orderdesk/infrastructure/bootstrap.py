"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

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
from orderdesk.application.middleware import InstrumentingMiddleware, LoggingMiddleware
from orderdesk.application.service import OrderingService
from orderdesk.application.ship_order import ShipOrderHandler
from orderdesk.application.show_order import ShowOrderHandler
from orderdesk.application.submit_order import SubmitOrderHandler
from orderdesk.domain.model.deadline import Deadline
from orderdesk.domain.service.fulfillment_coordinator import FulfillmentCoordinator
from orderdesk.infrastructure.config import Settings, load_settings
from orderdesk.infrastructure.metrics import REQUEST_COUNT, REQUEST_LATENCY
from orderdesk.infrastructure.persistence.database import Database
from orderdesk.infrastructure.persistence.database_coupon_repository import (
    DatabaseCouponRepository,
)
from orderdesk.infrastructure.persistence.database_customer_repository import (
    DatabaseAdminRepository,
    DatabaseCustomerRepository,
)
from orderdesk.infrastructure.persistence.database_logistics_partner import (
    DatabaseLogisticsPartner,
)
from orderdesk.infrastructure.persistence.database_order_repository import (
    DatabaseOrderRepository,
)
from orderdesk.infrastructure.persistence.database_product_repository import (
    DatabaseProductRepository,
)
from orderdesk.infrastructure.persistence.json_database import JsonDatabase
from orderdesk.infrastructure.seed import seed_database


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Container:
    settings: Settings
    db: Database
    orders: DatabaseOrderRepository
    products: DatabaseProductRepository
    coupons: DatabaseCouponRepository
    customers: DatabaseCustomerRepository
    admins: DatabaseAdminRepository
    logistics: DatabaseLogisticsPartner
    service: OrderingService

    def deadline(self) -> Deadline:
        """A fresh deadline using the configured operation timeout."""
        return Deadline(timeout=self.settings.operation_timeout)


def build_database(settings: Settings) -> Database:
    if settings.storage == "memory":
        db = Database()
    else:
        db = JsonDatabase(settings.data_file)
    if db.is_empty():
        seed_database(db, currency=settings.currency)
    return db


def build_service(
    orders: DatabaseOrderRepository,
    products: DatabaseProductRepository,
    coupons: DatabaseCouponRepository,
    customers: DatabaseCustomerRepository,
    admins: DatabaseAdminRepository,
    logistics: DatabaseLogisticsPartner,
    currency: str | None = None,
    clock: Callable[[], datetime] = _utcnow,
) -> OrderingService:
    return OrderingService(
        make_order=MakeOrderHandler(orders, customers, currency=currency),
        add_product=AddProductHandler(orders, products),
        apply_coupon=ApplyCouponHandler(orders, coupons, clock=clock),
        submit_order=SubmitOrderHandler(orders),
        make_payment=MakePaymentHandler(orders),
        check_order_status=CheckOrderStatusHandler(orders),
        check_shipment_status=CheckShipmentStatusHandler(logistics),
        list_products=ListProductsHandler(products),
        show_order=ShowOrderHandler(orders),
        cancel_order=CancelOrderHandler(orders, admins),
        ship_order=ShipOrderHandler(orders, admins, logistics),
        complete_order=CompleteOrderHandler(orders, admins, logistics),
    )


def build_container(
    settings: Settings | None = None,
    db: Database | None = None,
    clock: Callable[[], datetime] = _utcnow,
) -> Container:
    settings = settings or load_settings()
    db = db or build_database(settings)

    coordinator = FulfillmentCoordinator(db, clock=clock)
    orders = DatabaseOrderRepository(db, coordinator)
    products = DatabaseProductRepository(db)
    coupons = DatabaseCouponRepository(db)
    customers = DatabaseCustomerRepository(db)
    admins = DatabaseAdminRepository(db)
    logistics = DatabaseLogisticsPartner(db)

    service = build_service(
        orders, products, coupons, customers, admins, logistics,
        currency=settings.currency,
        clock=clock,
    )
    if settings.metrics_enabled:
        service = service.wrap(
            lambda handler, method: InstrumentingMiddleware(
                handler, method, REQUEST_COUNT, REQUEST_LATENCY
            )
        )
    service = service.wrap(LoggingMiddleware)

    return Container(
        settings=settings,
        db=db,
        orders=orders,
        products=products,
        coupons=coupons,
        customers=customers,
        admins=admins,
        logistics=logistics,
        service=service,
    )

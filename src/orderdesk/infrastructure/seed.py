"""Default catalog, customers and admins for a fresh database."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from orderdesk.domain.model.coupon import Coupon, CouponKind
from orderdesk.domain.model.customer import Admin, Customer
from orderdesk.domain.model.product import Product
from orderdesk.domain.model.value_objects import DEFAULT_CURRENCY, Money
from orderdesk.infrastructure.persistence.database import (
    ADMINS,
    COUPONS,
    CUSTOMERS,
    PRODUCTS,
    Database,
)

COUPON_VALIDITY = timedelta(days=10)


def seed_database(
    db: Database,
    now: datetime | None = None,
    currency: str = DEFAULT_CURRENCY,
) -> None:
    """Insert the default rows in one transaction."""
    now = now or datetime.now(timezone.utc)

    products = [
        Product(id="PRODUCT1", name="Sony Xperia 10", price=Money.of(500, currency), quantity=200),
        Product(id="PRODUCT2", name="Ultramilk 1L", price=Money.of(5, currency), quantity=2000),
    ]
    coupons = [
        Coupon(
            code="DISCOUNT_$5",
            quantity=100,
            amount=Decimal("5"),
            kind=CouponKind.NOMINAL,
            begin=now,
            end=now + COUPON_VALIDITY,
        ),
        Coupon(
            code="DISCOUNT_20%",
            quantity=100,
            amount=Decimal("0.2"),
            kind=CouponKind.PERCENTAGE,
            begin=now,
            end=now + COUPON_VALIDITY,
        ),
    ]
    customers = [
        Customer(
            id="CUSTOMER1",
            name="Hari",
            phone_number="+62-12345",
            email="example@email.com",
            address="No, Street, City, Indonesia",
        ),
    ]
    admins = [Admin(id="ADMIN1", name="Mukti")]

    with db.begin() as tx:
        for p in products:
            tx.put(PRODUCTS, p.id, p)
        for c in coupons:
            tx.put(COUPONS, c.code, c)
        for customer in customers:
            tx.put(CUSTOMERS, customer.id, customer)
        for admin in admins:
            tx.put(ADMINS, admin.id, admin)
        tx.commit()

"""Coupon aggregate: a price reduction scheme with a redemption counter."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from orderdesk.domain.exceptions import InvalidCoupon
from orderdesk.domain.model.value_objects import Money


class CouponKind(Enum):
    PERCENTAGE = "PERCENTAGE"
    NOMINAL = "NOMINAL"


@dataclass
class Coupon:
    """A discount coupon.

    ``amount`` is a fraction (``0.2`` for 20%) for PERCENTAGE coupons and a
    money amount for NOMINAL ones.  The coupon is usable while
    ``begin <= now < end`` and ``quantity > 0``.

    Redemption bookkeeping (decrement on submit, increment on cancel) is
    done by the FulfillmentCoordinator together with the stock reservation.
    """

    code: str
    quantity: int
    amount: Decimal
    kind: CouponKind
    begin: datetime
    end: datetime

    def validate(self, now: datetime | None = None) -> None:
        """Raise InvalidCoupon unless the coupon can be redeemed at *now*."""
        if self.quantity <= 0:
            raise InvalidCoupon(f"Coupon '{self.code}' is exhausted")
        now = now or datetime.now(timezone.utc)
        if now < self.begin:
            raise InvalidCoupon(f"Coupon '{self.code}' is not active yet")
        if now >= self.end:
            raise InvalidCoupon(f"Coupon '{self.code}' has expired")

    def price_after_reduction(self, price: Money) -> Money:
        if self.kind is CouponKind.NOMINAL:
            return price.minus_floored(Money(self.amount, price.currency))
        if self.kind is CouponKind.PERCENTAGE:
            return price.minus_floored(price * self.amount)
        return price

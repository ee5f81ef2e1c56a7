"""Order aggregate, the core of the domain.

The Order is an aggregate root that owns its cart items and the coupon
and payment snapshots applied to it.  It never touches the product or
coupon ledgers; reserving stock and redeeming coupons is the job of the
FulfillmentCoordinator.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from orderdesk.domain.exceptions import (
    AlreadyCancelled,
    AlreadyCompleted,
    AlreadyFinalized,
    AlreadyShipped,
    InvalidStatusTransition,
)
from orderdesk.domain.model.coupon import Coupon
from orderdesk.domain.model.customer import Customer
from orderdesk.domain.model.payment import PaymentSpecification
from orderdesk.domain.model.product import Product
from orderdesk.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    OPEN = "OPEN"
    SUBMITTED = "SUBMITTED"
    PAID = "PAID"
    SHIPPED = "SHIPPED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


# Status an order must be in before ``advance_to`` may move it on.
_PREDECESSORS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.SUBMITTED: frozenset({OrderStatus.OPEN}),
    OrderStatus.PAID: frozenset({OrderStatus.SUBMITTED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.PAID}),
    OrderStatus.COMPLETED: frozenset({OrderStatus.SHIPPED}),
    OrderStatus.CANCELLED: frozenset(
        {OrderStatus.OPEN, OrderStatus.SUBMITTED, OrderStatus.PAID}
    ),
}

# Statuses in which the ledgers hold stock and a coupon for the order.
RESERVING_STATUSES = frozenset({OrderStatus.SUBMITTED, OrderStatus.PAID})


@dataclass
class CartItem:
    """A product snapshot and the quantity the customer wants."""

    product: Product
    quantity: Quantity

    @property
    def line_total(self) -> Money:
        return self.product.price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for purchase orders.

    Use ``Order.create()`` for new orders.  ``id`` and ``version`` are
    managed by the order store: the id is assigned once on creation and
    the version is bumped on every successful write.
    """

    id: str | None
    customer: Customer
    cart: list[CartItem] = field(default_factory=list)
    coupon: Coupon | None = None
    status: OrderStatus = OrderStatus.OPEN
    price: Money = field(default_factory=Money.zero)
    price_after_reduction: Money | None = None
    payment: PaymentSpecification | None = None
    shipping_id: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = 0

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def create(customer: Customer, currency: str | None = None) -> Order:
        """Start a new, empty, open order for *customer*."""
        price = Money.zero(currency) if currency else Money.zero()
        return Order(id=None, customer=customer, price=price)

    # --- Cart and coupon ------------------------------------------------------

    def add_product(self, product: Product, quantity: int) -> None:
        """Put *quantity* units of *product* in the cart.

        Adding a product that is already in the cart replaces its quantity.
        """
        self._ensure_open()
        qty = Quantity(quantity)

        for item in self.cart:
            if item.product.id == product.id:
                item.quantity = qty
                break
        else:
            self.cart.append(CartItem(product=copy.deepcopy(product), quantity=qty))

        self.calculate_total_price()

    def apply_coupon(self, coupon: Coupon, now: datetime | None = None) -> None:
        """Apply *coupon*, replacing any coupon applied earlier."""
        self._ensure_open()
        coupon.validate(now)
        self.coupon = copy.deepcopy(coupon)
        self.calculate_total_price()

    def calculate_total_price(self) -> None:
        total = Money.zero(self.price.currency)
        for item in self.cart:
            total = total + item.line_total
        self.price = total

        if self.coupon is not None:
            self.price_after_reduction = self.coupon.price_after_reduction(total)
        else:
            self.price_after_reduction = None

    # --- State transitions ----------------------------------------------------

    def change_status_to(self, status: OrderStatus) -> None:
        """Move the order to *status*.

        Only guards against illegal repeats and finalized orders; any other
        transition is accepted.  Use ``advance_to`` to also enforce the
        order of the lifecycle.
        """
        if self.status is OrderStatus.COMPLETED:
            raise AlreadyCompleted(f"Order {self.id} is already completed")
        if status is OrderStatus.SUBMITTED and self.status is not OrderStatus.OPEN:
            raise AlreadyFinalized(f"Order {self.id} is already finalized")
        if self.status is status is OrderStatus.CANCELLED:
            raise AlreadyCancelled(f"Order {self.id} is already cancelled")
        if self.status is status is OrderStatus.SHIPPED:
            raise AlreadyShipped(f"Order {self.id} is already shipped")
        self.status = status

    def can_advance_to(self, status: OrderStatus) -> bool:
        return self.status in _PREDECESSORS.get(status, frozenset())

    def advance_to(self, status: OrderStatus) -> None:
        """Move the order one step along its lifecycle.

        OPEN -> SUBMITTED -> PAID -> SHIPPED -> COMPLETED, or CANCELLED from
        OPEN, SUBMITTED or PAID.  Repeating the current status is accepted
        the same way ``change_status_to`` accepts it.
        """
        if self.status is not status and self.status is not OrderStatus.COMPLETED:
            if status is not OrderStatus.SUBMITTED and not self.can_advance_to(status):
                raise InvalidStatusTransition(
                    f"Cannot move order {self.id} from {self.status.value} "
                    f"to {status.value}"
                )
        self.change_status_to(status)

    # --- Payment and shipping -------------------------------------------------

    def allow_make_payment(self) -> bool:
        return self.status is OrderStatus.SUBMITTED

    def specify_new_payment(self, payment: PaymentSpecification) -> None:
        self.payment = payment

    def specify_shipping_id(self, shipping_id: str) -> None:
        self.shipping_id = shipping_id

    # --- Computed properties --------------------------------------------------

    @property
    def holds_reservation(self) -> bool:
        """True while the ledgers hold stock and a coupon for this order."""
        return self.status in RESERVING_STATUSES

    @property
    def amount_due(self) -> Money:
        if self.price_after_reduction is not None:
            return self.price_after_reduction
        return self.price

    # --- Internal helpers -----------------------------------------------------

    def _ensure_open(self) -> None:
        if self.status is not OrderStatus.OPEN:
            raise AlreadyFinalized(
                f"Order {self.id} is already finalized (status {self.status.value})"
            )

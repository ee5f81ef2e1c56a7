"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from orderdesk.domain.model.order import Order


@dataclass(frozen=True)
class PaymentRequest:
    """Input: payment details as typed in by the customer."""

    kind: str
    holder_name: str
    identifier: str
    proof: str


@dataclass(frozen=True)
class CartItemDTO:
    """Output: a single cart line as displayed to the user."""

    product_id: str
    product_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "$15.00"
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: str
    customer_id: str
    customer_name: str
    status: str
    items: list[CartItemDTO]
    coupon_code: str | None
    price: str
    price_after_reduction: str | None
    shipping_id: str | None
    created_at: str


def to_order_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        customer_id=order.customer.id,
        customer_name=order.customer.name,
        status=order.status.value,
        items=[
            CartItemDTO(
                product_id=item.product.id,
                product_name=item.product.name,
                quantity=item.quantity.value,
                unit_price=str(item.product.price),
                line_total=str(item.line_total),
            )
            for item in order.cart
        ],
        coupon_code=order.coupon.code if order.coupon else None,
        price=str(order.price),
        price_after_reduction=(
            str(order.price_after_reduction)
            if order.price_after_reduction is not None
            else None
        ),
        shipping_id=order.shipping_id,
        created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
    )

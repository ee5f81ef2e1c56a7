"""Translation between domain objects and JSON-compatible records."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from decimal import Decimal
from typing import Any

from orderdesk.domain.model.coupon import Coupon, CouponKind
from orderdesk.domain.model.customer import Admin, Customer
from orderdesk.domain.model.order import CartItem, Order, OrderStatus
from orderdesk.domain.model.payment import PaymentKind, PaymentSpecification
from orderdesk.domain.model.product import Product
from orderdesk.domain.model.shipment import Shipment, ShipmentStatus
from orderdesk.domain.model.value_objects import Money, Quantity
from orderdesk.infrastructure.persistence.database import (
    ADMINS,
    COUPONS,
    CUSTOMERS,
    ORDERS,
    PRODUCTS,
    SHIPMENTS,
)


def _money_to_raw(money: Money) -> dict:
    return {"amount": str(money.amount), "currency": money.currency}


def _money_to_domain(raw: dict) -> Money:
    return Money(Decimal(raw["amount"]), raw["currency"])


# --- Product ------------------------------------------------------------------


def product_to_raw(product: Product) -> dict:
    return {
        "id": product.id,
        "name": product.name,
        "price": _money_to_raw(product.price),
        "quantity": product.quantity,
    }


def product_to_domain(raw: dict) -> Product:
    return Product(
        id=raw["id"],
        name=raw["name"],
        price=_money_to_domain(raw["price"]),
        quantity=raw["quantity"],
    )


# --- Coupon -------------------------------------------------------------------


def coupon_to_raw(coupon: Coupon) -> dict:
    return {
        "code": coupon.code,
        "quantity": coupon.quantity,
        "amount": str(coupon.amount),
        "kind": coupon.kind.value,
        "begin": coupon.begin.isoformat(),
        "end": coupon.end.isoformat(),
    }


def coupon_to_domain(raw: dict) -> Coupon:
    return Coupon(
        code=raw["code"],
        quantity=raw["quantity"],
        amount=Decimal(raw["amount"]),
        kind=CouponKind(raw["kind"]),
        begin=datetime.fromisoformat(raw["begin"]),
        end=datetime.fromisoformat(raw["end"]),
    )


# --- Customer / Admin ---------------------------------------------------------


def customer_to_raw(customer: Customer) -> dict:
    return {
        "id": customer.id,
        "name": customer.name,
        "phone_number": customer.phone_number,
        "email": customer.email,
        "address": customer.address,
    }


def customer_to_domain(raw: dict) -> Customer:
    return Customer(
        id=raw["id"],
        name=raw["name"],
        phone_number=raw.get("phone_number", ""),
        email=raw.get("email", ""),
        address=raw.get("address", ""),
    )


def admin_to_raw(admin: Admin) -> dict:
    return {"id": admin.id, "name": admin.name}


def admin_to_domain(raw: dict) -> Admin:
    return Admin(id=raw["id"], name=raw["name"])


# --- Shipment -----------------------------------------------------------------


def shipment_to_raw(shipment: Shipment) -> dict:
    return {
        "shipping_id": shipment.shipping_id,
        "order_id": shipment.order_id,
        "status": shipment.status.value,
    }


def shipment_to_domain(raw: dict) -> Shipment:
    return Shipment(
        shipping_id=raw["shipping_id"],
        order_id=raw["order_id"],
        status=ShipmentStatus(raw["status"]),
    )


# --- Order --------------------------------------------------------------------


def order_to_raw(order: Order) -> dict:
    return {
        "id": order.id,
        "version": order.version,
        "customer": customer_to_raw(order.customer),
        "status": order.status.value,
        "created_at": order.created_at.isoformat(),
        "cart": [
            {
                "product": product_to_raw(item.product),
                "quantity": item.quantity.value,
            }
            for item in order.cart
        ],
        "coupon": coupon_to_raw(order.coupon) if order.coupon else None,
        "price": _money_to_raw(order.price),
        "price_after_reduction": (
            _money_to_raw(order.price_after_reduction)
            if order.price_after_reduction is not None
            else None
        ),
        "payment": (
            {
                "kind": order.payment.kind.value,
                "holder_name": order.payment.holder_name,
                "identifier": order.payment.identifier,
                "proof": order.payment.proof,
            }
            if order.payment
            else None
        ),
        "shipping_id": order.shipping_id,
    }


def order_to_domain(raw: dict) -> Order:
    payment = raw.get("payment")
    reduced = raw.get("price_after_reduction")
    return Order(
        id=raw["id"],
        version=raw.get("version", 0),
        customer=customer_to_domain(raw["customer"]),
        status=OrderStatus(raw["status"]),
        created_at=datetime.fromisoformat(raw["created_at"]),
        cart=[
            CartItem(
                product=product_to_domain(item["product"]),
                quantity=Quantity(item["quantity"]),
            )
            for item in raw["cart"]
        ],
        coupon=coupon_to_domain(raw["coupon"]) if raw.get("coupon") else None,
        price=_money_to_domain(raw["price"]),
        price_after_reduction=_money_to_domain(reduced) if reduced else None,
        payment=(
            PaymentSpecification(
                kind=PaymentKind(payment["kind"]),
                holder_name=payment["holder_name"],
                identifier=payment["identifier"],
                proof=payment["proof"],
            )
            if payment
            else None
        ),
        shipping_id=raw.get("shipping_id"),
    )


# --- Table registry -----------------------------------------------------------

Codec = tuple[Callable[[Any], dict], Callable[[dict], Any], Callable[[Any], str]]

CODECS: dict[str, Codec] = {
    PRODUCTS: (product_to_raw, product_to_domain, lambda p: p.id),
    COUPONS: (coupon_to_raw, coupon_to_domain, lambda c: c.code),
    CUSTOMERS: (customer_to_raw, customer_to_domain, lambda c: c.id),
    ADMINS: (admin_to_raw, admin_to_domain, lambda a: a.id),
    ORDERS: (order_to_raw, order_to_domain, lambda o: o.id),
    SHIPMENTS: (shipment_to_raw, shipment_to_domain, lambda s: s.shipping_id),
}

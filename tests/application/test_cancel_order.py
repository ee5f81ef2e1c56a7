"""Tests for the CancelOrder use case."""

import base64

import pytest

from orderdesk.application.dto import PaymentRequest
from orderdesk.domain.exceptions import (
    AdminNotFound,
    AlreadyCancelled,
    InvalidStatusTransition,
)
from orderdesk.domain.model.order import OrderStatus
from orderdesk.infrastructure.persistence.database import COUPONS, PRODUCTS
from tests.fakes import make_container


def _setup():
    c = make_container()
    order_id = c.service.make_order.handle("CUSTOMER1").id
    c.service.add_product.handle(order_id, "PRODUCT1", 5)
    c.service.add_product.handle(order_id, "PRODUCT2", 10)
    c.service.apply_coupon.handle(order_id, "DISCOUNT_$5")
    return c, order_id


def _ledgers(c):
    return (
        c.db.get(PRODUCTS, "PRODUCT1").quantity,
        c.db.get(PRODUCTS, "PRODUCT2").quantity,
        c.db.get(COUPONS, "DISCOUNT_$5").quantity,
    )


def _pay(c, order_id):
    proof = base64.b64encode(b"receipt").decode()
    c.service.make_payment.handle(order_id, PaymentRequest("BANK_TRANSFER", "Hari", "TRX", proof))


class TestCancelOrder:

    def test_cancel_submitted_order_restores_ledgers(self):
        c, order_id = _setup()
        c.service.submit_order.handle(order_id)
        assert _ledgers(c) == (195, 1990, 99)

        c.service.cancel_order.handle(order_id, "ADMIN1")

        assert _ledgers(c) == (200, 2000, 100)
        assert c.service.check_order_status.handle(order_id) is OrderStatus.CANCELLED

    def test_cancel_paid_order_restores_ledgers(self):
        c, order_id = _setup()
        c.service.submit_order.handle(order_id)
        _pay(c, order_id)

        c.service.cancel_order.handle(order_id, "ADMIN1")

        assert _ledgers(c) == (200, 2000, 100)

    def test_cancel_open_order_leaves_ledgers_alone(self):
        c, order_id = _setup()

        c.service.cancel_order.handle(order_id, "ADMIN1")

        assert _ledgers(c) == (200, 2000, 100)
        assert c.service.check_order_status.handle(order_id) is OrderStatus.CANCELLED

    def test_cancelling_twice_rejected(self):
        c, order_id = _setup()
        c.service.submit_order.handle(order_id)
        c.service.cancel_order.handle(order_id, "ADMIN1")

        with pytest.raises(AlreadyCancelled):
            c.service.cancel_order.handle(order_id, "ADMIN1")

        assert _ledgers(c) == (200, 2000, 100)

    def test_shipped_order_cannot_be_cancelled(self):
        c, order_id = _setup()
        c.service.submit_order.handle(order_id)
        _pay(c, order_id)
        c.service.ship_order.handle(order_id, "ADMIN1")

        with pytest.raises(InvalidStatusTransition):
            c.service.cancel_order.handle(order_id, "ADMIN1")

        assert _ledgers(c) == (195, 1990, 99)

    def test_unknown_admin(self):
        c, order_id = _setup()
        c.service.submit_order.handle(order_id)

        with pytest.raises(AdminNotFound):
            c.service.cancel_order.handle(order_id, "CUSTOMER1")

        assert c.service.check_order_status.handle(order_id) is OrderStatus.SUBMITTED

"""Tests for the MakePayment use case."""

import base64

import pytest

from orderdesk.application.dto import PaymentRequest
from orderdesk.domain.exceptions import (
    InvalidStatusTransition,
    OrderNotFound,
    PaymentProofNotDecodable,
    PaymentTypeNotAllowed,
)
from orderdesk.domain.model.order import OrderStatus
from orderdesk.domain.model.payment import PaymentKind
from tests.fakes import make_container

PROOF = base64.b64encode(b"transfer receipt").decode()


def _request(kind="BANK_TRANSFER", proof=PROOF):
    return PaymentRequest(kind=kind, holder_name="Hari", identifier="TRX-001", proof=proof)


def _submitted_order(c):
    order_id = c.service.make_order.handle("CUSTOMER1").id
    c.service.add_product.handle(order_id, "PRODUCT2", 2)
    c.service.submit_order.handle(order_id)
    return order_id


class TestMakePaymentHappyPath:

    def test_marks_order_paid_and_records_payment(self):
        c = make_container()
        order_id = _submitted_order(c)

        c.service.make_payment.handle(order_id, _request())

        order = c.orders.find_by_id(order_id)
        assert order.status is OrderStatus.PAID
        assert order.payment.kind is PaymentKind.BANK_TRANSFER
        assert order.payment.identifier == "TRX-001"

    def test_unpadded_proof_accepted(self):
        c = make_container()
        order_id = _submitted_order(c)

        c.service.make_payment.handle(order_id, _request(proof=PROOF.rstrip("=")))

        assert c.service.check_order_status.handle(order_id) is OrderStatus.PAID


class TestMakePaymentFailures:

    def test_open_order_cannot_be_paid(self):
        c = make_container()
        order_id = c.service.make_order.handle("CUSTOMER1").id

        with pytest.raises(InvalidStatusTransition):
            c.service.make_payment.handle(order_id, _request())

        assert c.service.check_order_status.handle(order_id) is OrderStatus.OPEN

    def test_unsupported_payment_type(self):
        c = make_container()
        order_id = _submitted_order(c)

        with pytest.raises(PaymentTypeNotAllowed):
            c.service.make_payment.handle(order_id, _request(kind="CASH"))

        assert c.service.check_order_status.handle(order_id) is OrderStatus.SUBMITTED

    def test_undecodable_proof(self):
        c = make_container()
        order_id = _submitted_order(c)

        with pytest.raises(PaymentProofNotDecodable):
            c.service.make_payment.handle(order_id, _request(proof="%%%"))

        assert c.orders.find_by_id(order_id).payment is None

    def test_payment_checked_before_order_lookup(self):
        c = make_container()
        with pytest.raises(PaymentProofNotDecodable):
            c.service.make_payment.handle("missing", _request(proof="%%%"))

    def test_unknown_order(self):
        c = make_container()
        with pytest.raises(OrderNotFound):
            c.service.make_payment.handle("missing", _request())

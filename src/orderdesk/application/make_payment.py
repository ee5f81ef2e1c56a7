"""Application service: Make Payment use case."""

from __future__ import annotations

from orderdesk.application.dto import PaymentRequest
from orderdesk.domain.model.deadline import Deadline
from orderdesk.domain.model.order import OrderStatus
from orderdesk.domain.model.payment import PaymentKind, PaymentSpecification
from orderdesk.domain.repository.order_repository import OrderRepository


class MakePaymentHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(
        self,
        order_id: str,
        request: PaymentRequest,
        deadline: Deadline | None = None,
    ) -> None:
        """Record the payment of a submitted order.

        The payment specification is validated before the order is even
        loaded: malformed input never reaches the aggregate.
        """
        payment = PaymentSpecification(
            kind=PaymentKind.parse(request.kind),
            holder_name=request.holder_name,
            identifier=request.identifier,
            proof=request.proof,
        )
        payment.validate()

        order = self._order_repo.find_by_id(order_id, deadline)
        order.advance_to(OrderStatus.PAID)
        order.specify_new_payment(payment)

        self._order_repo.update(order, deadline)

"""Application service: Make Order use case."""

from __future__ import annotations

from orderdesk.application.dto import OrderDTO, to_order_dto
from orderdesk.domain.model.deadline import Deadline
from orderdesk.domain.model.order import Order
from orderdesk.domain.repository.customer_repository import CustomerRepository
from orderdesk.domain.repository.order_repository import OrderRepository


class MakeOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        customer_repo: CustomerRepository,
        currency: str | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._customer_repo = customer_repo
        self._currency = currency

    def handle(self, customer_id: str, deadline: Deadline | None = None) -> OrderDTO:
        """Open a new, empty order for an existing customer."""
        customer = self._customer_repo.find_by_id(customer_id, deadline)
        order = Order.create(customer, currency=self._currency)
        self._order_repo.store(order, deadline)
        return to_order_dto(order)

"""Application service: Show Order use case (query)."""

from __future__ import annotations

from orderdesk.application.dto import OrderDTO, to_order_dto
from orderdesk.domain.model.deadline import Deadline
from orderdesk.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: str, deadline: Deadline | None = None) -> OrderDTO:
        return to_order_dto(self._order_repo.find_by_id(order_id, deadline))

"""Application service: Add Product (to cart) use case."""

from __future__ import annotations

from orderdesk.application.dto import OrderDTO, to_order_dto
from orderdesk.domain.model.deadline import Deadline
from orderdesk.domain.repository.order_repository import OrderRepository
from orderdesk.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo

    def handle(
        self,
        order_id: str,
        product_id: str,
        quantity: int,
        deadline: Deadline | None = None,
    ) -> OrderDTO:
        """Put a product in the cart, replacing its quantity if already there.

        The stock check here only gives early feedback; stock is actually
        reserved when the order is submitted.
        """
        order = self._order_repo.find_by_id(order_id, deadline)
        product = self._product_repo.find_by_id(product_id, deadline)

        order.add_product(product, quantity)
        product.try_reserve_quantity(quantity)

        self._order_repo.update(order, deadline)
        return to_order_dto(order)

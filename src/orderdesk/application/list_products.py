"""Application service: List Products use case (query)."""

from __future__ import annotations

from dataclasses import dataclass

from orderdesk.domain.model.deadline import Deadline
from orderdesk.domain.repository.product_repository import ProductRepository


@dataclass(frozen=True)
class ProductLineDTO:
    id: str
    name: str
    price: str
    available: int


class ListProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, deadline: Deadline | None = None) -> list[ProductLineDTO]:
        return [
            ProductLineDTO(
                id=p.id,
                name=p.name,
                price=str(p.price),
                available=p.quantity,
            )
            for p in self._product_repo.find_all(deadline)
        ]

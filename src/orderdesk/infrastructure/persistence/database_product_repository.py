"""Database-backed implementation of ProductRepository."""

from __future__ import annotations

from orderdesk.domain.model.deadline import Deadline
from orderdesk.domain.model.product import Product
from orderdesk.domain.repository.product_repository import ProductRepository
from orderdesk.infrastructure.persistence.database import PRODUCTS, Database


class DatabaseProductRepository(ProductRepository):

    def __init__(self, db: Database) -> None:
        self._db = db

    def find_by_id(self, product_id: str, deadline: Deadline | None = None) -> Product:
        return self._db.get(PRODUCTS, product_id, deadline)

    def find_all(self, deadline: Deadline | None = None) -> list[Product]:
        return sorted(self._db.get_all(PRODUCTS, deadline), key=lambda p: p.id)

    def update(self, product: Product, deadline: Deadline | None = None) -> None:
        self._db.put(PRODUCTS, product.id, product, deadline)

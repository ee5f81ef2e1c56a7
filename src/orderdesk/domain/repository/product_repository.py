"""Abstract repository for the Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (in-memory, JSON) live in the
infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderdesk.domain.model.deadline import Deadline
from orderdesk.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def find_by_id(self, product_id: str, deadline: Deadline | None = None) -> Product:
        """Return a product by its ID, or raise ProductNotFound."""

    @abstractmethod
    def find_all(self, deadline: Deadline | None = None) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def update(self, product: Product, deadline: Deadline | None = None) -> None:
        """Persist a new or updated product."""

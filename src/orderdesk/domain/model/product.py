"""Product aggregate: the stock ledger for one catalog item.

The ``quantity`` held by the product store is the single source of truth
for available stock. Copies embedded in orders are snapshots only.
"""

from __future__ import annotations

from dataclasses import dataclass

from orderdesk.domain.exceptions import QuantityExceedsStock, ValidationError
from orderdesk.domain.model.value_objects import Money


@dataclass
class Product:
    """A product in the catalog together with its available stock.

    Reservation is split into a pure check (``try_reserve_quantity``) and
    an unconditional commit (``reserve_quantity``).  Callers must run both
    under the same lock, otherwise two orders can pass the check before
    either one commits.
    """

    id: str
    name: str
    price: Money
    quantity: int = 0

    def __post_init__(self) -> None:
        if self.quantity < 0:
            raise ValidationError(
                f"Stock of {self.name} cannot be negative, got {self.quantity}"
            )

    def try_reserve_quantity(self, quantity: int) -> None:
        """Raise QuantityExceedsStock if *quantity* is not available."""
        if quantity > self.quantity:
            raise QuantityExceedsStock(
                f"Quantity exceeds stock of {self.name} "
                f"(need {quantity}, have {self.quantity} available)"
            )

    def reserve_quantity(self, quantity: int) -> None:
        self.quantity -= quantity

    def rollback_quantity(self, quantity: int) -> None:
        self.quantity += quantity

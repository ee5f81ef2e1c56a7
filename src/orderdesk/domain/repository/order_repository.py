"""Abstract repository for the Order aggregate.

Besides plain lookup and persistence the order store exposes the two
compound operations that must change the order together with the
product and coupon ledgers.  Implementations delegate those to the
FulfillmentCoordinator.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderdesk.domain.model.deadline import Deadline
from orderdesk.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def find_by_id(self, order_id: str, deadline: Deadline | None = None) -> Order:
        """Return a copy of the order, or raise OrderNotFound."""

    @abstractmethod
    def store(self, order: Order, deadline: Deadline | None = None) -> None:
        """Persist a new order and assign its ``id``."""

    @abstractmethod
    def update(self, order: Order, deadline: Deadline | None = None) -> None:
        """Replace a stored order.

        Raises OrderVersionConflict if the stored copy changed since
        *order* was loaded.
        """

    @abstractmethod
    def finalize_and_reserve(self, order: Order, deadline: Deadline | None = None) -> None:
        """Redeem the coupon, reserve stock and persist *order* atomically."""

    @abstractmethod
    def cancel_and_release(self, order: Order, deadline: Deadline | None = None) -> None:
        """Return the coupon, release stock and persist *order* atomically."""

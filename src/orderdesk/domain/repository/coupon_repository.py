"""Abstract repository for the Coupon aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderdesk.domain.model.coupon import Coupon
from orderdesk.domain.model.deadline import Deadline


class CouponRepository(ABC):

    @abstractmethod
    def find_by_code(self, code: str, deadline: Deadline | None = None) -> Coupon:
        """Return a coupon by its code, or raise CouponNotFound."""

    @abstractmethod
    def update(self, coupon: Coupon, deadline: Deadline | None = None) -> None:
        """Persist a new or updated coupon."""

"""Application service: Apply Coupon use case."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

from orderdesk.application.dto import OrderDTO, to_order_dto
from orderdesk.domain.model.deadline import Deadline
from orderdesk.domain.repository.coupon_repository import CouponRepository
from orderdesk.domain.repository.order_repository import OrderRepository


class ApplyCouponHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        coupon_repo: CouponRepository,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self._order_repo = order_repo
        self._coupon_repo = coupon_repo
        self._clock = clock

    def handle(self, order_id: str, coupon_code: str, deadline: Deadline | None = None) -> OrderDTO:
        order = self._order_repo.find_by_id(order_id, deadline)
        coupon = self._coupon_repo.find_by_code(coupon_code, deadline)

        order.apply_coupon(coupon, now=self._clock())

        self._order_repo.update(order, deadline)
        return to_order_dto(order)

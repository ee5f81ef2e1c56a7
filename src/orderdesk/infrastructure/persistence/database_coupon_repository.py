"""Database-backed implementation of CouponRepository."""

from __future__ import annotations

from orderdesk.domain.model.coupon import Coupon
from orderdesk.domain.model.deadline import Deadline
from orderdesk.domain.repository.coupon_repository import CouponRepository
from orderdesk.infrastructure.persistence.database import COUPONS, Database


class DatabaseCouponRepository(CouponRepository):

    def __init__(self, db: Database) -> None:
        self._db = db

    def find_by_code(self, code: str, deadline: Deadline | None = None) -> Coupon:
        return self._db.get(COUPONS, code, deadline)

    def update(self, coupon: Coupon, deadline: Deadline | None = None) -> None:
        self._db.put(COUPONS, coupon.code, coupon, deadline)

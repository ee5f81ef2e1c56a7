"""Database-backed implementations of CustomerRepository and AdminRepository."""

from __future__ import annotations

from orderdesk.domain.model.customer import Admin, Customer
from orderdesk.domain.model.deadline import Deadline
from orderdesk.domain.repository.customer_repository import (
    AdminRepository,
    CustomerRepository,
)
from orderdesk.infrastructure.persistence.database import ADMINS, CUSTOMERS, Database


class DatabaseCustomerRepository(CustomerRepository):

    def __init__(self, db: Database) -> None:
        self._db = db

    def find_by_id(self, customer_id: str, deadline: Deadline | None = None) -> Customer:
        return self._db.get(CUSTOMERS, customer_id, deadline)


class DatabaseAdminRepository(AdminRepository):

    def __init__(self, db: Database) -> None:
        self._db = db

    def find_by_id(self, admin_id: str, deadline: Deadline | None = None) -> Admin:
        return self._db.get(ADMINS, admin_id, deadline)

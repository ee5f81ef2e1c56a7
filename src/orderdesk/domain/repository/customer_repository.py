"""Abstract read-only repositories for customers and admins."""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderdesk.domain.model.customer import Admin, Customer
from orderdesk.domain.model.deadline import Deadline


class CustomerRepository(ABC):

    @abstractmethod
    def find_by_id(self, customer_id: str, deadline: Deadline | None = None) -> Customer:
        """Return a customer, or raise CustomerNotFound."""


class AdminRepository(ABC):

    @abstractmethod
    def find_by_id(self, admin_id: str, deadline: Deadline | None = None) -> Admin:
        """Return an admin, or raise AdminNotFound."""

"""Reference data about the people an order belongs to or is handled by."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Customer:
    """The buyer.  Orders keep a copy taken when the order is made."""

    id: str
    name: str
    phone_number: str = ""
    email: str = ""
    address: str = ""


@dataclass(frozen=True)
class Admin:
    """Shop staff that cancels, ships and completes orders."""

    id: str
    name: str

"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Every class carries an ``ErrorKind`` telling the presentation layer how to
report it (missing resource, conflict or bad request).

Storage and timeout failures live in a separate hierarchy rooted at
InfrastructureError; they are propagated unchanged and never retried here.
"""

from enum import Enum


class ErrorKind(Enum):
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    VALIDATION = "validation"


class DomainException(Exception):
    """Base class for all domain errors."""

    kind = ErrorKind.CONFLICT


# --- Validation ---------------------------------------------------------------


class ValidationError(DomainException):
    """Malformed caller input."""

    kind = ErrorKind.VALIDATION


class PaymentTypeNotAllowed(ValidationError):
    """Only bank transfers are accepted."""


class PaymentProofNotDecodable(ValidationError):
    """The payment proof is not a base64 encoded string."""


# --- Not found ----------------------------------------------------------------


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    kind = ErrorKind.NOT_FOUND


class CustomerNotFound(EntityNotFoundError):
    pass


class AdminNotFound(EntityNotFoundError):
    pass


class OrderNotFound(EntityNotFoundError):
    pass


class ProductNotFound(EntityNotFoundError):
    pass


class CouponNotFound(EntityNotFoundError):
    pass


class ShipmentNotFound(EntityNotFoundError):
    pass


# --- Conflict -----------------------------------------------------------------


class ConflictError(DomainException):
    """A structurally valid request that violates a domain invariant."""

    kind = ErrorKind.CONFLICT


class AlreadyFinalized(ConflictError):
    """The order is no longer open, its cart and coupon are frozen."""


class AlreadyCompleted(ConflictError):
    """The order is completed, no further transition is allowed."""


class AlreadyCancelled(ConflictError):
    pass


class AlreadyShipped(ConflictError):
    pass


class InvalidStatusTransition(ConflictError):
    """The order is not in the status the requested step expects."""


class InvalidCoupon(ConflictError):
    """Coupon has not started, has expired or is exhausted."""


class QuantityExceedsStock(ConflictError):
    pass


class LogisticsAlreadyRegistered(ConflictError):
    """The logistics partner already holds a shipment for the order."""


class ShipmentNotDelivered(ConflictError):
    pass


class OrderVersionConflict(ConflictError):
    """The order was modified by someone else since it was loaded."""


# --- Infrastructure -----------------------------------------------------------


class InfrastructureError(Exception):
    """Base class for storage, network and deadline failures."""


class StorageError(InfrastructureError):
    pass


class DeadlineExceeded(InfrastructureError):
    pass


class OperationCancelled(InfrastructureError):
    pass

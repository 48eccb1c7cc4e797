"""Ledger errors and validation utilities."""
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from app.models.ledger import BookingSnapshot
    from app.models.money import Money


class LedgerError(Exception):
    """Base class for ledger errors."""
    pass


class InvalidAmount(LedgerError):
    """Non-positive payment amount or negative procedure price."""
    pass


class DuplicateId(LedgerError):
    """A payment with this id already exists in the ledger."""

    def __init__(self, payment_id: str):
        super().__init__(f"Payment '{payment_id}' already exists")
        self.payment_id = payment_id


class NotFound(LedgerError):
    """No payment with this id exists in the ledger."""

    def __init__(self, payment_id: str):
        super().__init__(f"Payment '{payment_id}' not found")
        self.payment_id = payment_id


class BookingNotFound(LedgerError):
    def __init__(self, booking_id: str):
        super().__init__(f"Booking '{booking_id}' not found")
        self.booking_id = booking_id


class NotificationDeliveryFailed(LedgerError):
    """
    The mutation succeeded locally but the snapshot could not be delivered.

    The carried snapshot is valid; the caller may retry delivery or proceed.
    """

    def __init__(
        self,
        snapshot: "BookingSnapshot",
        reason: str,
        expected_version: Optional[int] = None
    ):
        super().__init__(f"Delivery of booking '{snapshot.booking_id}' failed: {reason}")
        self.snapshot = snapshot
        self.reason = reason
        self.expected_version = expected_version


class VersionConflict(NotificationDeliveryFailed):
    """Another actor changed the booking after it was loaded."""
    pass


def validate_payment_amount(amount: "Money") -> None:
    """Payments must be strictly positive."""
    if amount.minor_units <= 0:
        raise InvalidAmount(f"Payment amount must be positive: {amount.minor_units}")


def validate_procedure_price(price: "Money") -> None:
    """Procedure price may be zero but never negative."""
    if price.minor_units < 0:
        raise InvalidAmount(f"Procedure price must not be negative: {price.minor_units}")

"""
LedgerEngine - payment ledger for a single booking.

Core algorithm:
1. Validate the mutation (amount, price, id uniqueness / existence)
2. Apply it to the in-memory payment set (insertion ordered)
3. Recompute total_paid from scratch over the current set
4. Classify status and return a BookingSnapshot

Every mutation is all-or-nothing: validation happens before any state
changes, so a rejected call leaves the ledger exactly as it was.
"""

import logging
from typing import Dict, Iterable

from app.models.base import new_object_id
from app.models.booking import Booking
from app.models.ledger import BookingSnapshot, PaymentStatus
from app.models.money import Money, total
from app.models.payment import PaymentRecord
from app.services.status_classifier import classify_status
from app.utils.ledger_validation import (
    DuplicateId,
    NotFound,
    validate_payment_amount,
    validate_procedure_price,
)

logger = logging.getLogger(__name__)


class LedgerEngine:
    """Owns procedure_price and the ordered payments of one booking."""

    def __init__(
        self,
        booking_id: str,
        procedure_price: Money,
        payments: Iterable[PaymentRecord] = ()
    ):
        validate_procedure_price(procedure_price)
        self.booking_id = booking_id
        self._procedure_price = procedure_price
        self._payments: Dict[str, PaymentRecord] = {}
        for record in payments:
            self._insert(record)

    @classmethod
    def from_booking(cls, booking: Booking) -> "LedgerEngine":
        """Rebuild the ledger from a stored booking; stored totals are ignored."""
        return cls(booking.id, booking.procedure_price, booking.payments)

    # ===== DERIVED VALUES =====

    @property
    def procedure_price(self) -> Money:
        return self._procedure_price

    @property
    def total_paid(self) -> Money:
        return total(record.amount for record in self._payments.values())

    @property
    def remaining_balance(self) -> Money:
        return self._procedure_price - self.total_paid

    @property
    def status(self) -> PaymentStatus:
        return classify_status(self._procedure_price, self.total_paid)

    def __len__(self) -> int:
        return len(self._payments)

    def __contains__(self, payment_id: str) -> bool:
        return payment_id in self._payments

    # ===== OPERATIONS =====

    def snapshot(self) -> BookingSnapshot:
        total_paid = self.total_paid
        return BookingSnapshot(
            booking_id=self.booking_id,
            procedure_price=self._procedure_price,
            total_paid=total_paid,
            remaining_balance=self._procedure_price - total_paid,
            status=classify_status(self._procedure_price, total_paid),
            payments=tuple(self._payments.values()),
        )

    def set_procedure_price(self, new_price: Money) -> BookingSnapshot:
        """
        Replace the price. Existing payments are never re-validated, so
        lowering the price below total_paid is a visible overpayment.
        """
        validate_procedure_price(new_price)
        self._procedure_price = new_price
        snapshot = self.snapshot()
        logger.info(
            "Booking %s price set to %s (status=%s)",
            self.booking_id, new_price.minor_units, snapshot.status.value
        )
        return snapshot

    def add_payment(self, record: PaymentRecord) -> BookingSnapshot:
        """Append a payment, assigning an id if it has none."""
        if not record.id:
            record = record.model_copy(update={"id": new_object_id()})
        self._insert(record)
        snapshot = self.snapshot()
        logger.info(
            "Booking %s payment %s added: %s (total_paid=%s, status=%s)",
            self.booking_id, record.id, record.amount.minor_units,
            snapshot.total_paid.minor_units, snapshot.status.value
        )
        return snapshot

    def remove_payment(self, payment_id: str) -> BookingSnapshot:
        if payment_id not in self._payments:
            raise NotFound(payment_id)
        del self._payments[payment_id]
        snapshot = self.snapshot()
        logger.info(
            "Booking %s payment %s removed (total_paid=%s, status=%s)",
            self.booking_id, payment_id,
            snapshot.total_paid.minor_units, snapshot.status.value
        )
        return snapshot

    # ===== PRIVATE HELPERS =====

    def _insert(self, record: PaymentRecord) -> None:
        # model_copy skips validation, so check the amount here too
        validate_payment_amount(record.amount)
        if record.id in self._payments:
            raise DuplicateId(record.id)
        self._payments[record.id] = record


def reconcile_booking(booking: Booking) -> Booking:
    """Return the booking with its mirrored ledger fields recomputed."""
    snapshot = LedgerEngine.from_booking(booking).snapshot()
    return booking.model_copy(update={
        "total_paid": snapshot.total_paid,
        "remaining_balance": snapshot.remaining_balance,
        "status": snapshot.status
    })

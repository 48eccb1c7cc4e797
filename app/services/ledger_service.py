"""
LedgerService - runs ledger mutations against stored bookings.

Each call loads the booking, rebuilds a LedgerEngine from it, applies
exactly one mutation and emits exactly one snapshot to the notifier.
Validation errors propagate before anything is emitted; a delivery
failure is raised as NotificationDeliveryFailed carrying the valid
snapshot so the caller can retry with redeliver().
"""

import logging
from typing import Tuple

from app.models.booking import Booking
from app.models.ledger import BookingSnapshot
from app.models.money import Money
from app.models.payment import PaymentRecord
from app.repositories.booking_repo import BookingRepository
from app.services.ledger_engine import LedgerEngine
from app.services.reconciliation import ReconciliationNotifier
from app.utils.ledger_validation import BookingNotFound, NotificationDeliveryFailed

logger = logging.getLogger(__name__)


class LedgerService:
    def __init__(self, repository: BookingRepository, notifier: ReconciliationNotifier):
        self.repository = repository
        self.notifier = notifier

    async def get_snapshot(self, booking_id: str) -> BookingSnapshot:
        _, engine = await self._load(booking_id)
        return engine.snapshot()

    async def add_payment(self, booking_id: str, record: PaymentRecord) -> BookingSnapshot:
        """
        Record a deposit. Resubmitting a deposit that is already stored
        under the same id returns the current snapshot unchanged; the same
        id with different details is a DuplicateId.
        """
        booking, engine = await self._load(booking_id)
        stored = next((p for p in booking.payments if p.id == record.id), None)
        if stored is not None and _same_deposit(stored, record):
            logger.info("Booking %s payment %s already recorded", booking_id, record.id)
            return engine.snapshot()
        snapshot = engine.add_payment(record)
        await self._emit(snapshot, booking.version)
        return snapshot

    async def remove_payment(self, booking_id: str, payment_id: str) -> BookingSnapshot:
        booking, engine = await self._load(booking_id)
        snapshot = engine.remove_payment(payment_id)
        await self._emit(snapshot, booking.version)
        return snapshot

    async def set_procedure_price(self, booking_id: str, new_price: Money) -> BookingSnapshot:
        booking, engine = await self._load(booking_id)
        snapshot = engine.set_procedure_price(new_price)
        await self._emit(snapshot, booking.version)
        return snapshot

    async def redeliver(self, failure: NotificationDeliveryFailed) -> BookingSnapshot:
        """Retry delivery of a snapshot whose first emission failed."""
        await self._emit(failure.snapshot, failure.expected_version)
        return failure.snapshot

    # ===== PRIVATE HELPERS =====

    async def _load(self, booking_id: str) -> Tuple[Booking, LedgerEngine]:
        booking = await self.repository.get_booking(booking_id)
        if booking is None:
            raise BookingNotFound(booking_id)
        return booking, LedgerEngine.from_booking(booking)

    async def _emit(self, snapshot: BookingSnapshot, expected_version: int) -> None:
        try:
            await self.notifier.emit(snapshot, expected_version)
        except NotificationDeliveryFailed:
            logger.warning(
                "Ledger change for booking %s is valid but was not delivered",
                snapshot.booking_id
            )
            raise


def _same_deposit(stored: PaymentRecord, record: PaymentRecord) -> bool:
    return (
        stored.amount == record.amount
        and stored.method_reference == record.method_reference
        and stored.occurred_at == record.occurred_at
        and stored.receipt_reference == record.receipt_reference
    )

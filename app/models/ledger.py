"""
Ledger model - derived state of one booking's payments.

Design principles:
- total_paid is always the sum of the current payment set
- remaining_balance = procedure_price - total_paid, negative on overpayment
- Status: pending → partial → paid
- All amounts in integer minor units
"""

from enum import Enum
from typing import Tuple

from pydantic import BaseModel, ConfigDict

from app.models.money import Money
from app.models.payment import PaymentRecord


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PARTIAL = "partial"
    PAID = "paid"

    @property
    def rank(self) -> int:
        """Display grouping order only."""
        return _STATUS_RANK[self]


_STATUS_RANK = {
    PaymentStatus.PENDING: 0,
    PaymentStatus.PARTIAL: 1,
    PaymentStatus.PAID: 2,
}


class BookingSnapshot(BaseModel):
    """
    Consistent read-only view of a booking's ledger.

    Invariants:
    - total_paid == sum(p.amount for p in payments)
    - remaining_balance == procedure_price - total_paid
    - status == classify_status(procedure_price, total_paid)
    """
    model_config = ConfigDict(frozen=True)

    booking_id: str
    procedure_price: Money
    total_paid: Money
    remaining_balance: Money
    status: PaymentStatus
    payments: Tuple[PaymentRecord, ...] = ()

    @property
    def overpayment(self) -> Money:
        if self.remaining_balance.is_negative():
            return -self.remaining_balance
        return Money.zero()

from typing import List
from pydantic import BaseModel

from app.models.ledger import BookingSnapshot, PaymentStatus
from app.schemas.payment import PaymentResponse


class LedgerSnapshotResponse(BaseModel):
    """Current balance and status of a booking."""
    booking_id: str
    procedure_price: int
    total_paid: int
    remaining_balance: int
    overpayment: int
    status: PaymentStatus
    payments: List[PaymentResponse]

    @classmethod
    def from_snapshot(cls, snapshot: BookingSnapshot) -> "LedgerSnapshotResponse":
        return cls(
            booking_id=snapshot.booking_id,
            procedure_price=snapshot.procedure_price.minor_units,
            total_paid=snapshot.total_paid.minor_units,
            remaining_balance=snapshot.remaining_balance.minor_units,
            overpayment=snapshot.overpayment.minor_units,
            status=snapshot.status,
            payments=[PaymentResponse.from_record(p) for p in snapshot.payments]
        )


class DeliveryWarningResponse(BaseModel):
    """
    The ledger change is valid but was not persisted/broadcast.

    Returned with 202 so the client can retry delivery.
    """
    snapshot: LedgerSnapshotResponse
    warning: str

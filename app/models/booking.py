from datetime import date
from typing import Optional, List
from pydantic import Field

from app.models.base import MongoModel
from app.models.ledger import PaymentStatus
from app.models.money import Money
from app.models.payment import PaymentRecord


class Booking(MongoModel):
    """
    One scheduled surgery for one patient.

    The ledger fields (total_paid, remaining_balance, status) mirror the
    last persisted snapshot; LedgerEngine recomputes them on load.
    """
    # Patient
    full_name: str
    national_code: str
    phone: str

    # Procedure
    surgery_type: str               # Surgery id from the catalog
    procedure_price: Money
    surgery_date: date
    surgery_time: Optional[str] = None  # "HH:MM" slot
    doctor: str
    consultant: str
    clinic: str

    documents: List[str] = []
    notes: Optional[str] = None

    # Ledger (embedded, owned exclusively by this booking)
    payments: List[PaymentRecord] = []
    total_paid: Money = Field(default_factory=Money.zero)
    remaining_balance: Money = Field(default_factory=Money.zero)
    status: PaymentStatus = PaymentStatus.PENDING

    version: int = 1
    created_by: Optional[str] = None

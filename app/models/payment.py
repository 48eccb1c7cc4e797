"""
PaymentRecord - one deposit against a booking.

Immutable once created: "editing" a payment is remove + add, so a
receipt or notification that points at a payment id keeps meaning the
same deposit.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.base import _utcnow, new_object_id
from app.models.money import Money
from app.utils.ledger_validation import validate_payment_amount


class PaymentRecord(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default_factory=new_object_id)
    amount: Money
    method_reference: str          # Bank card id from the catalog
    occurred_at: date
    receipt_reference: Optional[str] = None  # Receipt image id in document storage
    card_holder: Optional[str] = None
    created_at: datetime = Field(default_factory=_utcnow)

    @field_validator("amount")
    @classmethod
    def _amount_positive(cls, value: Money) -> Money:
        # InvalidAmount is not a ValueError, so it propagates as-is
        validate_payment_amount(value)
        return value

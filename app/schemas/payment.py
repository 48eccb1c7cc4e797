from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from app.models.money import Money
from app.models.payment import PaymentRecord
from app.utils.persian_date import parse_currency


def amount_from_text(value):
    # Forms send "۱۶٬۰۰۰٬۰۰۰"; parse_currency raises ValueError -> 422
    if isinstance(value, str):
        return parse_currency(value)
    return value


class PaymentCreate(BaseModel):
    """
    Request body to record a deposit.

    id is optional; a client that sends one can resubmit the same body
    after a failed save and the deposit is still stored once.
    """
    id: Optional[str] = Field(None, min_length=1, max_length=64)
    amount: int  # Integer minor units (Toman)
    method_reference: str = Field(..., min_length=1)  # Bank card id
    occurred_at: date = Field(default_factory=date.today)
    receipt_reference: Optional[str] = None
    card_holder: Optional[str] = None

    @field_validator("amount", mode="before")
    @classmethod
    def parse_amount(cls, value):
        return amount_from_text(value)

    def to_record(self) -> PaymentRecord:
        """Build the immutable record; raises InvalidAmount for amount <= 0."""
        fields = {
            "amount": Money(self.amount),
            "method_reference": self.method_reference,
            "occurred_at": self.occurred_at,
            "receipt_reference": self.receipt_reference,
            "card_holder": self.card_holder,
        }
        if self.id:
            fields["id"] = self.id
        return PaymentRecord(**fields)


class PaymentResponse(BaseModel):
    id: str
    amount: int
    method_reference: str
    occurred_at: date
    receipt_reference: Optional[str] = None
    card_holder: Optional[str] = None
    created_at: datetime

    @classmethod
    def from_record(cls, record: PaymentRecord) -> "PaymentResponse":
        return cls(
            id=record.id,
            amount=record.amount.minor_units,
            method_reference=record.method_reference,
            occurred_at=record.occurred_at,
            receipt_reference=record.receipt_reference,
            card_holder=record.card_holder,
            created_at=record.created_at
        )


class PriceUpdate(BaseModel):
    """Request body to change a booking's procedure price."""
    procedure_price: int

    @field_validator("procedure_price", mode="before")
    @classmethod
    def parse_price(cls, value):
        return amount_from_text(value)

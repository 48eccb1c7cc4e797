from datetime import date, datetime
from typing import Optional, List
from pydantic import BaseModel, Field, field_validator

from app.models.ledger import PaymentStatus
from app.schemas.payment import PaymentCreate, PaymentResponse


class BookingBase(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=200)
    national_code: str
    phone: str
    surgery_type: str
    surgery_date: date
    surgery_time: str
    doctor: str
    consultant: str
    clinic: str
    documents: List[str] = []
    notes: Optional[str] = None


class BookingCreate(BookingBase):
    """Admit a patient. procedure_price defaults to the catalog price."""
    procedure_price: Optional[int] = None
    payments: List[PaymentCreate] = []


class BookingUpdate(BaseModel):
    """Update booking details. Price and payments go through the ledger."""
    full_name: Optional[str] = Field(None, min_length=1, max_length=200)
    national_code: Optional[str] = None
    phone: Optional[str] = None
    surgery_type: Optional[str] = None
    surgery_date: Optional[date] = None
    surgery_time: Optional[str] = None
    doctor: Optional[str] = None
    consultant: Optional[str] = None
    clinic: Optional[str] = None
    documents: Optional[List[str]] = None
    notes: Optional[str] = None
    version: int  # Required for optimistic locking

    @field_validator(
        "full_name", "national_code", "phone", "surgery_type", "surgery_date",
        "surgery_time", "doctor", "consultant", "clinic", "documents",
        mode="before"
    )
    @classmethod
    def not_null(cls, value):
        # Omit a field to keep it; only notes may be cleared
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class BookingFilter(BaseModel):
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    doctor: Optional[str] = None
    clinic: Optional[str] = None
    consultant: Optional[str] = None
    surgery_type: Optional[str] = None
    status: Optional[PaymentStatus] = None
    card_id: Optional[str] = None
    search: Optional[str] = None


class BookingResponse(BookingBase):
    id: str
    procedure_price: int
    total_paid: int
    remaining_balance: int
    status: PaymentStatus
    payments: List[PaymentResponse]
    version: int
    created_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_booking(cls, booking) -> "BookingResponse":
        return cls(
            id=booking.id,
            full_name=booking.full_name,
            national_code=booking.national_code,
            phone=booking.phone,
            surgery_type=booking.surgery_type,
            surgery_date=booking.surgery_date,
            surgery_time=booking.surgery_time or "",
            doctor=booking.doctor,
            consultant=booking.consultant,
            clinic=booking.clinic,
            documents=booking.documents,
            notes=booking.notes,
            procedure_price=booking.procedure_price.minor_units,
            total_paid=booking.total_paid.minor_units,
            remaining_balance=booking.remaining_balance.minor_units,
            status=booking.status,
            payments=[PaymentResponse.from_record(p) for p in booking.payments],
            version=booking.version,
            created_by=booking.created_by,
            created_at=booking.created_at,
            updated_at=booking.updated_at
        )


class SlotAvailability(BaseModel):
    clinic: str
    surgery_date: date
    capacity: int
    booked: List[str]
    available: List[str]

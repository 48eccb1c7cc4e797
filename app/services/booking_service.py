import logging
from datetime import date
from typing import List, Optional

from app.core import catalog
from app.models.booking import Booking
from app.models.money import Money
from app.repositories.booking_repo import BookingRepository
from app.schemas.booking import BookingCreate, BookingFilter, BookingUpdate, SlotAvailability
from app.services.ledger_engine import LedgerEngine, reconcile_booking
from app.services.reconciliation import SnapshotBroadcaster
from app.utils.booking_validation import (
    BookingValidationError,
    generate_time_slots,
    normalize_phone,
    validate_national_code,
    validate_time_slot,
)
from app.utils.ledger_validation import BookingNotFound

logger = logging.getLogger(__name__)


class BookingService:
    """Patient admission: validation, scheduling checks and booking CRUD."""

    def __init__(
        self,
        repository: BookingRepository,
        broadcaster: Optional[SnapshotBroadcaster] = None
    ):
        self.repository = repository
        self.broadcaster = broadcaster

    async def create_booking(self, data: BookingCreate, created_by: Optional[str] = None) -> Booking:
        """
        Admit a patient.

        Process:
        1. Validate patient details and catalog references
        2. Check the slot is free and the clinic has capacity that day
        3. Apply initial payments through the ledger engine
        4. Insert the booking with the resulting ledger state
        """
        national_code = validate_national_code(data.national_code)
        phone = normalize_phone(data.phone)
        surgery = self._resolve_catalog(data.surgery_type, data.doctor, data.consultant, data.clinic)
        await self._check_schedule(data.clinic, data.surgery_date, data.surgery_time)

        price = Money(data.procedure_price if data.procedure_price is not None else surgery.price)
        booking = Booking(
            full_name=data.full_name.strip(),
            national_code=national_code,
            phone=phone,
            surgery_type=data.surgery_type,
            procedure_price=price,
            surgery_date=data.surgery_date,
            surgery_time=data.surgery_time,
            doctor=data.doctor,
            consultant=data.consultant,
            clinic=data.clinic,
            documents=data.documents,
            notes=data.notes,
            created_by=created_by
        )

        # Raises InvalidAmount before anything is stored
        engine = LedgerEngine(booking.id, price)
        for payment in data.payments:
            engine.add_payment(payment.to_record())
        snapshot = engine.snapshot()
        booking = booking.model_copy(update={
            "payments": list(snapshot.payments),
            "total_paid": snapshot.total_paid,
            "remaining_balance": snapshot.remaining_balance,
            "status": snapshot.status
        })

        await self.repository.create_booking(booking)
        logger.info(
            "Admitted booking %s at clinic %s on %s %s (status=%s)",
            booking.id, booking.clinic, booking.surgery_date, booking.surgery_time,
            booking.status.value
        )
        if self.broadcaster is not None:
            self.broadcaster.publish(snapshot)
        return booking

    async def get_booking(self, booking_id: str) -> Booking:
        booking = await self.repository.get_booking(booking_id)
        if booking is None:
            raise BookingNotFound(booking_id)
        return reconcile_booking(booking)

    async def list_bookings(self, filters: Optional[BookingFilter] = None) -> List[Booking]:
        bookings = await self.repository.list_bookings(filters)
        return [reconcile_booking(b) for b in bookings]

    async def update_booking(self, booking_id: str, data: BookingUpdate) -> Booking:
        existing = await self.get_booking(booking_id)
        updates = data.model_dump(exclude_unset=True, exclude={"version"}, mode="json")

        if "national_code" in updates:
            updates["national_code"] = validate_national_code(updates["national_code"])
        if "phone" in updates:
            updates["phone"] = normalize_phone(updates["phone"])
        if "full_name" in updates:
            updates["full_name"] = updates["full_name"].strip()
            if not updates["full_name"]:
                raise BookingValidationError("Full name cannot be blank")

        self._resolve_catalog(
            updates.get("surgery_type", existing.surgery_type),
            updates.get("doctor", existing.doctor),
            updates.get("consultant", existing.consultant),
            updates.get("clinic", existing.clinic)
        )

        if {"clinic", "surgery_date", "surgery_time"} & updates.keys():
            await self._check_schedule(
                data.clinic or existing.clinic,
                data.surgery_date or existing.surgery_date,
                data.surgery_time or existing.surgery_time,
                exclude_booking_id=booking_id
            )

        updated = await self.repository.update_details(booking_id, updates, data.version)
        if updated is None:
            raise BookingValidationError(
                f"Version conflict: expected {data.version}, current {existing.version}"
            )
        return updated

    async def delete_booking(self, booking_id: str) -> None:
        deleted = await self.repository.delete_booking(booking_id)
        if not deleted:
            raise BookingNotFound(booking_id)
        logger.info("Deleted booking %s", booking_id)

    async def slot_availability(self, clinic_id: str, surgery_date: date) -> SlotAvailability:
        clinic = catalog.get_clinic(clinic_id)
        if clinic is None:
            raise BookingValidationError(f"Unknown clinic '{clinic_id}'")
        booked = await self.repository.booked_slots(clinic_id, surgery_date)
        full = len(booked) >= clinic.max_capacity
        return SlotAvailability(
            clinic=clinic_id,
            surgery_date=surgery_date,
            capacity=clinic.max_capacity,
            booked=sorted(booked),
            available=[] if full else [s for s in generate_time_slots() if s not in booked]
        )

    # ===== PRIVATE HELPERS =====

    def _resolve_catalog(self, surgery_id: str, doctor_id: str, consultant_id: str, clinic_id: str):
        surgery = catalog.get_surgery(surgery_id)
        if surgery is None:
            raise BookingValidationError(f"Unknown surgery type '{surgery_id}'")
        if catalog.get_doctor(doctor_id) is None:
            raise BookingValidationError(f"Unknown doctor '{doctor_id}'")
        if catalog.get_consultant(consultant_id) is None:
            raise BookingValidationError(f"Unknown consultant '{consultant_id}'")
        if catalog.get_clinic(clinic_id) is None:
            raise BookingValidationError(f"Unknown clinic '{clinic_id}'")
        return surgery

    async def _check_schedule(
        self,
        clinic_id: str,
        surgery_date: date,
        surgery_time: Optional[str],
        exclude_booking_id: Optional[str] = None
    ) -> None:
        if not surgery_time:
            raise BookingValidationError("An admission time slot is required")
        validate_time_slot(surgery_time)

        clinic = catalog.get_clinic(clinic_id)
        booked = await self.repository.booked_slots(clinic_id, surgery_date, exclude_booking_id)
        if surgery_time in booked:
            raise BookingValidationError(
                f"Slot {surgery_time} on {surgery_date} is already booked at {clinic.name}"
            )
        if len(booked) >= clinic.max_capacity:
            raise BookingValidationError(
                f"{clinic.name} is at capacity ({clinic.max_capacity}) on {surgery_date}"
            )

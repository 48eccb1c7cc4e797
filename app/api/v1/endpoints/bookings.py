from datetime import date
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.core.auth import get_current_user, require_staff_editor
from app.db.mongo import get_db
from app.models.user import UserResponse
from app.repositories.booking_repo import BookingRepository
from app.schemas.booking import (
    BookingCreate,
    BookingFilter,
    BookingResponse,
    BookingUpdate,
    SlotAvailability,
)
from app.services.booking_service import BookingService
from app.services.reconciliation import snapshot_broadcaster
from app.utils.booking_validation import BookingValidationError
from app.utils.ledger_validation import BookingNotFound, InvalidAmount

router = APIRouter()


def get_booking_service(db = Depends(get_db)) -> BookingService:
    return BookingService(BookingRepository(db), snapshot_broadcaster)


@router.post("/", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create_booking(
    booking_in: BookingCreate,
    current_user: UserResponse = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service)
):
    """Admit a patient to a surgery slot, with optional initial deposits."""
    try:
        booking = await service.create_booking(booking_in, created_by=current_user.id)
    except (BookingValidationError, InvalidAmount) as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc)
        )
    return BookingResponse.from_booking(booking)


@router.get("/", response_model=List[BookingResponse])
async def list_bookings(
    filters: BookingFilter = Depends(),
    current_user: UserResponse = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service)
):
    """List bookings ordered by surgery date and time."""
    bookings = await service.list_bookings(filters)
    return [BookingResponse.from_booking(b) for b in bookings]


@router.get("/slots", response_model=SlotAvailability)
async def get_slots(
    clinic: str = Query(...),
    surgery_date: date = Query(..., alias="date"),
    current_user: UserResponse = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service)
):
    """Booked and free admission slots for a clinic on a day."""
    try:
        return await service.slot_availability(clinic, surgery_date)
    except BookingValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc)
        )


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(
    booking_id: str,
    current_user: UserResponse = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service)
):
    try:
        booking = await service.get_booking(booking_id)
    except BookingNotFound:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Booking not found"
        )
    return BookingResponse.from_booking(booking)


@router.patch("/{booking_id}", response_model=BookingResponse)
async def update_booking(
    booking_id: str,
    booking_in: BookingUpdate,
    current_user: UserResponse = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service)
):
    """Update booking details (admins and receptionists, or the admitting user)."""
    try:
        existing = await service.get_booking(booking_id)
        if not current_user.can_edit_all_bookings and existing.created_by != current_user.id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Not allowed to edit this booking"
            )
        booking = await service.update_booking(booking_id, booking_in)
    except BookingNotFound:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Booking not found"
        )
    except BookingValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc)
        )
    return BookingResponse.from_booking(booking)


@router.delete("/{booking_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_booking(
    booking_id: str,
    current_user: UserResponse = Depends(require_staff_editor),
    service: BookingService = Depends(get_booking_service)
):
    try:
        await service.delete_booking(booking_id)
    except BookingNotFound:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Booking not found"
        )

from typing import List
from fastapi import APIRouter

from app.core import catalog
from app.models.catalog import Surgery, Doctor, Consultant, Clinic, BankCard
from app.utils.booking_validation import generate_time_slots

router = APIRouter()


@router.get("/surgeries", response_model=List[Surgery])
async def list_surgeries():
    return catalog.SURGERIES


@router.get("/doctors", response_model=List[Doctor])
async def list_doctors():
    return catalog.DOCTORS


@router.get("/consultants", response_model=List[Consultant])
async def list_consultants():
    return catalog.CONSULTANTS


@router.get("/clinics", response_model=List[Clinic])
async def list_clinics():
    return catalog.CLINICS


@router.get("/cards", response_model=List[BankCard])
async def list_cards():
    """Bank cards that deposits can be made to."""
    return catalog.BANK_CARDS


@router.get("/time-slots", response_model=List[str])
async def list_time_slots():
    return generate_time_slots()

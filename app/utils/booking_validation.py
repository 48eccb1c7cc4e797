"""Booking admission validation utilities."""
from typing import List

from app.core.config import settings
from app.utils.persian_date import to_english_number


class BookingValidationError(Exception):
    """Custom exception for booking admission errors."""
    pass


def generate_time_slots(
    start_hour: int = None,
    end_hour: int = None,
    step_minutes: int = None
) -> List[str]:
    """
    Generate "HH:MM" admission slots.

    Defaults come from settings: 08:00 up to (not including) midnight,
    every 30 minutes.
    """
    start_hour = settings.SLOT_START_HOUR if start_hour is None else start_hour
    end_hour = settings.SLOT_END_HOUR if end_hour is None else end_hour
    step_minutes = settings.SLOT_STEP_MINUTES if step_minutes is None else step_minutes

    slots = []
    minute_of_day = start_hour * 60
    while minute_of_day < end_hour * 60:
        slots.append(f"{minute_of_day // 60:02d}:{minute_of_day % 60:02d}")
        minute_of_day += step_minutes
    return slots


def validate_national_code(code: str) -> str:
    """
    Validate an Iranian national code and return it with English digits.

    Rules:
    - exactly 10 digits
    - check digit: weighted sum of the first nine digits (weights 10..2)
      mod 11 = r; check == r if r < 2, else check == 11 - r
    """
    clean = to_english_number(code.strip())
    if len(clean) != 10 or not (clean.isascii() and clean.isdigit()):
        raise BookingValidationError(f"National code must be 10 digits: '{code}'")

    check = int(clean[9])
    weighted = sum(int(clean[i]) * (10 - i) for i in range(9))
    remainder = weighted % 11
    expected = remainder if remainder < 2 else 11 - remainder
    if check != expected:
        raise BookingValidationError(f"Invalid national code: '{code}'")
    return clean


def normalize_phone(phone: str) -> str:
    """Strip non-digits (Persian digits allowed) and require 11 digits."""
    digits = "".join(ch for ch in to_english_number(phone) if ch.isascii() and ch.isdigit())
    if len(digits) != 11:
        raise BookingValidationError(f"Phone number must be 11 digits: '{phone}'")
    return digits


def validate_time_slot(time_slot: str) -> None:
    if time_slot not in generate_time_slots():
        raise BookingValidationError(f"'{time_slot}' is not an admission time slot")

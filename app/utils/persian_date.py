"""
Persian (Jalali) calendar helpers for presentation.

The ledger never sees Jalali dates; reports and exports convert at the edge.
"""
from datetime import date, timedelta
from typing import Tuple

import jdatetime

PERSIAN_MONTHS = [
    "فروردین", "اردیبهشت", "خرداد", "تیر", "مرداد", "شهریور",
    "مهر", "آبان", "آذر", "دی", "بهمن", "اسفند",
]

PERSIAN_WEEK_DAYS_FULL = ["شنبه", "یکشنبه", "دوشنبه", "سه‌شنبه", "چهارشنبه", "پنجشنبه", "جمعه"]

_PERSIAN_DIGITS = "۰۱۲۳۴۵۶۷۸۹"
_TO_ENGLISH = str.maketrans(_PERSIAN_DIGITS, "0123456789")
_SEPARATORS = ",،٬ \t"


def to_persian_date(value: date) -> Tuple[int, int, int]:
    """Gregorian date -> (jy, jm, jd)."""
    j = jdatetime.date.fromgregorian(date=value)
    return j.year, j.month, j.day


def format_persian_date(value: date) -> str:
    """e.g. 1403/01/05"""
    jy, jm, jd = to_persian_date(value)
    return f"{jy}/{jm:02d}/{jd:02d}"


def format_persian_date_with_day(value: date) -> str:
    _, jm, jd = to_persian_date(value)
    return f"{PERSIAN_WEEK_DAYS_FULL[persian_day_of_week(value)]} {jd} {PERSIAN_MONTHS[jm - 1]}"


def persian_day_of_week(value: date) -> int:
    """0 = Saturday ... 6 = Friday."""
    # date.weekday(): Monday = 0, so Saturday = 5
    return (value.weekday() + 2) % 7


def to_english_number(value: str) -> str:
    return value.translate(_TO_ENGLISH)


def parse_currency(text: str) -> int:
    """
    Parse a typed amount such as "۱۶٬۰۰۰٬۰۰۰" or "16,000,000".

    Separators and whitespace are stripped and Persian digits accepted.
    Raises ValueError for anything that is not a whole number.
    """
    cleaned = to_english_number("".join(ch for ch in text if ch not in _SEPARATORS))
    digits = cleaned[1:] if cleaned.startswith("-") else cleaned
    if not digits or not (digits.isascii() and digits.isdigit()):
        raise ValueError(f"Not a whole amount: '{text}'")
    return int(cleaned)


def next_week_range(today: date) -> Tuple[date, date]:
    """Tomorrow through seven days from today, inclusive."""
    return today + timedelta(days=1), today + timedelta(days=7)


def is_date_in_range(value: date, start: date, end: date) -> bool:
    return start <= value <= end

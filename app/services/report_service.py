"""
Report computations over bookings.

All functions are pure: the caller fetches bookings and passes "today"
explicitly, so figures are reproducible in tests.
"""

from collections import OrderedDict
from datetime import date, timedelta
from io import BytesIO
from typing import Dict, List, Optional

from openpyxl import Workbook

from app.core import catalog
from app.core.config import settings
from app.models.booking import Booking
from app.models.ledger import PaymentStatus
from app.schemas.report import (
    CardTotal,
    DailySurgeryCount,
    DashboardStats,
    PaymentTotals,
    ReportSummary,
)
from app.utils.persian_date import (
    format_persian_date,
    format_persian_date_with_day,
    is_date_in_range,
    next_week_range,
)

EXPORT_HEADERS = [
    "نام", "کد ملی", "نوع جراحی", "تاریخ", "پزشک", "مطب",
    f"هزینه ({settings.CURRENCY_LABEL})",
    f"پرداختی ({settings.CURRENCY_LABEL})",
    f"باقی‌مانده ({settings.CURRENCY_LABEL})",
    "وضعیت",
]


def dashboard_stats(bookings: List[Booking], today: date) -> DashboardStats:
    week_start, week_end = next_week_range(today)
    today_bookings = [b for b in bookings if b.surgery_date == today]
    week_bookings = [b for b in bookings if is_date_in_range(b.surgery_date, week_start, week_end)]

    payments_today = sum(
        p.amount.minor_units
        for b in today_bookings
        for p in b.payments
        if p.occurred_at == today
    )

    return DashboardStats(
        total_patients_today=len(today_bookings),
        total_patients_week=len(week_bookings),
        pending_settlement_today=sum(1 for b in today_bookings if b.status != PaymentStatus.PAID),
        pending_settlement_week=sum(1 for b in week_bookings if b.status != PaymentStatus.PAID),
        total_payments_today=payments_today
    )


def card_totals(bookings: List[Booking], card_id: Optional[str] = None) -> List[CardTotal]:
    """Sum payments per bank card, largest first."""
    totals: Dict[str, int] = {}
    holders: Dict[str, str] = {}
    for booking in bookings:
        for payment in booking.payments:
            ref = payment.method_reference
            if card_id and ref != card_id:
                continue
            totals[ref] = totals.get(ref, 0) + payment.amount.minor_units
            if payment.card_holder and ref not in holders:
                holders[ref] = payment.card_holder

    result = []
    for ref, amount in totals.items():
        card = catalog.get_card(ref)
        result.append(CardTotal(
            card_id=ref,
            masked_number=card.masked_number if card else "",
            holder=holders.get(ref) or (card.owner_name if card else ""),
            total=amount
        ))
    result.sort(key=lambda c: c.total, reverse=True)
    return result


def daily_surgery_counts(bookings: List[Booking]) -> List[DailySurgeryCount]:
    counts: Dict[date, int] = OrderedDict()
    for booking in sorted(bookings, key=lambda b: b.surgery_date):
        counts[booking.surgery_date] = counts.get(booking.surgery_date, 0) + 1
    return [
        DailySurgeryCount(
            day=day,
            jalali_date=format_persian_date(day),
            label=format_persian_date_with_day(day),
            count=count
        )
        for day, count in counts.items()
    ]


def payment_totals(bookings: List[Booking], today: date) -> PaymentTotals:
    week_ago = today - timedelta(days=7)
    month_ago = today - timedelta(days=30)
    daily = weekly = monthly = overall = 0

    for booking in bookings:
        for payment in booking.payments:
            amount = payment.amount.minor_units
            if payment.occurred_at == today:
                daily += amount
            if payment.occurred_at >= week_ago:
                weekly += amount
            if payment.occurred_at >= month_ago:
                monthly += amount
            overall += amount

    return PaymentTotals(today=daily, last_7_days=weekly, last_30_days=monthly, all_time=overall)


def build_report(
    bookings: List[Booking],
    start_date: date,
    end_date: date,
    today: date,
    card_id: Optional[str] = None
) -> ReportSummary:
    return ReportSummary(
        start_date=start_date,
        end_date=end_date,
        booking_count=len(bookings),
        total_price=sum(b.procedure_price.minor_units for b in bookings),
        total_paid=sum(b.total_paid.minor_units for b in bookings),
        total_remaining=sum(b.remaining_balance.minor_units for b in bookings),
        card_totals=card_totals(bookings, card_id),
        daily_surgeries=daily_surgery_counts(bookings),
        payment_totals=payment_totals(bookings, today)
    )


def export_workbook(bookings: List[Booking]) -> bytes:
    """One row per booking, dates in Jalali, amounts as integers."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Report"
    ws.sheet_view.rightToLeft = True
    ws.append(EXPORT_HEADERS)

    for booking in bookings:
        surgery = catalog.get_surgery(booking.surgery_type)
        doctor = catalog.get_doctor(booking.doctor)
        clinic = catalog.get_clinic(booking.clinic)
        ws.append([
            booking.full_name,
            booking.national_code,
            surgery.name if surgery else booking.surgery_type,
            format_persian_date(booking.surgery_date),
            doctor.name if doctor else booking.doctor,
            clinic.name if clinic else booking.clinic,
            booking.procedure_price.minor_units,
            booking.total_paid.minor_units,
            booking.remaining_balance.minor_units,
            booking.status.value,
        ])

    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()

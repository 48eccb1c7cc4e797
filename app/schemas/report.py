from datetime import date
from typing import List
from pydantic import BaseModel


class DashboardStats(BaseModel):
    total_patients_today: int
    total_patients_week: int
    pending_settlement_today: int
    pending_settlement_week: int
    total_payments_today: int


class CardTotal(BaseModel):
    card_id: str
    masked_number: str = ""
    holder: str = ""
    total: int


class DailySurgeryCount(BaseModel):
    day: date
    jalali_date: str
    label: str = ""  # e.g. "چهارشنبه 1 فروردین"
    count: int


class PaymentTotals(BaseModel):
    today: int
    last_7_days: int
    last_30_days: int
    all_time: int


class ReportSummary(BaseModel):
    start_date: date
    end_date: date
    booking_count: int
    total_price: int
    total_paid: int
    total_remaining: int
    card_totals: List[CardTotal]
    daily_surgeries: List[DailySurgeryCount]
    payment_totals: PaymentTotals

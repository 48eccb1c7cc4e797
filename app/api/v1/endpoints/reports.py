from datetime import date, timedelta
from typing import Optional
from fastapi import APIRouter, Depends, Query, Response

from app.api.v1.endpoints.bookings import get_booking_service
from app.core.auth import require_staff_editor
from app.models.user import UserResponse
from app.schemas.booking import BookingFilter
from app.schemas.report import DashboardStats, ReportSummary
from app.services import report_service
from app.services.booking_service import BookingService

router = APIRouter()

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.get("/dashboard", response_model=DashboardStats)
async def get_dashboard(
    current_user: UserResponse = Depends(require_staff_editor),
    service: BookingService = Depends(get_booking_service)
):
    """Today's and next week's admissions plus outstanding balances."""
    bookings = await service.list_bookings()
    return report_service.dashboard_stats(bookings, date.today())


@router.get("/summary", response_model=ReportSummary)
async def get_summary(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    card_id: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    current_user: UserResponse = Depends(require_staff_editor),
    service: BookingService = Depends(get_booking_service)
):
    """Totals over a date range (defaults to the last seven days)."""
    today = date.today()
    end_date = end_date or today
    start_date = start_date or end_date - timedelta(days=7)

    bookings = await service.list_bookings(BookingFilter(
        start_date=start_date,
        end_date=end_date,
        card_id=card_id,
        search=search
    ))
    return report_service.build_report(bookings, start_date, end_date, today, card_id)


@router.get("/export.xlsx")
async def export_report(
    filters: BookingFilter = Depends(),
    current_user: UserResponse = Depends(require_staff_editor),
    service: BookingService = Depends(get_booking_service)
):
    bookings = await service.list_bookings(filters)
    content = report_service.export_workbook(bookings)
    filename = f"bookings-{date.today().isoformat()}.xlsx"
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )

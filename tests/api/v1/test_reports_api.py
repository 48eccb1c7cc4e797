from datetime import date, timedelta
from io import BytesIO
from unittest.mock import AsyncMock, MagicMock

import pytest
from openpyxl import load_workbook

from app.api.v1.endpoints.bookings import get_booking_service
from app.main import app
from app.services.ledger_engine import reconcile_booking


@pytest.fixture
def booking_service(make_booking, make_payment):
    today = date.today()
    service = MagicMock()
    service.list_bookings = AsyncMock(return_value=[
        reconcile_booking(make_booking(
            surgery_date=today,
            payments=[make_payment(100000, "p1", card="4", occurred_at=today)]
        ))
    ])
    app.dependency_overrides[get_booking_service] = lambda: service
    return service


def test_dashboard(client, receptionist, booking_service):
    response = client.get("/api/v1/reports/dashboard")

    assert response.status_code == 200
    data = response.json()
    assert data["total_patients_today"] == 1
    assert data["pending_settlement_today"] == 1
    assert data["total_payments_today"] == 100000


def test_summary_defaults_to_last_week(client, receptionist, booking_service):
    response = client.get("/api/v1/reports/summary?card_id=4")

    assert response.status_code == 200
    data = response.json()
    assert data["end_date"] == date.today().isoformat()
    assert data["start_date"] == (date.today() - timedelta(days=7)).isoformat()
    assert data["card_totals"] == [
        {"card_id": "4", "masked_number": "6219 **** **** 7989", "holder": "محمد مظاهری", "total": 100000}
    ]
    filters = booking_service.list_bookings.await_args.args[0]
    assert filters.card_id == "4"


def test_export(client, receptionist, booking_service):
    response = client.get("/api/v1/reports/export.xlsx")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    ws = load_workbook(BytesIO(response.content)).active
    assert ws.max_row == 2

from datetime import date, datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from app.core.auth import get_current_user
from app.db.mongo import get_db
from app.main import app
from app.models.booking import Booking
from app.models.money import Money
from app.models.payment import PaymentRecord
from app.models.user import UserResponse, UserRole

VALID_NATIONAL_CODE = "0499370899"


@pytest.fixture
def mock_db():
    """Motor database double; every collection is the same MagicMock."""
    db = MagicMock()
    collection = MagicMock()
    collection.insert_one = AsyncMock()
    collection.find_one = AsyncMock(return_value=None)
    collection.find_one_and_update = AsyncMock(return_value=None)
    collection.delete_one = AsyncMock()
    collection.count_documents = AsyncMock(return_value=0)
    db.__getitem__.return_value = collection
    return db


@pytest.fixture
def client(mock_db):
    """
    TestClient without the lifespan context, so no MongoDB connection
    is opened. Tests override the auth dependency as needed.
    """
    app.dependency_overrides[get_db] = lambda: mock_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def _user(role: UserRole) -> UserResponse:
    now = datetime.now(timezone.utc)
    return UserResponse(
        id="507f1f77bcf86cd799439011",
        username=f"{role.value}1",
        full_name="Test User",
        role=role,
        created_at=now,
        updated_at=now
    )


@pytest.fixture
def receptionist():
    user = _user(UserRole.RECEPTIONIST)
    app.dependency_overrides[get_current_user] = lambda: user
    return user


@pytest.fixture
def admin_user():
    user = _user(UserRole.ADMIN)
    app.dependency_overrides[get_current_user] = lambda: user
    return user


@pytest.fixture
def doctor_user():
    user = _user(UserRole.DOCTOR)
    app.dependency_overrides[get_current_user] = lambda: user
    return user


@pytest.fixture
def make_payment():
    def _make(amount: int, payment_id: str = None, card: str = "1", occurred_at: date = None):
        fields = {
            "amount": Money(amount),
            "method_reference": card,
            "occurred_at": occurred_at or date(2024, 3, 20),
        }
        if payment_id:
            fields["id"] = payment_id
        return PaymentRecord(**fields)
    return _make


@pytest.fixture
def make_booking(make_payment):
    def _make(price: int = 160000, payments=(), **overrides):
        fields = {
            "id": "65f0c0ffee0000000000b001",
            "full_name": "سارا احمدی",
            "national_code": VALID_NATIONAL_CODE,
            "phone": "09121234567",
            "surgery_type": "1",
            "procedure_price": Money(price),
            "surgery_date": date(2024, 3, 20),
            "surgery_time": "09:00",
            "doctor": "1",
            "consultant": "1",
            "clinic": "1",
            "payments": list(payments),
        }
        fields.update(overrides)
        return Booking(**fields)
    return _make

import pytest
from datetime import date
from pydantic import ValidationError
from unittest.mock import AsyncMock, MagicMock

from app.models.ledger import PaymentStatus
from app.models.money import Money
from app.schemas.booking import BookingCreate, BookingUpdate
from app.schemas.payment import PaymentCreate
from app.services.booking_service import BookingService
from app.services.reconciliation import SnapshotBroadcaster
from app.utils.booking_validation import BookingValidationError
from app.utils.ledger_validation import BookingNotFound, InvalidAmount

SURGERY_DAY = date(2024, 3, 20)


def _repository(booked=None, stored=None):
    repository = MagicMock()
    repository.create_booking = AsyncMock(side_effect=lambda b: b)
    repository.booked_slots = AsyncMock(return_value=booked or [])
    repository.get_booking = AsyncMock(return_value=stored)
    repository.update_details = AsyncMock()
    repository.delete_booking = AsyncMock(return_value=True)
    return repository


def _create(**overrides):
    fields = {
        "full_name": " سارا احمدی ",
        "national_code": "0499370899",
        "phone": "0912 123 4567",
        "surgery_type": "1",
        "surgery_date": SURGERY_DAY,
        "surgery_time": "09:00",
        "doctor": "1",
        "consultant": "1",
        "clinic": "1",
    }
    fields.update(overrides)
    return BookingCreate(**fields)


@pytest.mark.asyncio
async def test_create_uses_catalog_price_and_normalizes_fields():
    repository = _repository()
    service = BookingService(repository)

    booking = await service.create_booking(_create(), created_by="u1")

    assert booking.procedure_price == Money(16000000)
    assert booking.status == PaymentStatus.PENDING
    assert booking.full_name == "سارا احمدی"
    assert booking.phone == "09121234567"
    assert booking.created_by == "u1"
    repository.create_booking.assert_awaited_once()


@pytest.mark.asyncio
async def test_create_with_initial_deposits_broadcasts_snapshot():
    repository = _repository()
    broadcaster = SnapshotBroadcaster()
    queue = broadcaster.subscribe()
    service = BookingService(repository, broadcaster)

    booking = await service.create_booking(_create(
        procedure_price=160000,
        payments=[
            PaymentCreate(amount=100000, method_reference="4"),
            PaymentCreate(amount=60000, method_reference="5"),
        ]
    ))

    assert booking.total_paid == Money(160000)
    assert booking.remaining_balance == Money.zero()
    assert booking.status == PaymentStatus.PAID
    assert len(booking.payments) == 2
    assert queue.get_nowait().booking_id == booking.id


@pytest.mark.asyncio
async def test_create_rejects_non_positive_deposit_before_storing():
    repository = _repository()
    service = BookingService(repository)

    with pytest.raises(InvalidAmount):
        await service.create_booking(_create(
            payments=[PaymentCreate(amount=0, method_reference="1")]
        ))

    repository.create_booking.assert_not_awaited()


@pytest.mark.asyncio
@pytest.mark.parametrize("overrides", [
    {"national_code": "1234567890"},
    {"phone": "0912"},
    {"surgery_type": "99"},
    {"doctor": "99"},
    {"clinic": "99"},
    {"surgery_time": "09:10"},
])
async def test_create_rejects_invalid_input(overrides):
    repository = _repository()
    service = BookingService(repository)

    with pytest.raises(BookingValidationError):
        await service.create_booking(_create(**overrides))

    repository.create_booking.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_rejects_taken_slot():
    service = BookingService(_repository(booked=["09:00"]))

    with pytest.raises(BookingValidationError, match="already booked"):
        await service.create_booking(_create())


@pytest.mark.asyncio
async def test_create_rejects_full_clinic():
    booked = [f"slot-{i}" for i in range(35)]
    service = BookingService(_repository(booked=booked))

    with pytest.raises(BookingValidationError, match="capacity"):
        await service.create_booking(_create())


@pytest.mark.asyncio
async def test_get_missing_booking_raises():
    service = BookingService(_repository(stored=None))

    with pytest.raises(BookingNotFound):
        await service.get_booking("missing")


@pytest.mark.asyncio
async def test_update_rechecks_schedule_excluding_itself(make_booking):
    stored = make_booking(version=2)
    repository = _repository(stored=stored)
    repository.update_details.return_value = stored
    service = BookingService(repository)

    await service.update_booking(stored.id, BookingUpdate(surgery_time="10:00", version=2))

    repository.booked_slots.assert_awaited_once_with("1", stored.surgery_date, stored.id)
    args = repository.update_details.await_args.args
    assert args[0] == stored.id
    assert args[1] == {"surgery_time": "10:00"}
    assert args[2] == 2


@pytest.mark.asyncio
async def test_update_version_conflict(make_booking):
    stored = make_booking(version=3)
    repository = _repository(stored=stored)
    repository.update_details.return_value = None
    service = BookingService(repository)

    with pytest.raises(BookingValidationError, match="Version conflict"):
        await service.update_booking(stored.id, BookingUpdate(notes="x", version=1))

    repository.booked_slots.assert_not_awaited()


@pytest.mark.asyncio
async def test_delete_missing_booking_raises():
    repository = _repository()
    repository.delete_booking.return_value = False

    with pytest.raises(BookingNotFound):
        await BookingService(repository).delete_booking("missing")


@pytest.mark.asyncio
async def test_slot_availability():
    service = BookingService(_repository(booked=["09:00", "08:00"]))

    availability = await service.slot_availability("1", SURGERY_DAY)

    assert availability.booked == ["08:00", "09:00"]
    assert "08:00" not in availability.available
    assert "08:30" in availability.available
    assert availability.capacity == 35
    assert len(availability.available) == 30


@pytest.mark.asyncio
async def test_slot_availability_unknown_clinic():
    with pytest.raises(BookingValidationError):
        await BookingService(_repository()).slot_availability("99", SURGERY_DAY)


@pytest.mark.parametrize("field", ["full_name", "phone", "surgery_date", "surgery_time", "documents"])
def test_update_schema_rejects_null(field):
    with pytest.raises(ValidationError):
        BookingUpdate(**{field: None, "version": 1})


@pytest.mark.asyncio
async def test_update_clearing_notes_keeps_other_fields(make_booking):
    stored = make_booking(notes="call back")
    repository = _repository(stored=stored)
    repository.update_details.return_value = stored
    service = BookingService(repository)

    await service.update_booking(stored.id, BookingUpdate(notes=None, version=1))

    assert repository.update_details.await_args.args[1] == {"notes": None}
    repository.booked_slots.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_rejects_blank_name(make_booking):
    repository = _repository(stored=make_booking())

    with pytest.raises(BookingValidationError, match="blank"):
        await BookingService(repository).update_booking(
            "b1", BookingUpdate(full_name="   ", version=1)
        )

    repository.update_details.assert_not_awaited()

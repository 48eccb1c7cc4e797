import logging
from fastapi import APIRouter, Depends, HTTPException, Query, WebSocket, WebSocketDisconnect, status
from fastapi.responses import JSONResponse

from app.core.auth import get_current_user, require_staff_editor, user_from_token
from app.db.mongo import get_db
from app.models.money import Money
from app.models.user import UserResponse
from app.repositories.booking_repo import BookingRepository
from app.schemas.ledger import DeliveryWarningResponse, LedgerSnapshotResponse
from app.schemas.payment import PaymentCreate, PriceUpdate
from app.services.ledger_service import LedgerService
from app.services.reconciliation import MongoReconciliationNotifier, snapshot_broadcaster
from app.utils.ledger_validation import (
    BookingNotFound,
    DuplicateId,
    InvalidAmount,
    NotFound,
    NotificationDeliveryFailed,
    VersionConflict,
    validate_procedure_price,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def get_ledger_service(db = Depends(get_db)) -> LedgerService:
    repository = BookingRepository(db)
    return LedgerService(repository, MongoReconciliationNotifier(repository, snapshot_broadcaster))


def _delivery_warning(failure: NotificationDeliveryFailed) -> JSONResponse:
    body = DeliveryWarningResponse(
        snapshot=LedgerSnapshotResponse.from_snapshot(failure.snapshot),
        warning=(
            f"Change is valid but was not saved: {failure.reason}. "
            "Resubmit the same request, with the payment id from this snapshot, to retry."
        )
    )
    return JSONResponse(
        status_code=status.HTTP_202_ACCEPTED,
        content=body.model_dump(mode="json")
    )


async def _run(mutation):
    """Await a ledger mutation and translate ledger errors to HTTP."""
    try:
        snapshot = await mutation
    except BookingNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")
    except NotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    except InvalidAmount as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    except DuplicateId as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    except VersionConflict:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Booking was modified concurrently. Reload and retry."
        )
    except NotificationDeliveryFailed as failure:
        return _delivery_warning(failure)
    return LedgerSnapshotResponse.from_snapshot(snapshot)


@router.get("/bookings/{booking_id}/ledger", response_model=LedgerSnapshotResponse)
async def get_ledger(
    booking_id: str,
    current_user: UserResponse = Depends(get_current_user),
    service: LedgerService = Depends(get_ledger_service)
):
    """Current balance, status and deposits of a booking."""
    return await _run(service.get_snapshot(booking_id))


@router.post(
    "/bookings/{booking_id}/payments",
    response_model=LedgerSnapshotResponse,
    status_code=status.HTTP_201_CREATED,
    responses={202: {"model": DeliveryWarningResponse}}
)
async def add_payment(
    booking_id: str,
    payment_in: PaymentCreate,
    current_user: UserResponse = Depends(get_current_user),
    service: LedgerService = Depends(get_ledger_service)
):
    """Record a deposit against a booking."""
    try:
        record = payment_in.to_record()
    except InvalidAmount as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    return await _run(service.add_payment(booking_id, record))


@router.delete(
    "/bookings/{booking_id}/payments/{payment_id}",
    response_model=LedgerSnapshotResponse,
    responses={202: {"model": DeliveryWarningResponse}}
)
async def remove_payment(
    booking_id: str,
    payment_id: str,
    current_user: UserResponse = Depends(require_staff_editor),
    service: LedgerService = Depends(get_ledger_service)
):
    """Delete a deposit permanently."""
    return await _run(service.remove_payment(booking_id, payment_id))


@router.put(
    "/bookings/{booking_id}/price",
    response_model=LedgerSnapshotResponse,
    responses={202: {"model": DeliveryWarningResponse}}
)
async def set_price(
    booking_id: str,
    price_in: PriceUpdate,
    current_user: UserResponse = Depends(require_staff_editor),
    service: LedgerService = Depends(get_ledger_service)
):
    try:
        new_price = Money(price_in.procedure_price)
        validate_procedure_price(new_price)
    except InvalidAmount as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    return await _run(service.set_procedure_price(booking_id, new_price))


@router.websocket("/ledger/stream")
async def ledger_stream(websocket: WebSocket, token: str = Query(...), db = Depends(get_db)):
    """Push every ledger snapshot to the connected client."""
    user = await user_from_token(token, db)
    if user is None:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.accept()
    queue = snapshot_broadcaster.subscribe()
    logger.info("Ledger stream opened for user %s", user.id)
    try:
        while True:
            snapshot = await queue.get()
            await websocket.send_json(
                LedgerSnapshotResponse.from_snapshot(snapshot).model_dump(mode="json")
            )
    except WebSocketDisconnect:
        logger.info("Ledger stream closed for user %s", user.id)
    finally:
        snapshot_broadcaster.unsubscribe(queue)

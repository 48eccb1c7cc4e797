"""
Reconciliation - delivers ledger snapshots to persistence and realtime
subscribers after every mutation.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Optional, Set

from pymongo.errors import PyMongoError

from app.core.config import settings
from app.models.booking import Booking
from app.models.ledger import BookingSnapshot
from app.repositories.booking_repo import BookingRepository
from app.utils.ledger_validation import NotificationDeliveryFailed, VersionConflict

logger = logging.getLogger(__name__)


class ReconciliationNotifier(ABC):
    """Receives exactly one snapshot per successful ledger mutation."""

    @abstractmethod
    async def emit(
        self,
        snapshot: BookingSnapshot,
        expected_version: Optional[int] = None
    ) -> None:
        """Deliver the snapshot or raise NotificationDeliveryFailed."""


class SnapshotBroadcaster:
    """In-process fan-out of snapshots to realtime subscribers."""

    def __init__(self, queue_size: int = None):
        self.queue_size = queue_size or settings.STREAM_QUEUE_SIZE
        self._subscribers: Set[asyncio.Queue] = set()

    def subscribe(self) -> asyncio.Queue:
        queue: asyncio.Queue = asyncio.Queue(maxsize=self.queue_size)
        self._subscribers.add(queue)
        return queue

    def unsubscribe(self, queue: asyncio.Queue) -> None:
        self._subscribers.discard(queue)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def publish(self, snapshot: BookingSnapshot) -> None:
        for queue in list(self._subscribers):
            try:
                queue.put_nowait(snapshot)
            except asyncio.QueueFull:
                logger.warning(
                    "Realtime subscriber queue full; dropped snapshot for booking %s",
                    snapshot.booking_id
                )


snapshot_broadcaster = SnapshotBroadcaster()


class MongoReconciliationNotifier(ReconciliationNotifier):
    """
    Mirrors snapshots onto the booking document, then broadcasts them.

    Delivery is idempotent: re-sending a snapshot that is already stored
    succeeds without another write.
    """

    def __init__(
        self,
        repository: BookingRepository,
        broadcaster: Optional[SnapshotBroadcaster] = None
    ):
        self.repository = repository
        self.broadcaster = broadcaster

    async def emit(
        self,
        snapshot: BookingSnapshot,
        expected_version: Optional[int] = None
    ) -> None:
        try:
            updated = await self.repository.apply_snapshot(snapshot, expected_version)
            if updated is None:
                await self._check_already_applied(snapshot, expected_version)
        except PyMongoError as exc:
            logger.error("Persisting booking %s failed: %s", snapshot.booking_id, exc)
            raise NotificationDeliveryFailed(snapshot, str(exc), expected_version) from exc

        if self.broadcaster is not None:
            self.broadcaster.publish(snapshot)

    async def _check_already_applied(
        self,
        snapshot: BookingSnapshot,
        expected_version: Optional[int]
    ) -> None:
        current = await self.repository.get_booking(snapshot.booking_id)
        if current is None:
            raise NotificationDeliveryFailed(
                snapshot, "booking no longer exists", expected_version
            )
        if _matches(current, snapshot):
            logger.info("Snapshot for booking %s already applied", snapshot.booking_id)
            return
        logger.warning(
            "Version conflict on booking %s: expected %s, found %s",
            snapshot.booking_id, expected_version, current.version
        )
        raise VersionConflict(
            snapshot,
            f"expected version {expected_version}, found {current.version}",
            expected_version
        )


def _matches(booking: Booking, snapshot: BookingSnapshot) -> bool:
    stored = [(p.id, p.amount) for p in booking.payments]
    wanted = [(p.id, p.amount) for p in snapshot.payments]
    return booking.procedure_price == snapshot.procedure_price and stored == wanted

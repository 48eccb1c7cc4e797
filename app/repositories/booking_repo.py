"""
BookingRepository - bookings with their embedded payment ledger.

Ledger writes are version-checked: a snapshot is applied only if the
stored version still matches the one the ledger was loaded from, which
serializes concurrent edits of the same booking across processes.
"""

import re
from datetime import date, datetime, timezone
from typing import List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from app.models.booking import Booking
from app.models.ledger import BookingSnapshot
from app.schemas.booking import BookingFilter


class BookingRepository:
    """Repository for bookings."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["bookings"]

    async def create_booking(self, booking: Booking) -> Booking:
        await self.collection.insert_one(booking.to_document())
        return booking

    async def get_booking(self, booking_id: str) -> Optional[Booking]:
        doc = await self.collection.find_one({"_id": booking_id})
        if doc:
            return Booking(**doc)
        return None

    async def list_bookings(self, filters: Optional[BookingFilter] = None) -> List[Booking]:
        """List bookings ordered by surgery date then time."""
        query = self._build_query(filters or BookingFilter())
        cursor = self.collection.find(query).sort([("surgery_date", 1), ("surgery_time", 1)])
        docs = await cursor.to_list(None)
        return [Booking(**doc) for doc in docs]

    async def update_details(
        self,
        booking_id: str,
        updates: dict,
        expected_version: int
    ) -> Optional[Booking]:
        """
        Update non-ledger fields with an optimistic version check.

        Returns None if the booking is missing or the version moved on.
        """
        updates["updated_at"] = datetime.now(timezone.utc).isoformat()
        result = await self.collection.find_one_and_update(
            {"_id": booking_id, "version": expected_version},
            {"$set": updates, "$inc": {"version": 1}},
            return_document=True
        )
        if result:
            return Booking(**result)
        return None

    async def delete_booking(self, booking_id: str) -> bool:
        """Hard delete; the embedded payments go with the booking."""
        result = await self.collection.delete_one({"_id": booking_id})
        return result.deleted_count > 0

    async def apply_snapshot(
        self,
        snapshot: BookingSnapshot,
        expected_version: Optional[int] = None
    ) -> Optional[Booking]:
        """
        Mirror a ledger snapshot onto the booking document.

        The whole payment set is replaced, so a payment missing from the
        snapshot is hard-deleted. Returns None when the version check fails
        or the booking does not exist.
        """
        query = {"_id": snapshot.booking_id}
        if expected_version is not None:
            query["version"] = expected_version

        data = snapshot.model_dump(mode="json")
        result = await self.collection.find_one_and_update(
            query,
            {
                "$set": {
                    "procedure_price": data["procedure_price"],
                    "payments": data["payments"],
                    "total_paid": data["total_paid"],
                    "remaining_balance": data["remaining_balance"],
                    "status": data["status"],
                    "updated_at": datetime.now(timezone.utc).isoformat()
                },
                "$inc": {"version": 1}
            },
            return_document=True
        )
        if result:
            return Booking(**result)
        return None

    async def booked_slots(
        self,
        clinic: str,
        surgery_date: date,
        exclude_booking_id: Optional[str] = None
    ) -> List[str]:
        """Time slots already taken at a clinic on a day."""
        query = {"clinic": clinic, "surgery_date": surgery_date.isoformat()}
        if exclude_booking_id:
            query["_id"] = {"$ne": exclude_booking_id}
        docs = await self.collection.find(query, {"surgery_time": 1}).to_list(None)
        return [doc["surgery_time"] for doc in docs if doc.get("surgery_time")]

    # ===== PRIVATE HELPERS =====

    def _build_query(self, filters: BookingFilter) -> dict:
        query: dict = {}

        date_range = {}
        if filters.start_date:
            date_range["$gte"] = filters.start_date.isoformat()
        if filters.end_date:
            date_range["$lte"] = filters.end_date.isoformat()
        if date_range:
            query["surgery_date"] = date_range

        for field in ("doctor", "clinic", "consultant", "surgery_type"):
            value = getattr(filters, field)
            if value:
                query[field] = value

        if filters.status:
            query["status"] = filters.status.value

        if filters.card_id:
            query["payments.method_reference"] = filters.card_id

        if filters.search:
            pattern = re.escape(filters.search.strip())
            query["$or"] = [
                {"full_name": {"$regex": pattern, "$options": "i"}},
                {"national_code": {"$regex": pattern}}
            ]

        return query

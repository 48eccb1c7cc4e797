from datetime import datetime, timezone

from bson import ObjectId
from pydantic import BaseModel, Field, ConfigDict


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_object_id() -> str:
    return str(ObjectId())


class MongoModel(BaseModel):
    id: str = Field(default_factory=new_object_id, alias="_id")
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    model_config = ConfigDict(
        populate_by_name=True,
        from_attributes=True
    )

    def to_document(self) -> dict:
        """Dump to a MongoDB document (string ids, ISO dates, integer money)."""
        return self.model_dump(mode="json", by_alias=True)

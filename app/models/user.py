from pydantic import BaseModel, Field, ConfigDict
from datetime import datetime
from enum import Enum
from typing import Optional
from bson import ObjectId


class UserRole(str, Enum):
    ADMIN = "admin"
    RECEPTIONIST = "receptionist"
    CONSULTANT = "consultant"
    DOCTOR = "doctor"


class UserBase(BaseModel):
    """Base user schema."""
    username: str = Field(..., min_length=3, max_length=50)
    full_name: str = Field(..., min_length=1, max_length=100)
    role: UserRole = UserRole.RECEPTIONIST

class UserCreate(UserBase):
    """User creation schema."""
    password: str = Field(..., min_length=6)

class UserResponse(UserBase):
    """User response schema."""
    id: str = Field(validation_alias="_id", serialization_alias="id")
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(
        populate_by_name=True,
        from_attributes=True
    )

    @property
    def can_edit_all_bookings(self) -> bool:
        return self.role in (UserRole.ADMIN, UserRole.RECEPTIONIST)

class UserInDB(BaseModel):
    """User database schema."""
    id: ObjectId = Field(alias="_id")
    username: str
    full_name: str
    role: UserRole
    password_hash: str
    is_deleted: bool = False
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(
        populate_by_name=True,
        from_attributes=True,
        arbitrary_types_allowed=True
    )

    def to_response(self) -> UserResponse:
        return UserResponse(
            id=str(self.id),
            username=self.username,
            full_name=self.full_name,
            role=self.role,
            created_at=self.created_at,
            updated_at=self.updated_at
        )

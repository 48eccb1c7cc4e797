from motor.motor_asyncio import AsyncIOMotorDatabase
from bson import ObjectId
from datetime import datetime, timezone
from typing import List
from app.models.user import UserCreate, UserInDB
from app.core.security import hash_password

class UserRepository:
    """User database operations."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["users"]

    async def create_user(self, user_data: UserCreate) -> UserInDB:
        """Create a new staff user."""
        user_dict = {
            "username": user_data.username.lower(),
            "full_name": user_data.full_name,
            "role": user_data.role.value,
            "password_hash": hash_password(user_data.password),
            "is_deleted": False,
            "created_at": datetime.now(timezone.utc),
            "updated_at": datetime.now(timezone.utc)
        }

        result = await self.collection.insert_one(user_dict)
        user_dict["_id"] = result.inserted_id
        return UserInDB(**user_dict)

    async def get_user_by_username(self, username: str) -> UserInDB | None:
        """Get user by username."""
        user = await self.collection.find_one({"username": username.lower(), "is_deleted": False})
        if user:
            return UserInDB(**user)
        return None

    async def get_user_by_id(self, user_id: str) -> UserInDB | None:
        """Get user by ID."""
        if not ObjectId.is_valid(user_id):
            return None
        user = await self.collection.find_one({
            "_id": ObjectId(user_id),
            "is_deleted": False
        })
        if user:
            return UserInDB(**user)
        return None

    async def list_users(self) -> List[UserInDB]:
        docs = await self.collection.find({"is_deleted": False}).sort("username", 1).to_list(None)
        return [UserInDB(**doc) for doc in docs]

    async def count_users(self) -> int:
        return await self.collection.count_documents({})

    async def soft_delete_user(self, user_id: str) -> bool:
        """Soft delete user."""
        if not ObjectId.is_valid(user_id):
            return False
        result = await self.collection.update_one(
            {"_id": ObjectId(user_id), "is_deleted": False},
            {"$set": {
                "is_deleted": True,
                "updated_at": datetime.now(timezone.utc)
            }}
        )
        return result.modified_count > 0

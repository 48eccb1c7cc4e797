import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from app.core.config import settings

logger = logging.getLogger(__name__)

class MongoDatabase:
    """MongoDB connection manager."""

    client: AsyncIOMotorClient = None
    db: AsyncIOMotorDatabase = None

mongodb = MongoDatabase()

async def connect_to_mongo():
    """Connect to MongoDB."""
    mongodb.client = AsyncIOMotorClient(settings.MONGODB_URL)
    mongodb.db = mongodb.client[settings.DATABASE_NAME]

    # Create indexes
    await create_indexes()
    logger.info("Connected to MongoDB: %s", settings.DATABASE_NAME)

async def close_mongo_connection():
    """Disconnect from MongoDB."""
    if mongodb.client is not None:
        mongodb.client.close()
    logger.info("Disconnected from MongoDB")

async def create_indexes():
    """Create database indexes."""
    # Username unique index
    await mongodb.db["users"].create_index("username", unique=True)

    # Booking indexes
    await mongodb.db["bookings"].create_index([("surgery_date", 1), ("surgery_time", 1)])
    await mongodb.db["bookings"].create_index([("clinic", 1), ("surgery_date", 1)])
    await mongodb.db["bookings"].create_index("national_code")
    await mongodb.db["bookings"].create_index("status")
    await mongodb.db["bookings"].create_index("payments.method_reference")

def get_db() -> AsyncIOMotorDatabase:
    """Get database instance."""
    return mongodb.db

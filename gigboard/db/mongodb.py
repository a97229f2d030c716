from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING
from gigboard.core.config import settings
import logging

logger = logging.getLogger(__name__)

class Database:
    client: AsyncIOMotorClient = None
    db = None

db = Database()

async def connect_to_mongo():
    """Connect to MongoDB."""
    try:
        logger.info("Connecting to MongoDB...")
        db.client = AsyncIOMotorClient(settings.MONGO_URI)
        db.db = db.client[settings.DB_NAME]
        logger.info("Connected to MongoDB.")

        # Create indexes for collections
        await create_indexes()

    except Exception as e:
        logger.error(f"Could not connect to MongoDB: {e}")
        raise e

async def close_mongo_connection():
    """Close MongoDB connection."""
    if db.client:
        logger.info("Closing MongoDB connection...")
        db.client.close()
        logger.info("MongoDB connection closed.")

async def get_database():
    """Get MongoDB database instance."""
    return db.db

async def create_indexes():
    """Create indexes for collections."""
    try:
        # Profiles live in the users collection, keyed by uid
        await db.db.users.create_index("uid", unique=True)
        await db.db.users.create_index("email", unique=True)
        await db.db.users.create_index([("role", ASCENDING), ("createdAt", ASCENDING)])

        # Events are listed by status, newest first; applications are looked up per event and musician
        await db.db.events.create_index([("status", ASCENDING), ("createdAt", ASCENDING)])
        await db.db.events.create_index("createdBy")
        await db.db.applications.create_index([("eventId", ASCENDING), ("musicianId", ASCENDING)], unique=True)

        logger.info("MongoDB indexes created successfully.")
    except Exception as e:
        logger.error(f"Failed to create MongoDB indexes: {e}")

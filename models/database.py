"""Database models and connection setup."""

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING
from typing import Optional
from config.settings import settings
from utils.logger import setup_logger

logger = setup_logger(__name__)

# Collection names
PROFILES = "profiles"
DIET_PLANS = "diet_plans"
MEAL_LOGS = "meal_logs"
EXERCISE_LOGS = "exercise_logs"
WEIGHT_LOGS = "weight_logs"
TRAINING_PLANS = "training_plans"
AUTH_IDENTITIES = "auth_identities"
REVOKED_TOKENS = "revoked_tokens"


class Database:
    """Database connection manager."""

    client: Optional[AsyncIOMotorClient] = None


db = Database()


async def connect_to_mongo():
    """Create database connection."""
    db.client = AsyncIOMotorClient(settings.mongodb_url)
    logger.info(f"Connected to MongoDB database: {settings.mongodb_database}")


async def close_mongo_connection():
    """Close database connection."""
    if db.client:
        db.client.close()
        db.client = None
        logger.info("Disconnected from MongoDB")


async def init_mongo():
    """Initialize MongoDB connection and all collections with indexes."""
    await connect_to_mongo()

    database = get_database()

    # Profiles: roster lookups filter on trainer_id and order by creation
    await database[PROFILES].create_index([("trainer_id", ASCENDING), ("created_at", DESCENDING)])

    # Per-client logs and plans, ordered on their own timestamp
    await database[DIET_PLANS].create_index([("client_id", ASCENDING), ("created_at", DESCENDING)])
    await database[MEAL_LOGS].create_index([("client_id", ASCENDING), ("meal_time", DESCENDING)])
    await database[EXERCISE_LOGS].create_index([("client_id", ASCENDING), ("exercise_time", DESCENDING)])
    await database[WEIGHT_LOGS].create_index([("client_id", ASCENDING), ("measured_at", DESCENDING)])
    await database[TRAINING_PLANS].create_index([("client_id", ASCENDING), ("created_at", DESCENDING)])

    # Auth collaborator
    await database[AUTH_IDENTITIES].create_index([("email", ASCENDING)], unique=True)

    logger.info("MongoDB initialized: All collections created with indexes")


def get_database() -> AsyncIOMotorDatabase:
    """Get database instance."""
    if db.client is None:
        raise RuntimeError("MongoDB client is not connected")
    return db.client[settings.mongodb_database]

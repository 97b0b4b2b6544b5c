from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase, AsyncIOMotorCollection
from pymongo import ASCENDING, IndexModel
from typing import Optional
import time

from app.core.config import settings
from app.core.logging_config import logger

# Lazy client initialization - create on first use to avoid import-time issues
_client: Optional[AsyncIOMotorClient] = None


def get_client() -> AsyncIOMotorClient:
    """Get or create the MongoDB client (lazy initialization)"""
    global _client
    if _client is None:
        if not settings.MONGODB_URI:
            raise RuntimeError("MONGODB_URI environment variable is not defined")
        _client = AsyncIOMotorClient(
            settings.MONGODB_URI,
            tz_aware=True,
            serverSelectionTimeoutMS=settings.MONGO_SERVER_SELECTION_TIMEOUT_MS,
            appname=settings.APP_NAME,
        )
    return _client


def get_database() -> AsyncIOMotorDatabase:
    """Get the application database"""
    return get_client()[settings.DB_NAME]


# Dependency to get the pitch deck collection
async def get_pitch_deck_collection() -> AsyncIOMotorCollection:
    """Get the pitch deck collection"""
    return get_database()[settings.PITCH_DECK_COLLECTION]


PITCH_DECK_INDEXES = [
    IndexModel([("shareId", ASCENDING)], unique=True, name="shareId_unique"),
    # TTL index: documents are removed once expiresAt has passed
    IndexModel([("expiresAt", ASCENDING)], expireAfterSeconds=0, name="expiresAt_ttl"),
    IndexModel([("isPublic", ASCENDING)], name="isPublic"),
    IndexModel([("shareId", ASCENDING), ("isPublic", ASCENDING)], name="shareId_isPublic"),
]


async def ensure_indexes(collection=None) -> None:
    """Create the pitch deck indexes (idempotent)"""
    if collection is None:
        collection = await get_pitch_deck_collection()
    start = time.perf_counter()
    names = await collection.create_indexes(PITCH_DECK_INDEXES)
    logger.log_db_operation(
        "create_indexes",
        settings.PITCH_DECK_COLLECTION,
        (time.perf_counter() - start) * 1000,
        documents_affected=0,
        indexes=names,
    )


async def ping_database() -> float:
    """Ping the server and return round-trip latency in milliseconds"""
    start = time.perf_counter()
    await get_database().command("ping")
    return (time.perf_counter() - start) * 1000


async def connect_db() -> None:
    """Connect, verify the server is reachable and create indexes"""
    latency = await ping_database()
    logger.info(f"[Startup] Connected to MongoDB database '{settings.DB_NAME}' ({latency:.1f}ms)")
    await ensure_indexes()
    logger.info("[Startup] Pitch deck indexes ready")


async def close_db() -> None:
    """Close database connection"""
    global _client
    if _client is not None:
        _client.close()
        _client = None
        logger.info("MongoDB connection closed")

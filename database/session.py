"""
Async MongoDB client for the application.

A single ``AsyncIOMotorClient`` is created lazily and shared by every
request; ``close_client`` is called on shutdown.
"""

from __future__ import annotations

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING
from pymongo.errors import OperationFailure

from config.settings import config
from database.models import USERS_COLLECTION

logger = logging.getLogger(__name__)

_DUPLICATE_KEY = 11000

_client: Optional[AsyncIOMotorClient] = None


def get_client() -> AsyncIOMotorClient:
    """Return the process-wide client, creating it on first use."""
    global _client
    if _client is None:
        _client = AsyncIOMotorClient(
            config.mongodb_uri,
            serverSelectionTimeoutMS=config.mongodb_timeout_ms,
        )
    return _client


def get_database() -> AsyncIOMotorDatabase:
    """Dependency function — use in FastAPI `Depends(get_database)`."""
    return get_client()[config.mongodb_db]


async def ensure_indexes(db: AsyncIOMotorDatabase) -> None:
    """Create the indexes the application relies on (idempotent)."""
    try:
        await db[USERS_COLLECTION].create_index(
            [("email", ASCENDING)], unique=True, name="uniq_email"
        )
    except OperationFailure as exc:
        if exc.code == _DUPLICATE_KEY:
            logger.error(
                "Cannot create unique email index on %s.%s: the collection already "
                "holds duplicate emails. Remove the duplicates and restart. (%s)",
                db.name, USERS_COLLECTION, exc,
            )
        raise
    logger.info("Ensured unique email index on %s.%s", db.name, USERS_COLLECTION)


def close_client() -> None:
    global _client
    if _client is not None:
        _client.close()  # Motor client's close() is not async
        _client = None

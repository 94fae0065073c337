"""
Collection-level data access.

Each repository wraps one Motor collection and exposes exactly the queries
the routes need. Driver faults other than duplicate keys are logged and
re-raised as ``StoreUnavailable`` so no driver detail reaches the client.
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, TypeVar

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import ValidationError
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import DuplicateKeyError, PyMongoError

from database.models import (
    SUPPLIES_COLLECTION,
    TOP_PROVIDERS_COLLECTION,
    USERS_COLLECTION,
    SupplyRecord,
    UserRecord,
)
from utils.errors import DuplicateUser, InvalidObjectId, StoreUnavailable, SupplyNotFound

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _store_call(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> T:
        try:
            return await func(*args, **kwargs)
        except DuplicateKeyError:
            raise
        except PyMongoError as exc:
            logger.error("Document store call %s failed: %s", func.__qualname__, exc)
            raise StoreUnavailable() from exc

    return wrapper


def _to_object_id(value: str) -> ObjectId:
    if not ObjectId.is_valid(value):
        raise InvalidObjectId()
    return ObjectId(value)


def _serialize(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Render ``_id`` as a hex string so the document is JSON-safe."""
    if "_id" in doc:
        doc["_id"] = str(doc["_id"])
    return doc


def _parse_sort(sort: str) -> tuple[str, int]:
    if sort.startswith("-"):
        return sort[1:], DESCENDING
    return sort, ASCENDING


class UserRepository:
    """Credential store keyed by email."""

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self.collection = db[USERS_COLLECTION]

    @_store_call
    async def find_by_email(self, email: str) -> Optional[UserRecord]:
        doc = await self.collection.find_one({"email": email})
        if doc is None:
            return None
        try:
            return UserRecord.model_validate(doc)
        except ValidationError:
            # An unreadable row can never authenticate; treat it as unknown.
            logger.warning("Ignoring malformed user document %s", doc.get("_id"))
            return None

    async def insert(self, user: UserRecord) -> None:
        """
        Insert a new user.

        Relies on the unique ``email`` index: a conflicting insert raises
        ``DuplicateUser`` and leaves the collection untouched.
        """
        try:
            await self._insert_one(user.to_document())
        except DuplicateKeyError as exc:
            raise DuplicateUser() from exc

    @_store_call
    async def _insert_one(self, doc: Dict[str, Any]) -> None:
        await self.collection.insert_one(doc)


class SupplyRepository:
    """Queries over the ``supplies`` collection."""

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self.collection = db[SUPPLIES_COLLECTION]

    @_store_call
    async def list(
        self,
        category: Optional[str] = None,
        sort: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        query = {"category": category} if category is not None else {}
        cursor = self.collection.find(query)
        if sort:
            cursor = cursor.sort(*_parse_sort(sort))
        if limit:
            cursor = cursor.limit(limit)
        docs = await cursor.to_list(length=None)
        return [_serialize(doc) for doc in docs]

    async def top(self, limit: int = 6) -> List[Dict[str, Any]]:
        """Largest supplies by amount."""
        return await self.list(sort="-amount", limit=limit)

    @_store_call
    async def get(self, supply_id: str) -> Dict[str, Any]:
        doc = await self.collection.find_one({"_id": _to_object_id(supply_id)})
        if doc is None:
            raise SupplyNotFound()
        return _serialize(doc)

    @_store_call
    async def create(self, supply: SupplyRecord) -> Dict[str, Any]:
        result = await self.collection.insert_one(supply.to_document())
        return {"acknowledged": result.acknowledged, "insertedId": str(result.inserted_id)}

    @_store_call
    async def update(self, supply_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        """``$set`` the given fields on one supply."""
        result = await self.collection.update_one(
            {"_id": _to_object_id(supply_id)},
            {"$set": fields},
        )
        return {
            "acknowledged": result.acknowledged,
            "matchedCount": result.matched_count,
            "modifiedCount": result.modified_count,
        }

    @_store_call
    async def delete(self, supply_id: str) -> Dict[str, Any]:
        result = await self.collection.delete_one({"_id": _to_object_id(supply_id)})
        return {"acknowledged": result.acknowledged, "deletedCount": result.deleted_count}

    @_store_call
    async def categories(self) -> List[str]:
        return await self.collection.distinct("category")

    @_store_call
    async def category_stats(self, limit: int = 6) -> List[Dict[str, Any]]:
        """Per-category supply count and total amount, busiest categories first."""
        pipeline = [
            {
                "$group": {
                    "_id": "$category",
                    "count": {"$sum": 1},
                    "totalAmount": {"$sum": "$amount"},
                }
            },
            {"$sort": {"count": -1, "_id": 1}},
            {"$limit": limit},
        ]
        rows = await self.collection.aggregate(pipeline).to_list(length=None)
        return [
            {"category": row["_id"], "count": row["count"], "totalAmount": row["totalAmount"]}
            for row in rows
        ]


class TopProviderRepository:
    """Read-only access to ``topProviders``."""

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self.collection = db[TOP_PROVIDERS_COLLECTION]

    @_store_call
    async def list(self) -> List[Dict[str, Any]]:
        docs = await self.collection.find().to_list(length=None)
        return [_serialize(doc) for doc in docs]

"""
Shared fixtures: in-memory stand-ins for the Mongo repositories and a
``TestClient`` wired to them.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from api.dependencies import (
    get_password_hasher,
    get_token_issuer,
    supply_repository,
    top_provider_repository,
    user_repository,
)
from auth.jwt import TokenIssuer
from auth.password import PasswordHasher
from auth.service import AuthService
from database.models import SupplyRecord, UserRecord
from utils.errors import DuplicateUser, InvalidObjectId, SupplyNotFound

TEST_SECRET = "test-secret"
TEST_TTL = 3600


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class InMemoryUserStore:
    """Behaves like ``UserRepository`` backed by a unique email index."""

    def __init__(self) -> None:
        self.docs: Dict[str, Dict[str, Any]] = {}

    async def find_by_email(self, email: str) -> Optional[UserRecord]:
        doc = self.docs.get(email)
        return UserRecord.model_validate(doc) if doc else None

    async def insert(self, user: UserRecord) -> None:
        if user.email in self.docs:
            raise DuplicateUser()
        self.docs[user.email] = user.to_document()


class InMemorySupplyStore:
    def __init__(self) -> None:
        self.docs: Dict[str, Dict[str, Any]] = {}

    def add(self, **fields: Any) -> str:
        supply_id = str(ObjectId())
        self.docs[supply_id] = {"_id": supply_id, **fields}
        return supply_id

    def _check(self, supply_id: str) -> None:
        if not ObjectId.is_valid(supply_id):
            raise InvalidObjectId()

    async def list(self, category=None, sort=None, limit=None) -> List[Dict[str, Any]]:
        docs = [dict(d) for d in self.docs.values()]
        if category is not None:
            docs = [d for d in docs if d.get("category") == category]
        if sort:
            key = sort.lstrip("-")
            docs.sort(key=lambda d: d[key], reverse=sort.startswith("-"))
        return docs[:limit] if limit else docs

    async def top(self, limit: int = 6) -> List[Dict[str, Any]]:
        return await self.list(sort="-amount", limit=limit)

    async def get(self, supply_id: str) -> Dict[str, Any]:
        self._check(supply_id)
        if supply_id not in self.docs:
            raise SupplyNotFound()
        return dict(self.docs[supply_id])

    async def create(self, supply: SupplyRecord) -> Dict[str, Any]:
        supply_id = self.add(**supply.to_document())
        return {"acknowledged": True, "insertedId": supply_id}

    async def update(self, supply_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        self._check(supply_id)
        doc = self.docs.get(supply_id)
        if doc is None:
            return {"acknowledged": True, "matchedCount": 0, "modifiedCount": 0}
        changed = any(doc.get(k) != v for k, v in fields.items())
        doc.update(fields)
        return {"acknowledged": True, "matchedCount": 1, "modifiedCount": int(changed)}

    async def delete(self, supply_id: str) -> Dict[str, Any]:
        self._check(supply_id)
        deleted = self.docs.pop(supply_id, None) is not None
        return {"acknowledged": True, "deletedCount": int(deleted)}

    async def categories(self) -> List[str]:
        return sorted({d["category"] for d in self.docs.values()})

    async def category_stats(self, limit: int = 6) -> List[Dict[str, Any]]:
        stats: Dict[str, Dict[str, Any]] = {}
        for doc in self.docs.values():
            row = stats.setdefault(
                doc["category"], {"category": doc["category"], "count": 0, "totalAmount": 0}
            )
            row["count"] += 1
            row["totalAmount"] += doc["amount"]
        rows = sorted(stats.values(), key=lambda r: (-r["count"], r["category"]))
        return rows[:limit]


class InMemoryTopProviderStore:
    def __init__(self, docs: List[Dict[str, Any]] | None = None) -> None:
        self.docs = docs or []

    async def list(self) -> List[Dict[str, Any]]:
        return list(self.docs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def hasher() -> PasswordHasher:
    # Minimum bcrypt cost keeps the suite fast.
    return PasswordHasher(rounds=4)


@pytest.fixture
def tokens(clock: FakeClock) -> TokenIssuer:
    return TokenIssuer(TEST_SECRET, TEST_TTL, clock=clock)


@pytest.fixture
def user_store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def supply_store() -> InMemorySupplyStore:
    return InMemorySupplyStore()


@pytest.fixture
def provider_store() -> InMemoryTopProviderStore:
    return InMemoryTopProviderStore(
        [{"_id": str(ObjectId()), "name": "Red Cross", "quote": "Always on time."}]
    )


@pytest.fixture
def auth_service(user_store, hasher, tokens) -> AuthService:
    return AuthService(user_store, hasher, tokens)


@pytest.fixture
def client(user_store, supply_store, provider_store, hasher, tokens):
    from main import app

    app.dependency_overrides[user_repository] = lambda: user_store
    app.dependency_overrides[supply_repository] = lambda: supply_store
    app.dependency_overrides[top_provider_repository] = lambda: provider_store
    app.dependency_overrides[get_password_hasher] = lambda: hasher
    app.dependency_overrides[get_token_issuer] = lambda: tokens
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()

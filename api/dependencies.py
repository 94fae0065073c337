"""
FastAPI dependencies (shared across routes).
"""

from __future__ import annotations

from fastapi import Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from auth.jwt import TokenIssuer
from auth.password import PasswordHasher
from auth.service import AuthService
from config.settings import config
from database.repositories import SupplyRepository, TopProviderRepository, UserRepository
from database.session import get_database


def user_repository(db: AsyncIOMotorDatabase = Depends(get_database)) -> UserRepository:
    return UserRepository(db)


def supply_repository(db: AsyncIOMotorDatabase = Depends(get_database)) -> SupplyRepository:
    return SupplyRepository(db)


def top_provider_repository(
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> TopProviderRepository:
    return TopProviderRepository(db)


def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=config.bcrypt_rounds)


def get_token_issuer() -> TokenIssuer:
    return TokenIssuer(config.jwt_secret, config.jwt_expiry_seconds)


def get_auth_service(
    users: UserRepository = Depends(user_repository),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> AuthService:
    """Build an ``AuthService`` wired to the configured store and secrets."""
    return AuthService(users, hasher, tokens)

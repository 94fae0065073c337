"""
Registration and login orchestration.

``AuthService`` holds no state of its own; the credential store, hasher and
token issuer are passed in so tests can swap any of them.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from starlette.concurrency import run_in_threadpool

from auth.jwt import TokenIssuer
from auth.password import PasswordHasher
from database.models import UserRecord
from utils.errors import InvalidCredentials

logger = logging.getLogger(__name__)


class CredentialStore(Protocol):
    async def find_by_email(self, email: str) -> Optional[UserRecord]: ...

    async def insert(self, user: UserRecord) -> None: ...


class AuthService:
    def __init__(
        self,
        users: CredentialStore,
        hasher: PasswordHasher,
        tokens: TokenIssuer,
    ) -> None:
        self.users = users
        self.hasher = hasher
        self.tokens = tokens

    async def register(self, name: str, email: str, password: str) -> UserRecord:
        """
        Store a new user with a hashed password.

        Raises ``DuplicateUser`` (from the store) if the email is taken.
        """
        # bcrypt is CPU-bound; keep it off the event loop.
        digest = await run_in_threadpool(self.hasher.hash, password)
        user = UserRecord(name=name, email=email, password_hash=digest)
        await self.users.insert(user)
        logger.info("Registered user %s", email)
        return user

    async def login(self, email: str, password: str) -> str:
        """
        Check credentials and return a fresh bearer token.

        Unknown email and wrong password raise the same ``InvalidCredentials``.
        """
        user = await self.users.find_by_email(email)
        verified = user is not None and await run_in_threadpool(
            self.hasher.verify, password, user.password_hash
        )
        if not verified:
            logger.info("Failed login for %s", email)
            raise InvalidCredentials()

        token = self.tokens.issue(user.email)
        logger.info("Login: %s", user.email)
        return token

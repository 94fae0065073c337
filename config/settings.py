"""
Application settings loaded from environment variables.
"""

import re
from typing import Any

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings

# "3600", "90s", "15m", "1h", "1d", "2w"
_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhdw]?)\s*$", re.IGNORECASE)
_UNIT_SECONDS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400, "w": 604800}


class Settings(BaseSettings):
    # ── Database ─────────────────────────────────────────────────────────
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "assignment-6"
    mongodb_timeout_ms: int = 5000     # serverSelectionTimeoutMS for the driver

    # ── Security Secrets ──────────────────────────────────────────────────
    jwt_secret: str = "change-me-jwt-secret-key"       # HMAC secret for auth tokens
    jwt_expiry_seconds: int = Field(                    # token TTL; EXPIRES_IN also accepted
        3600,
        validation_alias=AliasChoices("jwt_expiry_seconds", "expires_in"),
    )
    bcrypt_rounds: int = 10                             # bcrypt work factor

    # ── Server ───────────────────────────────────────────────────────────
    port: int = 5000
    host: str = "0.0.0.0"
    debug: bool = False
    cors_origins: list = ["http://localhost:3000"]

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @field_validator("jwt_expiry_seconds", mode="before")
    @classmethod
    def parse_duration(cls, value: Any) -> Any:
        """Accept plain seconds or a ``<n><unit>`` duration such as ``1h`` or ``7d``."""
        if isinstance(value, str):
            match = _DURATION_RE.match(value)
            if match is None:
                raise ValueError(f"invalid duration: {value!r}")
            amount, unit = match.groups()
            return int(amount) * _UNIT_SECONDS[unit.lower()]
        return value


config = Settings()

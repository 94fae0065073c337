"""
Pydantic request / response schemas for the HTTP API.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


# ═══════════════════════════════════════════════════════════════════════════════
# Auth
# ═══════════════════════════════════════════════════════════════════════════════


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=128)
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class LoginRequest(BaseModel):
    email: str
    password: str


class RegisterResponse(BaseModel):
    success: bool = True
    message: str = "User registered successfully"


class LoginResponse(BaseModel):
    success: bool = True
    message: str = "Login successful"
    token: str


# ═══════════════════════════════════════════════════════════════════════════════
# Supplies
# ═══════════════════════════════════════════════════════════════════════════════


class SupplyCreate(BaseModel):
    """New supply post. Fields beyond the three below are stored as given."""

    title: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    amount: Union[int, float] = Field(..., ge=0)

    model_config = ConfigDict(extra="allow")


class SupplyUpdate(BaseModel):
    """Fields settable through ``PUT /update-supply/{id}``; omitted ones stay untouched."""

    title: Optional[str] = None
    category: Optional[str] = None
    amount: Optional[Union[int, float]] = Field(None, ge=0)

    @model_validator(mode="after")
    def require_a_field(self) -> "SupplyUpdate":
        if self.title is None and self.category is None and self.amount is None:
            raise ValueError("at least one of title, category, amount is required")
        return self


class InsertResult(BaseModel):
    acknowledged: bool
    insertedId: str


class UpdateResult(BaseModel):
    acknowledged: bool
    matchedCount: int
    modifiedCount: int


class DeleteResult(BaseModel):
    acknowledged: bool
    deletedCount: int


class CategoryStat(BaseModel):
    category: Optional[str] = None
    count: int
    totalAmount: float


# ═══════════════════════════════════════════════════════════════════════════════
# Misc
# ═══════════════════════════════════════════════════════════════════════════════


class HealthResponse(BaseModel):
    message: str = "Server is running smoothly"
    timestamp: datetime

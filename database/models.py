"""
Document models for the MongoDB collections.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

USERS_COLLECTION = "users"
SUPPLIES_COLLECTION = "supplies"
TOP_PROVIDERS_COLLECTION = "topProviders"


class UserRecord(BaseModel):
    """A row of the ``users`` collection.

    The bcrypt digest is stored under ``password`` to keep the document shape
    the frontend and existing data already use. Older rows may carry ``null``
    for either field; a ``null`` digest simply never verifies.
    """

    name: Optional[str] = None
    email: str
    password_hash: Optional[str] = Field(None, alias="password")

    model_config = ConfigDict(populate_by_name=True)

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class SupplyRecord(BaseModel):
    """A row of the ``supplies`` collection; extra fields are kept as given."""

    title: str
    category: str
    amount: Union[int, float]

    model_config = ConfigDict(extra="allow")

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump()

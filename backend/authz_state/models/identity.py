"""
Identity and schema version models for privilege documents.
"""
from enum import IntEnum
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field

# Stored privilege records are opaque to the adapter
PrivilegeDocument = dict[str, Any]
WriteConcern = Mapping[str, Any]


class AuthzVersion(IntEnum):
    """Privilege document schema versions."""
    V1 = 1  # per-database <db>.system.users
    V2 = 2  # centralized admin.system.users


class Identity(BaseModel):
    """
    A principal: a user name scoped to the database it was defined on.
    """
    model_config = ConfigDict(frozen=True)

    user: str = Field(..., description="User name")
    db: str = Field(..., description="Source database of the user")

    @property
    def full_name(self) -> str:
        return f"{self.user}@{self.db}"

    def __str__(self) -> str:
        return self.full_name

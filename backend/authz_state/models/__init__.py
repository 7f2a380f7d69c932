"""
Pydantic models and type aliases for privilege documents.
"""
from authz_state.models.identity import (
    AuthzVersion,
    Identity,
    PrivilegeDocument,
    WriteConcern,
)

__all__ = [
    "AuthzVersion",
    "Identity",
    "PrivilegeDocument",
    "WriteConcern",
]

"""
Service layer: identity resolution and privilege document access.
"""
from typing import Optional

from authz_state.config import Settings, get_settings
from authz_state.database.connections import get_mongo_client
from authz_state.database.store import MongoDocumentStore
from authz_state.services.external_state import AuthzExternalState
from authz_state.services.query_resolver import resolve_privilege_query


def build_external_state(settings: Optional[Settings] = None) -> AuthzExternalState:
    """Wire the adapter to the configured MongoDB deployment."""
    settings = settings or get_settings()
    store = MongoDocumentStore(get_mongo_client(settings))
    return AuthzExternalState(store, settings.internal_identity)


__all__ = [
    "AuthzExternalState",
    "build_external_state",
    "resolve_privilege_query",
]

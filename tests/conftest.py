"""
Global test fixtures for the authorization external state adapter.

This module provides shared fixtures for all tests including:
- Mock MongoDB (mongomock)
- Identity factories
- Privilege document factories
"""

import sys
from pathlib import Path

import pytest

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from authz_state.models.identity import Identity  # noqa: E402


# =============================================================================
# MongoDB Fixtures (mongomock)
# =============================================================================

@pytest.fixture
def mock_mongo_client():
    """
    Create a mock MongoDB client using mongomock.

    This provides an in-memory MongoDB that behaves like the real thing
    for testing purposes.
    """
    import mongomock
    client = mongomock.MongoClient()
    yield client
    client.close()


# =============================================================================
# Identity Fixtures
# =============================================================================

@pytest.fixture
def internal_identity() -> Identity:
    """The reserved system identity."""
    return Identity(user="__system", db="local")


@pytest.fixture
def alice() -> Identity:
    """A regular user defined on db1."""
    return Identity(user="alice", db="db1")


@pytest.fixture
def bob() -> Identity:
    """A regular user defined on db2."""
    return Identity(user="bob", db="db2")


# =============================================================================
# Privilege Document Fixtures
# =============================================================================

def make_privilege_document(identity: Identity, roles: list[dict] | None = None) -> dict:
    """
    Build a V2 privilege document for an identity.

    Args:
        identity: Owner of the document
        roles: Role grants (defaults to read on the source database)

    Returns:
        Privilege document as stored in admin.system.users
    """
    if roles is None:
        roles = [{"role": "read", "db": identity.db}]
    return {
        "user": identity.user,
        "source": identity.db,
        "credentials": {"MONGODB-CR": "0123456789abcdef"},
        "roles": roles,
    }


@pytest.fixture
def privilege_document_factory():
    """Expose make_privilege_document to tests."""
    return make_privilege_document


@pytest.fixture
def alice_document(alice) -> dict:
    """Privilege document for alice@db1."""
    return make_privilege_document(alice)


@pytest.fixture
def bob_document(bob) -> dict:
    """Privilege document for bob@db2."""
    return make_privilege_document(bob, roles=[{"role": "readWrite", "db": "db2"}])

"""
Backend-specific test fixtures and configuration.

These fixtures extend the global fixtures with store doubles for testing
the adapter without a MongoDB deployment.
"""

import copy
import sys
from pathlib import Path
from typing import Any, Optional
from unittest.mock import MagicMock

import pytest

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "backend"))

from authz_state.core.errors import AuthzError, ErrorCode  # noqa: E402
from authz_state.core.namespace import Namespace, is_valid_db_name  # noqa: E402
from authz_state.database.store import DocumentStore  # noqa: E402
from authz_state.services.external_state import AuthzExternalState  # noqa: E402


# =============================================================================
# In-memory Store
# =============================================================================

def _matches(document: dict, query: dict) -> bool:
    # Equality only; a None value also matches a missing field
    return all(document.get(key) == value for key, value in query.items())


class MemoryDocumentStore:
    """
    Dictionary-backed DocumentStore.

    Enforces uniqueness of (user, source) in admin.system.users like the
    index created by create_indexes.
    """

    def __init__(self):
        self.collections: dict[str, list[dict]] = {}
        self.indexes: list[tuple[str, list[str], bool]] = []

    def _docs(self, namespace: Namespace) -> list[dict]:
        return self.collections.setdefault(str(namespace), [])

    def find_one(self, namespace: Namespace, query: dict[str, Any]) -> Optional[dict]:
        for document in self._docs(namespace):
            if _matches(document, query):
                return document
        return None

    def find(self, namespace: Namespace, query: dict[str, Any]) -> list[dict]:
        return [d for d in self._docs(namespace) if _matches(d, query)]

    def insert(self, namespace, document, write_concern=None) -> None:
        docs = self._docs(namespace)
        if str(namespace) == "admin.system.users":
            key = {"user": document.get("user"), "source": document.get("source")}
            if any(_matches(existing, key) for existing in docs):
                raise AuthzError(
                    ErrorCode.DUPLICATE_KEY,
                    "E11000 duplicate key error index: admin.system.users.$user_1_source_1",
                )
        docs.append(copy.deepcopy(document))

    def update(self, namespace, query, update_pattern, upsert, multi, write_concern=None) -> int:
        matched = [d for d in self._docs(namespace) if _matches(d, query)]
        if not multi:
            matched = matched[:1]
        for document in matched:
            document.update(update_pattern.get("$set", {}))
        if not matched and upsert:
            document = dict(query)
            document.update(update_pattern.get("$set", {}))
            self._docs(namespace).append(document)
            return 1
        return len(matched)

    def remove(self, namespace, query, write_concern=None) -> int:
        docs = self._docs(namespace)
        kept = [d for d in docs if not _matches(d, query)]
        removed = len(docs) - len(kept)
        docs[:] = kept
        return removed

    def is_valid_db_name(self, name: str) -> bool:
        return is_valid_db_name(name)

    def list_database_names(self) -> list[str]:
        return sorted({ns.split(".", 1)[0] for ns, docs in self.collections.items() if docs})

    def create_index(self, namespace, keys, unique=False) -> None:
        self.indexes.append((str(namespace), list(keys), unique))


# =============================================================================
# Store Fixtures
# =============================================================================

@pytest.fixture
def memory_store() -> MemoryDocumentStore:
    """Empty in-memory store."""
    return MemoryDocumentStore()


@pytest.fixture
def mock_store() -> MagicMock:
    """
    Fully mocked store.

    is_valid_db_name applies the real naming rules; every other primitive
    is a MagicMock to configure per test:

        mock_store.update.return_value = 2
    """
    store = MagicMock(spec=DocumentStore)
    store.is_valid_db_name.side_effect = is_valid_db_name
    return store


# =============================================================================
# Adapter Fixtures
# =============================================================================

@pytest.fixture
def external_state(memory_store, internal_identity) -> AuthzExternalState:
    """Adapter over the in-memory store."""
    return AuthzExternalState(memory_store, internal_identity)


@pytest.fixture
def mocked_external_state(mock_store, internal_identity) -> AuthzExternalState:
    """Adapter over the fully mocked store."""
    return AuthzExternalState(mock_store, internal_identity)

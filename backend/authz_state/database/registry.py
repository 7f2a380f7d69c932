"""
Index bootstrap for privilege document collections.
The unique index on (user, source) is what lets the store reject a second
privilege document for the same identity.
"""
import logging

from authz_state.core.namespace import Namespace
from authz_state.database.databases import admin_db
from authz_state.database.store import DocumentStore

logger = logging.getLogger(__name__)

# All database manifests
ALL_DB_MANIFESTS = [
    admin_db.DB_MANIFEST,
]


def create_indexes(store: DocumentStore) -> None:
    """Create the unique indexes declared by every manifest."""
    for manifest in ALL_DB_MANIFESTS:
        db_name = manifest["db_name"]
        for collection, keys in manifest["unique_keys"].items():
            namespace = Namespace(db=db_name, collection=collection)
            store.create_index(namespace, keys, unique=True)
            logger.info(f"Ensured unique index {keys} on {namespace}")

"""
Database module - MongoDB connection, store collaborator and collection definitions.
"""
from authz_state.database.connections import (
    get_mongo_client,
    close_connections,
    get_database,
)
from authz_state.database.databases import admin_db
from authz_state.database.store import DocumentStore, MongoDocumentStore

__all__ = [
    "get_mongo_client",
    "close_connections",
    "get_database",
    "admin_db",
    "DocumentStore",
    "MongoDocumentStore",
]

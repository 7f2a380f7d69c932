"""
Database connection management for MongoDB.
"""
import logging
from typing import Optional

from pymongo import MongoClient
from pymongo.database import Database

from authz_state.config import Settings, get_settings

logger = logging.getLogger(__name__)

# Global connection instance
_mongo_client: Optional[MongoClient] = None


def get_mongo_client(settings: Optional[Settings] = None) -> MongoClient:
    """Get or create MongoDB client."""
    global _mongo_client
    if _mongo_client is None:
        settings = settings or get_settings()
        _mongo_client = MongoClient(settings.mongo_uri)
        logger.info("Created MongoDB client")
    return _mongo_client


def close_connections() -> None:
    """Close the MongoDB connection."""
    global _mongo_client

    if _mongo_client is not None:
        _mongo_client.close()
        _mongo_client = None
        logger.info("Disconnected")


def get_database(db_name: str) -> Database:
    """Get a specific MongoDB database by name."""
    client = get_mongo_client()
    return client[db_name]

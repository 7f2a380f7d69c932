"""
Privilege store bootstrap.

Ensures the unique privilege document indexes exist and reports whether any
user has been defined yet.

Usage:
    python -m authz_state

Environment Variables:
    MONGO_URI: MongoDB connection string
    LOG_LEVEL: Logging level (default: INFO)
"""
import logging
import sys

from authz_state.config import get_settings
from authz_state.core.errors import AuthzError
from authz_state.core.logging import setup_logging
from authz_state.database.connections import close_connections
from authz_state.database.registry import create_indexes
from authz_state.services import build_external_state

logger = logging.getLogger("authz_state")


def main() -> int:
    settings = get_settings()
    setup_logging(settings.log_level)

    state = build_external_state(settings)
    try:
        create_indexes(state.store)
        if state.has_any_privilege_documents():
            logger.info("Privilege documents present")
        else:
            logger.info("No privilege documents defined yet")
    except AuthzError as e:
        logger.error(f"Bootstrap failed: {e}")
        return 1
    finally:
        close_connections()
    return 0


if __name__ == "__main__":
    sys.exit(main())

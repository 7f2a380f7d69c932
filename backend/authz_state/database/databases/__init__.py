"""
Database definitions and collection constants.
"""
from authz_state.database.databases import admin_db

__all__ = ["admin_db"]

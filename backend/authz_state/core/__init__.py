"""
Core utilities: error codes, namespaces and logging.
"""
from authz_state.core.errors import AuthzError, ErrorCode, InvariantViolation
from authz_state.core.namespace import Namespace, is_valid_db_name

__all__ = [
    "AuthzError",
    "ErrorCode",
    "InvariantViolation",
    "Namespace",
    "is_valid_db_name",
]

"""
Authorization external state: privilege document access over MongoDB.
"""
from authz_state.core.errors import AuthzError, ErrorCode, InvariantViolation
from authz_state.models.identity import AuthzVersion, Identity
from authz_state.services import AuthzExternalState, build_external_state

__version__ = "0.1.0"

__all__ = [
    "AuthzError",
    "AuthzExternalState",
    "AuthzVersion",
    "ErrorCode",
    "Identity",
    "InvariantViolation",
    "build_external_state",
]

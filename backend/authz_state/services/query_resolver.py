"""
Resolution of an identity to the namespace and query of its privilege document.
"""
from typing import Any, Callable

from authz_state.core.errors import AuthzError, ErrorCode
from authz_state.core.namespace import Namespace
from authz_state.database.databases import admin_db
from authz_state.models.identity import AuthzVersion, Identity

V2_USERS_NAMESPACE = Namespace.parse(admin_db.USERS_NAMESPACE)


def v1_users_namespace(db_name: str) -> Namespace:
    """Per-database users collection of the V1 schema."""
    return Namespace(db=db_name, collection=admin_db.Collections.USERS)


def resolve_privilege_query(
    identity: Identity,
    version: int,
    *,
    internal_identity: Identity,
    is_valid_db_name: Callable[[str], bool],
) -> tuple[Namespace, dict[str, Any]]:
    """
    Build the namespace and query locating an identity's privilege document.

    Args:
        identity: Principal to look up
        version: Privilege document schema version (1 or 2)
        internal_identity: Reserved system identity that must never resolve
        is_valid_db_name: Database name check of the store

    Returns:
        (namespace, query) tuple

    Raises:
        AuthzError: INTERNAL_ERROR for the internal identity, BAD_VALUE for an
            invalid database name, UNSUPPORTED_FORMAT for an unknown version
    """
    if identity == internal_identity:
        raise AuthzError(
            ErrorCode.INTERNAL_ERROR,
            "Requested privilege document for the internal user",
        )

    db_name = identity.db
    if not is_valid_db_name(db_name):
        raise AuthzError(ErrorCode.BAD_VALUE, f'Bad database name "{db_name}"')

    if version == AuthzVersion.V1:
        return v1_users_namespace(db_name), {
            admin_db.Fields.V1_USER: identity.user,
            admin_db.Fields.V1_SOURCE: None,
        }
    if version == AuthzVersion.V2:
        return V2_USERS_NAMESPACE, {
            admin_db.Fields.USER: identity.user,
            admin_db.Fields.SOURCE: identity.db,
        }

    raise AuthzError(
        ErrorCode.UNSUPPORTED_FORMAT,
        f"Unrecognized authorization format version: {version}",
    )

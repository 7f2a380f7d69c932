"""
Authorization external state: privilege document access for the auth layer.
"""
import copy
import logging
from typing import Any, Optional

from authz_state.core.errors import (
    INSERT_ERRORS,
    REMOVE_ERRORS,
    UPDATE_ERRORS,
    AuthzError,
    ErrorCode,
    InvariantViolation,
    translate,
)
from authz_state.core.namespace import Namespace
from authz_state.database.databases import admin_db
from authz_state.database.store import DocumentStore
from authz_state.models.identity import (
    Identity,
    PrivilegeDocument,
    WriteConcern,
)
from authz_state.services.query_resolver import (
    V2_USERS_NAMESPACE,
    resolve_privilege_query,
    v1_users_namespace,
)

logger = logging.getLogger(__name__)


class AuthzExternalState:
    """Reads and writes privilege documents through a document store."""

    def __init__(self, store: DocumentStore, internal_identity: Identity):
        """
        Initialize with a store collaborator.

        Args:
            store: Backing document store
            internal_identity: Reserved system identity, never resolved here
        """
        self.store = store
        self.internal_identity = internal_identity

    # ==================== Lookups ====================

    def find_privilege_document(self, identity: Identity, version: int) -> PrivilegeDocument:
        """
        Fetch the privilege document of an identity.

        Args:
            identity: Principal to look up
            version: Privilege document schema version

        Returns:
            A copy of the stored document

        Raises:
            AuthzError: USER_NOT_FOUND when no document matches; resolver and
                other store errors unchanged
        """
        namespace, query = resolve_privilege_query(
            identity,
            version,
            internal_identity=self.internal_identity,
            is_valid_db_name=self.store.is_valid_db_name,
        )

        document = self.store.find_one(namespace, query)
        if document is None:
            logger.debug(f"No privilege document for {identity} in {namespace}")
            raise AuthzError(
                ErrorCode.USER_NOT_FOUND,
                f"auth: couldn't find user {identity}, {namespace}",
            )

        return copy.deepcopy(document)

    def has_any_privilege_documents(self) -> bool:
        """True if admin.system.users holds at least one document."""
        try:
            return self.store.find_one(V2_USERS_NAMESPACE, {}) is not None
        except AuthzError as e:
            logger.debug(f"Privilege document probe failed: {e}")
            return False

    def get_all_database_names(self) -> list[str]:
        return self.store.list_database_names()

    def get_all_v1_privilege_documents(self, db_name: str) -> list[PrivilegeDocument]:
        """
        List every V1 privilege document defined on a database.

        Raises:
            AuthzError: BAD_VALUE for an invalid database name
        """
        if not self.store.is_valid_db_name(db_name):
            raise AuthzError(ErrorCode.BAD_VALUE, f'Bad database name "{db_name}"')
        documents = self.store.find(v1_users_namespace(db_name), {})
        return [copy.deepcopy(document) for document in documents]

    # ==================== Mutations ====================

    def insert_privilege_document(
        self,
        document: PrivilegeDocument,
        write_concern: Optional[WriteConcern] = None,
    ) -> None:
        """
        Insert a new privilege document into admin.system.users.

        Raises:
            AuthzError: DUPLICATE_IDENTITY if the identity already has a
                document, IDENTITY_MODIFICATION_FAILED on an unknown store error
        """
        try:
            self.store.insert(V2_USERS_NAMESPACE, document, write_concern)
        except AuthzError as e:
            code = translate(INSERT_ERRORS, e)
            if code == ErrorCode.DUPLICATE_IDENTITY:
                name = document.get(admin_db.Fields.USER)
                source = document.get(admin_db.Fields.SOURCE)
                if name is None or source is None:
                    raise AuthzError(code, e.reason) from e
                raise AuthzError(code, f"{name}@{source} already exists") from e
            if code != e.code:
                logger.warning(f"Insert of privilege document failed: {e}")
                raise AuthzError(code, e.reason) from e
            raise

    def update_privilege_document(
        self,
        identity: Identity,
        update_pattern: dict[str, Any],
        write_concern: Optional[WriteConcern] = None,
    ) -> None:
        """
        Apply an update to the privilege document of one identity.

        Raises:
            AuthzError: USER_NOT_FOUND if the identity has no document,
                IDENTITY_MODIFICATION_FAILED on an unknown store error
        """
        query = {
            admin_db.Fields.USER: identity.user,
            admin_db.Fields.SOURCE: identity.db,
        }
        try:
            self.update_one(V2_USERS_NAMESPACE, query, update_pattern, False, write_concern)
        except AuthzError as e:
            code = translate(UPDATE_ERRORS, e)
            if code == ErrorCode.USER_NOT_FOUND:
                raise AuthzError(code, f"User {identity.full_name} not found") from e
            if code != e.code:
                logger.warning(f"Update of {identity} failed: {e}")
                raise AuthzError(code, e.reason) from e
            raise

    def remove_privilege_documents(
        self,
        query: dict[str, Any],
        write_concern: Optional[WriteConcern] = None,
    ) -> int:
        """
        Remove every privilege document matching a query.

        Returns:
            Number of documents removed

        Raises:
            AuthzError: IDENTITY_MODIFICATION_FAILED on an unknown store error
        """
        try:
            return self.store.remove(V2_USERS_NAMESPACE, query, write_concern)
        except AuthzError as e:
            code = translate(REMOVE_ERRORS, e)
            if code != e.code:
                logger.warning(f"Removal of privilege documents failed: {e}")
                raise AuthzError(code, e.reason) from e
            raise

    def update_one(
        self,
        namespace: Namespace,
        query: dict[str, Any],
        update_pattern: dict[str, Any],
        upsert: bool,
        write_concern: Optional[WriteConcern] = None,
    ) -> None:
        """
        Update at most one document.

        Raises:
            AuthzError: NO_MATCHING_DOCUMENT when nothing matched
            InvariantViolation: if the store reports more than one match
        """
        affected = self.store.update(
            namespace,
            query,
            update_pattern,
            upsert,
            False,
            write_concern,
        )
        if affected > 1:
            logger.error(
                f"Single-document update on {namespace} affected {affected} documents"
            )
            raise InvariantViolation(
                f"Expected at most one document updated in {namespace}, got {affected}"
            )
        if affected == 0:
            raise AuthzError(ErrorCode.NO_MATCHING_DOCUMENT, "No document found")

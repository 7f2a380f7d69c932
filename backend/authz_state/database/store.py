"""
Document store collaborator.

``DocumentStore`` is the contract the adapter consumes. ``MongoDocumentStore``
implements it on a synchronous pymongo client and reports every driver
failure as an ``AuthzError`` tagged with a store-level code.
"""
import logging
from typing import Any, Optional, Protocol, runtime_checkable

from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.errors import (
    ConnectionFailure,
    DuplicateKeyError,
    ExecutionTimeout,
    NetworkTimeout,
    OperationFailure,
    PyMongoError,
    WriteConcernError,
)
from pymongo.write_concern import WriteConcern as MongoWriteConcern

from authz_state.core.errors import AuthzError, ErrorCode
from authz_state.core.namespace import Namespace, is_valid_db_name
from authz_state.models.identity import PrivilegeDocument, WriteConcern

logger = logging.getLogger(__name__)

# Server code for "not authorized on <db> to execute command"
UNAUTHORIZED_CODE = 13


@runtime_checkable
class DocumentStore(Protocol):
    """Primitives the adapter needs from the backing document store."""

    def find_one(self, namespace: Namespace, query: dict[str, Any]) -> Optional[PrivilegeDocument]:
        ...

    def find(self, namespace: Namespace, query: dict[str, Any]) -> list[PrivilegeDocument]:
        ...

    def insert(
        self,
        namespace: Namespace,
        document: PrivilegeDocument,
        write_concern: Optional[WriteConcern],
    ) -> None:
        ...

    def update(
        self,
        namespace: Namespace,
        query: dict[str, Any],
        update_pattern: dict[str, Any],
        upsert: bool,
        multi: bool,
        write_concern: Optional[WriteConcern],
    ) -> int:
        ...

    def remove(
        self,
        namespace: Namespace,
        query: dict[str, Any],
        write_concern: Optional[WriteConcern],
    ) -> int:
        ...

    def is_valid_db_name(self, name: str) -> bool:
        ...

    def list_database_names(self) -> list[str]:
        ...

    def create_index(self, namespace: Namespace, keys: list[str], unique: bool = False) -> None:
        ...


def to_authz_error(exc: PyMongoError) -> AuthzError:
    """Map a pymongo exception onto a store error code."""
    if isinstance(exc, DuplicateKeyError):
        code = ErrorCode.DUPLICATE_KEY
    elif isinstance(exc, WriteConcernError):
        code = ErrorCode.WRITE_CONCERN_FAILED
    elif isinstance(exc, ExecutionTimeout):
        code = ErrorCode.EXCEEDED_TIME_LIMIT
    elif isinstance(exc, NetworkTimeout):
        code = ErrorCode.NETWORK_TIMEOUT
    elif isinstance(exc, ConnectionFailure):
        code = ErrorCode.HOST_UNREACHABLE
    elif isinstance(exc, OperationFailure) and exc.code == UNAUTHORIZED_CODE:
        code = ErrorCode.UNAUTHORIZED
    else:
        code = ErrorCode.UNKNOWN_ERROR
    return AuthzError(code, str(exc))


def _is_replacement(update_pattern: dict[str, Any]) -> bool:
    return not any(key.startswith("$") for key in update_pattern)


class MongoDocumentStore:
    """DocumentStore backed by a pymongo client."""

    def __init__(self, client: MongoClient):
        self.client = client

    def _collection(
        self,
        namespace: Namespace,
        write_concern: Optional[WriteConcern] = None,
    ) -> Collection:
        collection = self.client[namespace.db][namespace.collection]
        if write_concern:
            collection = collection.with_options(
                write_concern=MongoWriteConcern(**write_concern)
            )
        return collection

    def find_one(self, namespace: Namespace, query: dict[str, Any]) -> Optional[PrivilegeDocument]:
        try:
            return self._collection(namespace).find_one(query)
        except PyMongoError as e:
            logger.debug(f"find_one on {namespace} failed: {e}")
            raise to_authz_error(e) from e

    def find(self, namespace: Namespace, query: dict[str, Any]) -> list[PrivilegeDocument]:
        try:
            return list(self._collection(namespace).find(query))
        except PyMongoError as e:
            logger.debug(f"find on {namespace} failed: {e}")
            raise to_authz_error(e) from e

    def insert(
        self,
        namespace: Namespace,
        document: PrivilegeDocument,
        write_concern: Optional[WriteConcern] = None,
    ) -> None:
        # insert_one adds _id to the document it is given
        try:
            self._collection(namespace, write_concern).insert_one(dict(document))
        except PyMongoError as e:
            logger.debug(f"insert into {namespace} failed: {e}")
            raise to_authz_error(e) from e

    def update(
        self,
        namespace: Namespace,
        query: dict[str, Any],
        update_pattern: dict[str, Any],
        upsert: bool,
        multi: bool,
        write_concern: Optional[WriteConcern] = None,
    ) -> int:
        """
        Apply an update and return the number of documents it affected.

        A pattern without update operators replaces the matched document,
        which is only allowed for single-document updates.
        """
        try:
            collection = self._collection(namespace, write_concern)
            if multi:
                if _is_replacement(update_pattern):
                    raise AuthzError(
                        ErrorCode.BAD_VALUE,
                        "multi update requires update operators",
                    )
                result = collection.update_many(query, update_pattern, upsert=upsert)
            elif _is_replacement(update_pattern):
                result = collection.replace_one(query, update_pattern, upsert=upsert)
            else:
                result = collection.update_one(query, update_pattern, upsert=upsert)
        except PyMongoError as e:
            logger.debug(f"update on {namespace} failed: {e}")
            raise to_authz_error(e) from e

        affected = result.matched_count
        if result.upserted_id is not None:
            affected += 1
        return affected

    def remove(
        self,
        namespace: Namespace,
        query: dict[str, Any],
        write_concern: Optional[WriteConcern] = None,
    ) -> int:
        try:
            result = self._collection(namespace, write_concern).delete_many(query)
        except PyMongoError as e:
            logger.debug(f"remove from {namespace} failed: {e}")
            raise to_authz_error(e) from e
        return result.deleted_count

    def is_valid_db_name(self, name: str) -> bool:
        return is_valid_db_name(name)

    def list_database_names(self) -> list[str]:
        try:
            return self.client.list_database_names()
        except PyMongoError as e:
            raise to_authz_error(e) from e

    def create_index(self, namespace: Namespace, keys: list[str], unique: bool = False) -> None:
        try:
            self._collection(namespace).create_index(
                [(key, ASCENDING) for key in keys],
                unique=unique,
            )
        except PyMongoError as e:
            raise to_authz_error(e) from e

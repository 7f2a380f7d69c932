"""
Error codes raised by the adapter and the store collaborator.

Every failure surfaces as an ``AuthzError`` tagged with one ``ErrorCode``.
Mutations narrow a few store codes into identity-management codes through
the translation tables below; every other code passes through unchanged.
"""
from enum import Enum
from typing import Mapping


class ErrorCode(str, Enum):
    """Closed set of error kinds."""

    # Adapter / identity management
    INTERNAL_ERROR = "InternalError"
    BAD_VALUE = "BadValue"
    UNSUPPORTED_FORMAT = "UnsupportedFormat"
    USER_NOT_FOUND = "UserNotFound"
    DUPLICATE_IDENTITY = "DuplicateIdentity"
    IDENTITY_MODIFICATION_FAILED = "IdentityModificationFailed"
    NO_MATCHING_DOCUMENT = "NoMatchingDocument"

    # Document store
    DUPLICATE_KEY = "DuplicateKey"
    UNKNOWN_ERROR = "UnknownError"
    WRITE_CONCERN_FAILED = "WriteConcernFailed"
    NETWORK_TIMEOUT = "NetworkTimeout"
    HOST_UNREACHABLE = "HostUnreachable"
    UNAUTHORIZED = "Unauthorized"
    EXCEEDED_TIME_LIMIT = "ExceededTimeLimit"


class AuthzError(Exception):
    """Failure of an adapter or store operation."""

    def __init__(self, code: ErrorCode, reason: str):
        super().__init__(reason)
        self.code = code
        self.reason = reason

    def __str__(self) -> str:
        return f"{self.code.value}: {self.reason}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code.name}, {self.reason!r})"


class InvariantViolation(AuthzError):
    """The store broke a guarantee the adapter relies on."""

    def __init__(self, reason: str):
        super().__init__(ErrorCode.INTERNAL_ERROR, reason)


def _check_complete(name: str, table: Mapping[ErrorCode, ErrorCode]) -> None:
    missing = set(ErrorCode) - set(table)
    if missing:
        raise RuntimeError(
            f"{name} has no translation for {sorted(code.name for code in missing)}"
        )


# Every code needs an entry; adding an ErrorCode fails the import until
# each mutation decides how to report it.
INSERT_ERRORS = {
    ErrorCode.INTERNAL_ERROR: ErrorCode.INTERNAL_ERROR,
    ErrorCode.BAD_VALUE: ErrorCode.BAD_VALUE,
    ErrorCode.UNSUPPORTED_FORMAT: ErrorCode.UNSUPPORTED_FORMAT,
    ErrorCode.USER_NOT_FOUND: ErrorCode.USER_NOT_FOUND,
    ErrorCode.DUPLICATE_IDENTITY: ErrorCode.DUPLICATE_IDENTITY,
    ErrorCode.IDENTITY_MODIFICATION_FAILED: ErrorCode.IDENTITY_MODIFICATION_FAILED,
    ErrorCode.NO_MATCHING_DOCUMENT: ErrorCode.NO_MATCHING_DOCUMENT,
    ErrorCode.DUPLICATE_KEY: ErrorCode.DUPLICATE_IDENTITY,
    ErrorCode.UNKNOWN_ERROR: ErrorCode.IDENTITY_MODIFICATION_FAILED,
    ErrorCode.WRITE_CONCERN_FAILED: ErrorCode.WRITE_CONCERN_FAILED,
    ErrorCode.NETWORK_TIMEOUT: ErrorCode.NETWORK_TIMEOUT,
    ErrorCode.HOST_UNREACHABLE: ErrorCode.HOST_UNREACHABLE,
    ErrorCode.UNAUTHORIZED: ErrorCode.UNAUTHORIZED,
    ErrorCode.EXCEEDED_TIME_LIMIT: ErrorCode.EXCEEDED_TIME_LIMIT,
}

UPDATE_ERRORS = {
    ErrorCode.INTERNAL_ERROR: ErrorCode.INTERNAL_ERROR,
    ErrorCode.BAD_VALUE: ErrorCode.BAD_VALUE,
    ErrorCode.UNSUPPORTED_FORMAT: ErrorCode.UNSUPPORTED_FORMAT,
    ErrorCode.USER_NOT_FOUND: ErrorCode.USER_NOT_FOUND,
    ErrorCode.DUPLICATE_IDENTITY: ErrorCode.DUPLICATE_IDENTITY,
    ErrorCode.IDENTITY_MODIFICATION_FAILED: ErrorCode.IDENTITY_MODIFICATION_FAILED,
    ErrorCode.NO_MATCHING_DOCUMENT: ErrorCode.USER_NOT_FOUND,
    ErrorCode.DUPLICATE_KEY: ErrorCode.DUPLICATE_KEY,
    ErrorCode.UNKNOWN_ERROR: ErrorCode.IDENTITY_MODIFICATION_FAILED,
    ErrorCode.WRITE_CONCERN_FAILED: ErrorCode.WRITE_CONCERN_FAILED,
    ErrorCode.NETWORK_TIMEOUT: ErrorCode.NETWORK_TIMEOUT,
    ErrorCode.HOST_UNREACHABLE: ErrorCode.HOST_UNREACHABLE,
    ErrorCode.UNAUTHORIZED: ErrorCode.UNAUTHORIZED,
    ErrorCode.EXCEEDED_TIME_LIMIT: ErrorCode.EXCEEDED_TIME_LIMIT,
}

REMOVE_ERRORS = {
    ErrorCode.INTERNAL_ERROR: ErrorCode.INTERNAL_ERROR,
    ErrorCode.BAD_VALUE: ErrorCode.BAD_VALUE,
    ErrorCode.UNSUPPORTED_FORMAT: ErrorCode.UNSUPPORTED_FORMAT,
    ErrorCode.USER_NOT_FOUND: ErrorCode.USER_NOT_FOUND,
    ErrorCode.DUPLICATE_IDENTITY: ErrorCode.DUPLICATE_IDENTITY,
    ErrorCode.IDENTITY_MODIFICATION_FAILED: ErrorCode.IDENTITY_MODIFICATION_FAILED,
    ErrorCode.NO_MATCHING_DOCUMENT: ErrorCode.NO_MATCHING_DOCUMENT,
    ErrorCode.DUPLICATE_KEY: ErrorCode.DUPLICATE_KEY,
    ErrorCode.UNKNOWN_ERROR: ErrorCode.IDENTITY_MODIFICATION_FAILED,
    ErrorCode.WRITE_CONCERN_FAILED: ErrorCode.WRITE_CONCERN_FAILED,
    ErrorCode.NETWORK_TIMEOUT: ErrorCode.NETWORK_TIMEOUT,
    ErrorCode.HOST_UNREACHABLE: ErrorCode.HOST_UNREACHABLE,
    ErrorCode.UNAUTHORIZED: ErrorCode.UNAUTHORIZED,
    ErrorCode.EXCEEDED_TIME_LIMIT: ErrorCode.EXCEEDED_TIME_LIMIT,
}

for _name, _table in (
    ("INSERT_ERRORS", INSERT_ERRORS),
    ("UPDATE_ERRORS", UPDATE_ERRORS),
    ("REMOVE_ERRORS", REMOVE_ERRORS),
):
    _check_complete(_name, _table)


def translate(table: Mapping[ErrorCode, ErrorCode], error: AuthzError) -> ErrorCode:
    """Look up the code an error is reported under after a mutation."""
    return table[error.code]

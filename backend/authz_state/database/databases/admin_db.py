"""
Admin database configuration.
Stores privilege documents for every user in the V2 schema.
"""

DB_NAME = "admin"


class Collections:
    """Collection names holding privilege documents."""
    USERS = "system.users"


class Fields:
    """Privilege document field names per schema version."""
    USER = "user"
    SOURCE = "source"

    # V1 documents live in their own database and leave the source unset
    V1_USER = "user"
    V1_SOURCE = "userSource"


USERS_NAMESPACE = f"{DB_NAME}.{Collections.USERS}"


# Manifest for index bootstrap
DB_MANIFEST = {
    "db_name": DB_NAME,
    "purpose": "Centralized user privilege documents",
    "collections": [Collections.USERS],
    "unique_keys": {Collections.USERS: [Fields.USER, Fields.SOURCE]},
}

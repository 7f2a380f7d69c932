"""
Namespace handling: "<db>.<collection>" paths and database name rules.
"""
from pydantic import BaseModel, ConfigDict

MAX_DB_NAME_LENGTH = 64
INVALID_DB_NAME_CHARS = frozenset('/\\. "$\0')


def is_valid_db_name(name: str) -> bool:
    """
    Check a database name against the store's naming rules.

    Args:
        name: Candidate database name

    Returns:
        True if the name can address a database, False otherwise
    """
    if not name or len(name) >= MAX_DB_NAME_LENGTH:
        return False
    return not any(char in INVALID_DB_NAME_CHARS for char in name)


class Namespace(BaseModel):
    """A fully qualified collection path."""
    model_config = ConfigDict(frozen=True)

    db: str
    collection: str

    @classmethod
    def parse(cls, ns: str) -> "Namespace":
        """Split "<db>.<collection>" at the first dot."""
        db, sep, collection = ns.partition(".")
        if not sep or not db or not collection:
            raise ValueError(f"Invalid namespace: {ns!r}")
        return cls(db=db, collection=collection)

    def __str__(self) -> str:
        return f"{self.db}.{self.collection}"

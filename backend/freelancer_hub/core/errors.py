"""
Errors raised by the data access layer.
Callers catch DataLayerError to handle all of them at once.
"""
from typing import Optional

from sqlalchemy.exc import DBAPIError, IntegrityError


class DataLayerError(Exception):
    def __init__(self, message: str, *, entity: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.entity = entity


class NotFound(DataLayerError):
    """Referenced row (or its parent) does not exist."""


class Conflict(DataLayerError):
    """Uniqueness or integrity constraint violated."""


class ValidationError(DataLayerError):
    """Missing required field or malformed value."""

    def __init__(self, message: str, *, entity: Optional[str] = None, errors: Optional[list] = None):
        super().__init__(message, entity=entity)
        self.errors = errors or []


class StorageError(DataLayerError):
    """Connection or transport failure talking to the database."""


_FOREIGN_KEY_MARKERS = ("foreign key", "foreignkeyviolation")


def is_foreign_key_violation(exc: IntegrityError) -> bool:
    msg = str(exc.orig).lower()
    return any(marker in msg for marker in _FOREIGN_KEY_MARKERS)


def translate_db_error(exc: DBAPIError, entity: Optional[str] = None) -> DataLayerError:
    """Map a SQLAlchemy DBAPI error onto the data layer taxonomy."""
    if isinstance(exc, IntegrityError):
        if is_foreign_key_violation(exc):
            return NotFound(f"Referenced parent of {entity or 'record'} does not exist", entity=entity)
        return Conflict(f"{entity or 'Record'} violates a unique constraint: {exc.orig}", entity=entity)
    return StorageError(f"Database error: {exc.orig}", entity=entity)

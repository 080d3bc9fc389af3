"""
Shared plumbing for the service functions: input coercion, flush/commit with
error translation, and row lookups that raise NotFound.
"""
import logging
from contextlib import contextmanager
from typing import Any, Mapping, Optional, Type, TypeVar, Union

import pydantic
from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import Session

from freelancer_hub.core.errors import NotFound, ValidationError, translate_db_error


logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=pydantic.BaseModel)


def coerce_fields(
    schema: Type[SchemaT],
    fields: Union[SchemaT, Mapping[str, Any]],
    entity: str,
) -> SchemaT:
    """Validate a mapping (or pass through a schema instance) into `schema`."""
    if isinstance(fields, schema):
        return fields
    if isinstance(fields, pydantic.BaseModel):
        fields = fields.model_dump(exclude_unset=True)
    try:
        return schema.model_validate(fields)
    except pydantic.ValidationError as e:
        missing = [".".join(str(p) for p in err["loc"]) for err in e.errors() if err["type"] == "missing"]
        if missing:
            message = f"{entity}: missing required field(s): {', '.join(missing)}"
        else:
            message = f"{entity}: invalid data ({e.error_count()} error(s))"
        raise ValidationError(message, entity=entity, errors=e.errors()) from e


def changed_fields(data: pydantic.BaseModel, required: tuple = (), entity: str = "Record") -> dict:
    """Fields explicitly set on an update schema. Required columns cannot be cleared."""
    values = data.model_dump(exclude_unset=True)
    cleared = [name for name in required if name in values and values[name] is None]
    if cleared:
        raise ValidationError(f"{entity}: required field(s) cannot be null: {', '.join(cleared)}", entity=entity)
    return values


def get_or_404(db: Session, model, pk: Any, entity: Optional[str] = None):
    entity = entity or model.__name__
    try:
        obj = db.get(model, pk)
    except DBAPIError as e:
        raise translate_db_error(e, entity) from e
    if obj is None:
        raise NotFound(f"{entity} {pk} not found", entity=entity)
    return obj


def flush_or_raise(db: Session, entity: str) -> None:
    try:
        db.flush()
    except DBAPIError as e:
        db.rollback()
        err = translate_db_error(e, entity)
        logger.warning("flush failed entity=%s error=%s", entity, err.__class__.__name__)
        raise err from e


def commit_or_raise(db: Session, entity: str) -> None:
    try:
        db.commit()
    except DBAPIError as e:
        db.rollback()
        err = translate_db_error(e, entity)
        logger.warning("commit failed entity=%s error=%s", entity, err.__class__.__name__)
        raise err from e


@contextmanager
def storage_errors(entity: str):
    """Translate DBAPI errors raised by read queries."""
    try:
        yield
    except DBAPIError as e:
        raise translate_db_error(e, entity) from e

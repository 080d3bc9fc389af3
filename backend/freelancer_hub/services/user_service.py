from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Union

from sqlalchemy import func
from sqlalchemy.orm import Session

from freelancer_hub.core.db_helpers import (
    changed_fields,
    coerce_fields,
    commit_or_raise,
    flush_or_raise,
    get_or_404,
    storage_errors,
)
from freelancer_hub.core.errors import Conflict, ValidationError
from freelancer_hub.models.user import User
from freelancer_hub.schemas import UserCreate, UserUpdate


logger = logging.getLogger(__name__)


def _normalize_email(value: str) -> str:
    return value.strip().lower()


def _ensure_email_free(db: Session, email: str, exclude_id: Optional[int] = None) -> None:
    query = db.query(User.id).filter(func.lower(User.email) == email)
    if exclude_id is not None:
        query = query.filter(User.id != exclude_id)
    with storage_errors("User"):
        taken = query.first()
    if taken:
        raise Conflict(f"Email {email} already registered", entity="User")


def create_user(db: Session, fields: Union[UserCreate, Mapping[str, Any]]) -> User:
    data = coerce_fields(UserCreate, fields, "User")
    email = _normalize_email(data.email)
    _ensure_email_free(db, email)

    user = User(email=email, name=data.name)
    db.add(user)
    # The unique constraint still guards against a concurrent insert
    flush_or_raise(db, "User")
    commit_or_raise(db, "User")
    db.refresh(user)
    logger.info("create_user id=%s", user.id)
    return user


def get_user(db: Session, user_id: int) -> User:
    return get_or_404(db, User, user_id)


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    with storage_errors("User"):
        return db.query(User).filter(func.lower(User.email) == _normalize_email(email)).first()


def list_users(db: Session, skip: int = 0, limit: int = 100) -> List[User]:
    if skip < 0 or limit < 0:
        raise ValidationError("User: skip and limit must be >= 0", entity="User")
    with storage_errors("User"):
        return db.query(User).order_by(User.id).offset(skip).limit(limit).all()


def update_user(db: Session, user_id: int, fields: Union[UserUpdate, Mapping[str, Any]]) -> User:
    data = coerce_fields(UserUpdate, fields, "User")
    values = changed_fields(data, required=("email", "name"), entity="User")
    user = get_or_404(db, User, user_id)

    if "email" in values:
        values["email"] = _normalize_email(values["email"])
        if values["email"] != user.email:
            _ensure_email_free(db, values["email"], exclude_id=user.id)

    for key, value in values.items():
        setattr(user, key, value)
    commit_or_raise(db, "User")
    db.refresh(user)
    return user


def delete_user(db: Session, user_id: int) -> None:
    """Delete a user; customers and their projects go with it."""
    user = get_or_404(db, User, user_id)
    db.delete(user)
    commit_or_raise(db, "User")
    logger.info("delete_user id=%s", user_id)

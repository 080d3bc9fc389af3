from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, List, Mapping, Union

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
from freelancer_hub.core.errors import NotFound, ValidationError
from freelancer_hub.models.customer import Customer
from freelancer_hub.models.project import Project
from freelancer_hub.models.user import User
from freelancer_hub.schemas import ProjectCreate, ProjectUpdate


logger = logging.getLogger(__name__)


def create_project(db: Session, customer_id: int, fields: Union[ProjectCreate, Mapping[str, Any]]) -> Project:
    data = coerce_fields(ProjectCreate, fields, "Project")
    get_or_404(db, Customer, customer_id)

    project = Project(customer_id=customer_id, **data.model_dump())
    db.add(project)
    flush_or_raise(db, "Project")
    commit_or_raise(db, "Project")
    db.refresh(project)
    logger.info("create_project id=%s customer_id=%s", project.id, customer_id)
    return project


def get_project(db: Session, project_id: int) -> Project:
    return get_or_404(db, Project, project_id)


def list_projects_for_customer(db: Session, customer_id: int) -> List[Project]:
    with storage_errors("Project"):
        return db.query(Project).filter(Project.customer_id == customer_id).order_by(Project.id).all()


def update_project(db: Session, project_id: int, fields: Union[ProjectUpdate, Mapping[str, Any]]) -> Project:
    data = coerce_fields(ProjectUpdate, fields, "Project")
    values = changed_fields(data, required=("name", "todo_list"), entity="Project")
    project = get_or_404(db, Project, project_id)

    for key, value in values.items():
        setattr(project, key, value)
    commit_or_raise(db, "Project")
    db.refresh(project)
    return project


def delete_project(db: Session, project_id: int) -> None:
    project = get_or_404(db, Project, project_id)
    db.delete(project)
    commit_or_raise(db, "Project")
    logger.info("delete_project id=%s", project_id)


def add_todo(db: Session, project_id: int, item: str) -> Project:
    item = (item or "").strip()
    if not item:
        raise ValidationError("Project: todo item cannot be empty", entity="Project")
    project = get_or_404(db, Project, project_id)
    project.todo_list.append(item)
    commit_or_raise(db, "Project")
    db.refresh(project)
    return project


def remove_todo(db: Session, project_id: int, index: int) -> Project:
    project = get_or_404(db, Project, project_id)
    if index < 0 or index >= len(project.todo_list):
        raise NotFound(f"Project {project_id} has no todo at index {index}", entity="Project")
    del project.todo_list[index]
    commit_or_raise(db, "Project")
    db.refresh(project)
    return project


def log_time(db: Session, project_id: int, minutes: int) -> Project:
    """Add `minutes` to the time spent on a project."""
    if not isinstance(minutes, int) or isinstance(minutes, bool):
        raise ValidationError("Project: minutes must be an integer", entity="Project")
    if minutes < 0:
        raise ValidationError("Project: minutes must be >= 0", entity="Project")
    project = get_or_404(db, Project, project_id)
    project.time_spent = (project.time_spent or 0) + minutes
    commit_or_raise(db, "Project")
    db.refresh(project)
    return project


def user_totals(db: Session, owner_id: int) -> dict:
    """Customer/project counts plus summed price and time across a user's projects."""
    get_or_404(db, User, owner_id)
    with storage_errors("Project"):
        customers = db.query(func.count(Customer.id)).filter(Customer.user_id == owner_id).scalar()
        projects, total_price, total_time = (
            db.query(
                func.count(Project.id),
                func.coalesce(func.sum(Project.price), 0),
                func.coalesce(func.sum(Project.time_spent), 0),
            )
            .join(Customer, Project.customer_id == Customer.id)
            .filter(Customer.user_id == owner_id)
            .one()
        )
    return {
        "customers": customers or 0,
        "projects": projects or 0,
        "total_price": Decimal(str(total_price)).quantize(Decimal("0.01")),
        "total_time_spent": int(total_time),
    }

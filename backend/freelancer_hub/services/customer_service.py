from __future__ import annotations

import logging
from typing import Any, List, Mapping, Union

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, selectinload

from freelancer_hub.core.db_helpers import (
    changed_fields,
    coerce_fields,
    commit_or_raise,
    flush_or_raise,
    get_or_404,
    storage_errors,
)
from freelancer_hub.core.errors import NotFound
from freelancer_hub.models.customer import Customer
from freelancer_hub.models.user import User
from freelancer_hub.schemas import CustomerCreate, CustomerUpdate


logger = logging.getLogger(__name__)


def create_customer(db: Session, owner_id: int, fields: Union[CustomerCreate, Mapping[str, Any]]) -> Customer:
    """
    Insert a customer owned by `owner_id`.
    - NotFound when the owner does not exist.
    - Conflict on any other constraint violation.
    """
    data = coerce_fields(CustomerCreate, fields, "Customer")
    get_or_404(db, User, owner_id)

    customer = Customer(user_id=owner_id, **data.model_dump())
    db.add(customer)
    flush_or_raise(db, "Customer")
    commit_or_raise(db, "Customer")
    db.refresh(customer)
    logger.info("create_customer id=%s user_id=%s", customer.id, owner_id)
    return customer


def get_customer(db: Session, customer_id: int, include_projects: bool = False) -> Customer:
    if not include_projects:
        return get_or_404(db, Customer, customer_id)
    with storage_errors("Customer"):
        customer = (
            db.query(Customer)
            .options(selectinload(Customer.projects))
            .filter(Customer.id == customer_id)
            .first()
        )
    if customer is None:
        raise NotFound(f"Customer {customer_id} not found", entity="Customer")
    return customer


def list_customers_for_user(db: Session, owner_id: int, include_projects: bool = False) -> List[Customer]:
    logger.debug("list_customers_for_user user_id=%s include_projects=%s", owner_id, include_projects)
    query = db.query(Customer).filter(Customer.user_id == owner_id)
    if include_projects:
        query = query.options(selectinload(Customer.projects))
    with storage_errors("Customer"):
        return query.order_by(Customer.id).all()


def search_customers(db: Session, owner_id: int, q: str) -> List[Customer]:
    query = db.query(Customer).filter(Customer.user_id == owner_id)
    qn = (q or "").strip().lower()
    if qn:
        query = query.filter(
            or_(
                func.lower(Customer.name).contains(qn, autoescape=True),
                func.lower(Customer.email).contains(qn, autoescape=True),
            )
        )
    with storage_errors("Customer"):
        return query.order_by(Customer.id).all()


def update_customer(db: Session, customer_id: int, fields: Union[CustomerUpdate, Mapping[str, Any]]) -> Customer:
    data = coerce_fields(CustomerUpdate, fields, "Customer")
    values = changed_fields(data, required=("name",), entity="Customer")
    customer = get_or_404(db, Customer, customer_id)

    for key, value in values.items():
        setattr(customer, key, value)
    commit_or_raise(db, "Customer")
    db.refresh(customer)
    return customer


def delete_customer(db: Session, customer_id: int) -> None:
    """Delete a customer together with its projects."""
    customer = get_or_404(db, Customer, customer_id)
    db.delete(customer)
    commit_or_raise(db, "Customer")
    logger.info("delete_customer id=%s", customer_id)

import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from freelancer_hub.core.config import settings
from freelancer_hub.core.db_helpers import coerce_fields, commit_or_raise
from freelancer_hub.models.customer import Customer
from freelancer_hub.models.project import Project
from freelancer_hub.models.user import User
from freelancer_hub.schemas import CustomerCreate, ProjectCreate, UserCreate
from freelancer_hub.services.user_service import get_user_by_email


logger = logging.getLogger(__name__)

DEMO_CUSTOMER = {
    "name": "Acme Bakery",
    "phone": "+1 555 0100",
    "address": "12 Market Street",
    "email": "orders@acme-bakery.example.com",
    "notes": "Prefers invoices at month end",
}

DEMO_PROJECT = {
    "name": "Online ordering site",
    "notes": "Phase 1: menu and checkout",
    "todo_list": ["Wireframes", "Menu page", "Checkout flow"],
    "price": Decimal("2400.00"),
    "time_spent": 90,
}


def _demo_customer(user: User) -> Customer:
    customer = Customer(owner=user, **coerce_fields(CustomerCreate, DEMO_CUSTOMER, "Customer").model_dump())
    customer.projects.append(Project(**coerce_fields(ProjectCreate, DEMO_PROJECT, "Project").model_dump()))
    return customer


def seed_demo(db: Session):
    """
    Ensure the demo user exists with its customer and project.
    All rows are written in a single commit; a demo user left without
    customers is completed on the next run.
    """
    user = get_user_by_email(db, settings.demo_user_email)
    if user is not None and user.customers:
        logger.info("seed_demo skipped, user %s already present", user.id)
        return user

    if user is None:
        data = coerce_fields(UserCreate, {"email": settings.demo_user_email, "name": settings.demo_user_name}, "User")
        user = User(email=data.email.strip().lower(), name=data.name)
        db.add(user)
    else:
        logger.info("seed_demo completing user %s without customers", user.id)

    db.add(_demo_customer(user))
    commit_or_raise(db, "User")
    db.refresh(user)
    logger.info("seed_demo created demo data for user %s", user.id)
    return user

from datetime import datetime

import pytest

from freelancer_hub.core.errors import NotFound, ValidationError
from freelancer_hub.models import Customer, Project
from freelancer_hub.schemas import CustomerCreate, CustomerWithProjectsOut
from freelancer_hub.services.customer_service import (
    create_customer,
    delete_customer,
    get_customer,
    list_customers_for_user,
    search_customers,
    update_customer,
)
from freelancer_hub.services.project_service import create_project
from freelancer_hub.services.user_service import create_user, delete_user


def test_create_customer_links_owner(db, user):
    customer = create_customer(db, user.id, {"name": "Globex", "phone": "555-0101"})
    assert customer.id is not None
    assert customer.user_id == user.id
    assert customer.created_at is not None
    assert customer.updated_at is not None


def test_create_customer_accepts_schema_instance(db, user):
    customer = create_customer(db, user.id, CustomerCreate(name="Initech", notes="Net 30"))
    assert customer.notes == "Net 30"


def test_create_customer_unknown_owner_is_not_found(db):
    with pytest.raises(NotFound):
        create_customer(db, 9999, {"name": "Ghost Co"})
    assert db.query(Customer).count() == 0


def test_create_customer_requires_name(db, user):
    with pytest.raises(ValidationError) as exc:
        create_customer(db, user.id, {"phone": "555"})
    assert "name" in str(exc.value)


def test_customers_may_share_email(db, user):
    other = create_user(db, {"email": "grace@example.com", "name": "Grace"})
    a = create_customer(db, user.id, {"name": "Acme", "email": "shared@example.com"})
    b = create_customer(db, other.id, {"name": "Acme West", "email": "shared@example.com"})
    assert a.id != b.id


def test_list_customers_for_user_without_customers_is_empty(db, user):
    assert list_customers_for_user(db, user.id) == []
    assert list_customers_for_user(db, user.id, include_projects=True) == []


def test_list_customers_only_returns_owned_rows(db, user, customer):
    other = create_user(db, {"email": "grace@example.com", "name": "Grace"})
    create_customer(db, other.id, {"name": "Not yours"})
    customers = list_customers_for_user(db, user.id)
    assert [c.id for c in customers] == [customer.id]


def test_list_customers_with_projects(db, user, customer, project):
    customers = list_customers_for_user(db, user.id, include_projects=True)
    assert len(customers) == 1
    assert "projects" in customers[0].__dict__
    assert [p.id for p in customers[0].projects] == [project.id]

    out = CustomerWithProjectsOut.model_validate(customers[0])
    assert out.projects[0].todo_list == ["Design", "Build"]


def test_get_customer_with_projects(db, customer, project):
    loaded = get_customer(db, customer.id, include_projects=True)
    assert [p.name for p in loaded.projects] == ["Landing page"]
    with pytest.raises(NotFound):
        get_customer(db, 777, include_projects=True)


def test_search_customers(db, user):
    create_customer(db, user.id, {"name": "Acme Bakery"})
    create_customer(db, user.id, {"name": "Initech", "email": "it@acme.example.com"})
    create_customer(db, user.id, {"name": "Globex"})
    assert sorted(c.name for c in search_customers(db, user.id, "ACME")) == ["Acme Bakery", "Initech"]
    assert len(search_customers(db, user.id, "")) == 3


def test_update_customer_refreshes_updated_at(db, customer):
    customer.updated_at = datetime(2000, 1, 1)
    db.commit()

    updated = update_customer(db, customer.id, {"phone": "555-0199"})
    assert updated.phone == "555-0199"
    assert updated.name == "Acme"
    assert updated.updated_at.replace(tzinfo=None) > datetime(2000, 1, 1)


def test_update_customer_can_clear_optional_field(db, customer):
    updated = update_customer(db, customer.id, {"email": None})
    assert updated.email is None


def test_delete_customer_cascades_to_projects(db, customer, project):
    delete_customer(db, customer.id)
    assert db.query(Customer).count() == 0
    assert db.query(Project).count() == 0


def test_delete_user_cascades_to_customers_and_projects(db, user, customer, project):
    second = create_customer(db, user.id, {"name": "Second"})
    create_project(db, second.id, {"name": "Audit"})
    survivor = create_user(db, {"email": "grace@example.com", "name": "Grace"})
    kept = create_customer(db, survivor.id, {"name": "Kept"})
    create_project(db, kept.id, {"name": "Kept project"})

    delete_user(db, user.id)

    assert list_customers_for_user(db, user.id) == []
    assert [c.id for c in db.query(Customer).all()] == [kept.id]
    assert [p.customer_id for p in db.query(Project).all()] == [kept.id]


def test_search_customers_treats_wildcards_literally(db, user):
    create_customer(db, user.id, {"name": "100 Pixels"})
    create_customer(db, user.id, {"name": "100% Design"})
    create_customer(db, user.id, {"name": "snake_case Labs"})
    assert [c.name for c in search_customers(db, user.id, "100%")] == ["100% Design"]
    assert [c.name for c in search_customers(db, user.id, "%")] == ["100% Design"]
    assert [c.name for c in search_customers(db, user.id, "_")] == ["snake_case Labs"]

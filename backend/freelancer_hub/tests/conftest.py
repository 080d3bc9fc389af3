import os

os.environ.setdefault("ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from sqlalchemy.orm import sessionmaker

from freelancer_hub.core.database import create_db_engine
from freelancer_hub.models import Base
from freelancer_hub.services.customer_service import create_customer
from freelancer_hub.services.project_service import create_project
from freelancer_hub.services.user_service import create_user


@pytest.fixture()
def engine():
    engine = create_db_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def db(engine):
    Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = Session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def user(db):
    return create_user(db, {"email": "ada@example.com", "name": "Ada"})


@pytest.fixture()
def customer(db, user):
    return create_customer(db, user.id, {"name": "Acme", "email": "billing@acme.example.com"})


@pytest.fixture()
def project(db, customer):
    return create_project(db, customer.id, {"name": "Landing page", "todo_list": ["Design", "Build"]})

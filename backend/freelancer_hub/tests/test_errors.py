import pytest
from sqlalchemy.exc import OperationalError

from freelancer_hub.core.db_helpers import flush_or_raise, storage_errors
from freelancer_hub.core.errors import Conflict, NotFound, StorageError, translate_db_error
from freelancer_hub.models import Customer, User


def test_foreign_key_violation_maps_to_not_found(db):
    db.add(Customer(name="Dangling", user_id=555))
    with pytest.raises(NotFound):
        flush_or_raise(db, "Customer")
    assert db.query(Customer).count() == 0


def test_unique_violation_maps_to_conflict(db, user):
    db.add(User(email=user.email, name="Copy"))
    with pytest.raises(Conflict):
        flush_or_raise(db, "User")


def test_operational_error_maps_to_storage_error():
    exc = OperationalError("SELECT 1", {}, Exception("could not connect to server"))
    err = translate_db_error(exc, "User")
    assert isinstance(err, StorageError)
    assert err.entity == "User"


def test_storage_errors_context_translates():
    with pytest.raises(StorageError):
        with storage_errors("Project"):
            raise OperationalError("SELECT 1", {}, Exception("server closed the connection"))

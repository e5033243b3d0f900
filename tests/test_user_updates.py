"""Tests for profile update parsing and field setters."""

import pytest

from accounts.exceptions import ValidationError
from accounts.models.user import User
from accounts.services.auth import get_password_hash, verify_password
from accounts.services.users import FIELD_SETTERS, UpdateField, parse_updates, update_user


@pytest.fixture
def user(db):
    """A stored user."""
    user = User(
        name="Update Test",
        email="update@example.com",
        password_hash=get_password_hash("secret12"),
        age=20,
        tokens=[],
    )
    db.add(user)
    db.commit()
    return user


def test_every_update_field_has_a_setter():
    """Test the setter table covers the whole enum."""
    assert set(FIELD_SETTERS) == set(UpdateField)


def test_parse_updates_returns_typed_fields():
    """Test keys are converted to UpdateField members and values cleaned."""
    updates = parse_updates({"name": "  New  ", "email": "NEW@Example.com", "age": 5})
    assert updates == {
        UpdateField.NAME: "New",
        UpdateField.EMAIL: "new@example.com",
        UpdateField.AGE: 5,
    }


def test_parse_updates_allows_clearing_age():
    """Test age is the one field that may be set to null."""
    assert parse_updates({"age": None}) == {UpdateField.AGE: None}


@pytest.mark.parametrize(
    "body",
    [
        {"role": "admin"},
        {"name": "ok", "tokens": []},
        {"password_hash": "x"},
        {"id": 7},
    ],
)
def test_parse_updates_rejects_unknown_keys(body):
    """Test any key outside the allowed set is rejected."""
    with pytest.raises(ValidationError, match="Invalid updates"):
        parse_updates(body)


def test_rejected_update_does_not_mutate(db, user):
    """Test nothing is applied when one key is disallowed."""
    with pytest.raises(ValidationError):
        update_user(db, user, {"name": "Changed", "age": 99, "role": "admin"})
    assert user.name == "Update Test"
    assert user.age == 20
    assert not db.dirty


def test_update_user_applies_setters(db, user):
    """Test values reach the record and the password is re-hashed."""
    update_user(db, user, {"name": "Changed", "password": "brandnew1", "age": None})

    db.expire_all()
    stored = db.get(User, user.id)
    assert stored.name == "Changed"
    assert stored.age is None
    assert stored.password_hash != "brandnew1"
    assert verify_password("brandnew1", stored.password_hash)


def test_empty_update_is_a_no_op(db, user):
    """Test an empty body changes nothing and succeeds."""
    assert update_user(db, user, {}).name == "Update Test"

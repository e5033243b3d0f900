"""Tests for the session token and password service."""

import pytest
from jose import jwt

from accounts.config import get_settings
from accounts.exceptions import InvalidCredentialsError
from accounts.models.user import User
from accounts.services.auth import (
    create_access_token,
    decode_access_token,
    find_by_credentials,
    get_password_hash,
    issue_token,
    revoke_all_tokens,
    revoke_token,
    verify_password,
)


@pytest.fixture
def user(db):
    """A stored user without sessions."""
    user = User(
        name="Service Test",
        email="service@example.com",
        password_hash=get_password_hash("secret12"),
        tokens=[],
    )
    db.add(user)
    db.commit()
    return user


def test_password_hash_round_trip():
    """Test hashing never returns the plaintext and verifies correctly."""
    hashed = get_password_hash("secret12")
    assert hashed != "secret12"
    assert verify_password("secret12", hashed)
    assert not verify_password("secret13", hashed)


def test_tokens_are_unique_for_same_user():
    """Test two tokens issued back to back differ."""
    assert create_access_token(1) != create_access_token(1)


def test_token_carries_user_id():
    """Test the subject claim holds the user id."""
    payload = decode_access_token(create_access_token(42))
    assert payload["sub"] == "42"
    assert "exp" not in payload


def test_decode_rejects_foreign_signature():
    """Test a token signed with another secret is rejected."""
    settings = get_settings()
    forged = jwt.encode({"sub": "1"}, "some-other-secret", algorithm=settings.jwt_algorithm)
    assert decode_access_token(forged) is None
    assert decode_access_token("not-a-token") is None


def test_find_by_credentials(db, user):
    """Test lookup by email is case-insensitive and checks the password."""
    assert find_by_credentials(db, "Service@Example.com", "secret12").id == user.id

    with pytest.raises(InvalidCredentialsError) as wrong_password:
        find_by_credentials(db, "service@example.com", "nope1234")
    with pytest.raises(InvalidCredentialsError) as unknown_email:
        find_by_credentials(db, "ghost@example.com", "secret12")
    assert str(wrong_password.value) == str(unknown_email.value) == "Unable to login"


def test_issue_and_revoke_tokens(db, user):
    """Test issuing appends, revoking removes one or all."""
    first = issue_token(db, user)
    second = issue_token(db, user)
    third = issue_token(db, user)
    assert user.tokens == [first, second, third]

    revoke_token(db, user, second)
    db.expire_all()
    assert db.get(User, user.id).tokens == [first, third]

    revoke_all_tokens(db, user)
    db.expire_all()
    assert db.get(User, user.id).tokens == []

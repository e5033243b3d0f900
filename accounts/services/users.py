"""User account service: registration, profile updates and deletion."""

import logging
from collections.abc import Callable
from enum import Enum
from typing import Any

import pydantic
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from accounts.exceptions import PersistenceError, ValidationError
from accounts.models.user import User
from accounts.schemas.user import UserRegister, UserUpdate
from accounts.services.auth import get_password_hash

logger = logging.getLogger(__name__)


class UpdateField(str, Enum):
    """Fields a user may change on their own profile."""

    NAME = "name"
    EMAIL = "email"
    PASSWORD = "password"
    AGE = "age"


def _set_name(user: User, value: str) -> None:
    user.name = value


def _set_email(user: User, value: str) -> None:
    user.email = value


def _set_password(user: User, value: str) -> None:
    user.password_hash = get_password_hash(value)


def _set_age(user: User, value: int | None) -> None:
    user.age = value


FIELD_SETTERS: dict[UpdateField, Callable[[User, Any], None]] = {
    UpdateField.NAME: _set_name,
    UpdateField.EMAIL: _set_email,
    UpdateField.PASSWORD: _set_password,
    UpdateField.AGE: _set_age,
}


def _first_error_message(error: pydantic.ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    message = first["msg"].removeprefix("Value error, ")
    return f"{location}: {message}" if location else message


def create_user(db: Session, data: UserRegister) -> User:
    """Create and persist a new user with a hashed password.

    Raises:
        ValidationError: if the email is already registered
        PersistenceError: if the store fails the write
    """
    user = User(
        name=data.name,
        email=data.email,
        password_hash=get_password_hash(data.password),
        age=data.age,
        tokens=[],
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ValidationError("Email is already registered") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to create user: {e}")
        raise PersistenceError("Unable to create user") from e
    db.refresh(user)
    logger.info(f"Registered user {user.id}")
    return user


def parse_updates(body: dict[str, Any]) -> dict[UpdateField, Any]:
    """Check every requested key and value before anything is applied.

    Raises:
        ValidationError: if any key is not an ``UpdateField`` or any value is
            invalid; nothing has been mutated at that point
    """
    allowed = {field.value for field in UpdateField}
    if not all(key in allowed for key in body):
        raise ValidationError("Invalid updates")

    try:
        values = UserUpdate.model_validate(body)
    except pydantic.ValidationError as e:
        raise ValidationError(_first_error_message(e)) from e

    return {UpdateField(key): getattr(values, key) for key in body}


def update_user(db: Session, user: User, body: dict[str, Any]) -> User:
    """Apply a validated profile update and persist it.

    Raises:
        ValidationError: on a disallowed key or invalid value, before mutation
        PersistenceError: if the store fails the write
    """
    updates = parse_updates(body)
    for field, value in updates.items():
        FIELD_SETTERS[field](user, value)

    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to update user {user.id}: {e}")
        raise PersistenceError("Unable to update user") from e
    db.refresh(user)
    logger.info(f"Updated user {user.id} fields: {[field.value for field in updates]}")
    return user


def delete_user(db: Session, user: User) -> None:
    """Remove a user record from the store."""
    user_id = user.id
    db.delete(user)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to delete user {user_id}: {e}")
        raise PersistenceError("Unable to delete user") from e
    logger.info(f"Deleted user {user_id}")

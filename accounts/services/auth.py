"""Authentication service for session tokens and password handling."""

import logging
import uuid
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from accounts.config import get_settings
from accounts.exceptions import InvalidCredentialsError, PersistenceError
from accounts.models.user import User

logger = logging.getLogger(__name__)

settings = get_settings()

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def create_access_token(user_id: int) -> str:
    """Create a signed session token for a user.

    The ``jti`` claim keeps tokens issued within the same second distinct,
    which logout relies on when it removes a token by string equality.
    """
    now = datetime.now(UTC)
    to_encode = {
        "sub": str(user_id),
        "jti": uuid.uuid4().hex,
        "iat": now,
    }
    if settings.jwt_expiration_minutes is not None:
        to_encode["exp"] = now + timedelta(minutes=settings.jwt_expiration_minutes)
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict | None:
    """Decode and validate a session token."""
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == email.strip().lower()).first()


def get_user_by_id(db: Session, user_id: int) -> User | None:
    """Get a user by id."""
    return db.get(User, user_id)


def find_by_credentials(db: Session, email: str, password: str) -> User:
    """Return the user matching email and password.

    Raises:
        InvalidCredentialsError: with the same message whether the email is
            unknown or the password is wrong
    """
    user = get_user_by_email(db, email)
    if user is None or not verify_password(password, user.password_hash):
        raise InvalidCredentialsError()
    return user


def _commit(db: Session) -> None:
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to save session tokens: {e}")
        raise PersistenceError("Unable to save session") from e


def issue_token(db: Session, user: User) -> str:
    """Create a token, append it to the user's token list and persist it."""
    token = create_access_token(user.id)
    user.tokens.append(token)
    _commit(db)
    return token


def revoke_token(db: Session, user: User, token: str) -> None:
    """Remove one token from the user's token list."""
    user.tokens = [existing for existing in user.tokens if existing != token]
    _commit(db)
    logger.info(f"User {user.id} logged out one session")


def revoke_all_tokens(db: Session, user: User) -> None:
    """Remove every token from the user's token list."""
    user.tokens = []
    _commit(db)
    logger.info(f"User {user.id} logged out of all sessions")

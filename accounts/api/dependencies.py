"""FastAPI dependencies for authentication and services."""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from accounts.database import get_db
from accounts.exceptions import AuthenticationError
from accounts.models.user import User
from accounts.services.auth import decode_access_token, get_user_by_id
from accounts.services.avatars import AvatarStore

security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Identity:
    """The authenticated user and the token that authenticated the request."""

    user: User
    token: str


def get_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> Identity:
    """Resolve the bearer token to an active session.

    A token that verifies but is no longer in the user's token list (logged
    out) is rejected like any other invalid token.
    """
    if credentials is None:
        raise AuthenticationError("Please authenticate.")

    token = credentials.credentials
    payload = decode_access_token(token)
    if payload is None:
        raise AuthenticationError("Please authenticate.")

    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise AuthenticationError("Please authenticate.") from None

    user = get_user_by_id(db, user_id)
    if user is None or token not in user.tokens:
        raise AuthenticationError("Please authenticate.")

    return Identity(user=user, token=token)


def get_avatar_store() -> AvatarStore:
    """Get avatar store instance."""
    return AvatarStore()

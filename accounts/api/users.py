"""User account API endpoints."""

import logging
from typing import Annotated, Any

import pydantic
from fastapi import APIRouter, Body, Depends, File, Request, UploadFile, status
from sqlalchemy.orm import Session

from accounts.api.dependencies import Identity, get_avatar_store, get_identity
from accounts.database import get_db
from accounts.exceptions import (
    AccountError,
    InvalidCredentialsError,
    PersistenceError,
    ValidationError,
)
from accounts.schemas.user import (
    AuthResponse,
    MessageResponse,
    ProfileResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)
from accounts.services.auth import (
    find_by_credentials,
    issue_token,
    revoke_all_tokens,
    revoke_token,
)
from accounts.services.avatars import AvatarStore
from accounts.services.users import create_user, delete_user, update_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserRegister,
    db: Annotated[Session, Depends(get_db)],
):
    """Register a new user and start a session for them."""
    try:
        user = create_user(db, user_data)
        token = issue_token(db, user)
    except PersistenceError as e:
        raise ValidationError(e.message) from e

    return AuthResponse(token=token, user=UserResponse.model_validate(user))


@router.post(
    "/login",
    response_model=AuthResponse,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": UserLogin.model_json_schema()}},
        }
    },
)
async def login(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
):
    """Login with email and password.

    Each login adds a session; earlier sessions stay valid. The body is parsed
    here rather than by the framework so that a malformed body fails with the
    same message as wrong credentials.
    """
    try:
        credentials = UserLogin.model_validate_json(await request.body())
        user = find_by_credentials(db, credentials.email, credentials.password)
        token = issue_token(db, user)
    except (pydantic.ValidationError, AccountError) as e:
        logger.info("Failed login attempt")
        raise InvalidCredentialsError() from e

    return AuthResponse(token=token, user=UserResponse.model_validate(user))


@router.post("/logout", response_model=MessageResponse)
async def logout(
    identity: Annotated[Identity, Depends(get_identity)],
    db: Annotated[Session, Depends(get_db)],
):
    """End the session that made this request."""
    revoke_token(db, identity.user, identity.token)
    return MessageResponse(message="successfully logged out!")


@router.post("/logoutAll", response_model=MessageResponse)
async def logout_all(
    identity: Annotated[Identity, Depends(get_identity)],
    db: Annotated[Session, Depends(get_db)],
):
    """End every session of the current user, including this one."""
    revoke_all_tokens(db, identity.user)
    return MessageResponse(message="logged out from all sessions")


@router.get("/me", response_model=ProfileResponse)
async def get_me(
    identity: Annotated[Identity, Depends(get_identity)],
):
    """Get current user profile."""
    return ProfileResponse.model_validate(identity.user)


@router.patch("/me", response_model=UserResponse)
async def update_me(
    updates: Annotated[dict[str, Any], Body()],
    identity: Annotated[Identity, Depends(get_identity)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update name, email, password or age of the current user."""
    user = update_user(db, identity.user, updates)
    return UserResponse.model_validate(user)


@router.delete("/me", response_model=UserResponse)
async def delete_me(
    identity: Annotated[Identity, Depends(get_identity)],
    db: Annotated[Session, Depends(get_db)],
):
    """Delete the current user and return its last known state."""
    snapshot = UserResponse.model_validate(identity.user)
    delete_user(db, identity.user)
    return snapshot


# Not tied to a user account yet: any client may upload
@router.post("/me/avatar", response_model=MessageResponse)
async def upload_avatar(
    avatar: Annotated[UploadFile, File()],
    store: Annotated[AvatarStore, Depends(get_avatar_store)],
):
    """Upload an avatar image (jpg, png or jpeg, at most 1 MiB)."""
    await store.save(avatar)
    return MessageResponse(message="Successfully uploaded")

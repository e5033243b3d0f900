"""User schemas."""

from datetime import datetime
from typing import Annotated

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    StrictInt,
    StringConstraints,
    model_validator,
)


def _reject_password_word(value: str) -> str:
    if "password" in value.lower():
        raise ValueError('Password cannot contain "password"')
    return value


Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]
Email = Annotated[EmailStr, AfterValidator(str.lower)]
Password = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=7, max_length=128),
    AfterValidator(_reject_password_word),
]
Age = Annotated[StrictInt, Field(ge=0)]


class UserRegister(BaseModel):
    """User registration request."""

    name: Name
    email: Email
    password: Password
    age: Age | None = None


class UserLogin(BaseModel):
    """User login request.

    Values are not format-checked so that every failure reads the same.
    """

    email: str = ""
    password: str = ""


class UserUpdate(BaseModel):
    """Values for a profile update. Only the keys present are applied."""

    name: Name | None = None
    email: Email | None = None
    password: Password | None = None
    age: Age | None = None

    @model_validator(mode="after")
    def reject_null_required_fields(self) -> "UserUpdate":
        """Name, email and password may be omitted but never cleared."""
        for field in ("name", "email", "password"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class UserResponse(BaseModel):
    """User information response. Never carries the password hash or tokens."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    age: int | None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProfileResponse(BaseModel):
    """Public projection returned by GET /users/me."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    age: int | None
    email: str


class AuthResponse(BaseModel):
    """Authentication response with session token and user info."""

    token: str
    user: UserResponse


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str

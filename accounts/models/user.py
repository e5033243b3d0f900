"""User model."""

from sqlalchemy import JSON, Column, Integer, String
from sqlalchemy.ext.mutable import MutableList

from accounts.database import Base
from accounts.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """An account and the session tokens issued to it."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    age = Column(Integer, nullable=True)
    # Ordered list of active session tokens; a token is valid only while listed here
    tokens = Column(MutableList.as_mutable(JSON), nullable=False, default=list)

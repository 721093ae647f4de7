"""
User account entity.

Accounts are identified by a unique username and a unique email. Only a salted
password hash is stored.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, UTCDateTime, utc_now


class UserBase(Base):
    """Base fields for a user account."""

    username: str = Field(max_length=64, unique=True, index=True, description="Login name")
    email: str = Field(max_length=255, unique=True, index=True, description="Lower-cased email address")
    is_active: bool = Field(default=True, description="Whether the account may log in")


class User(UserBase, table=True):
    """Persistent user account.

    Table: users
    """

    __tablename__ = "users"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    password_hash: str = Field(max_length=255, description="PBKDF2 password hash")

    created_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"User(id={self.id}, username={self.username})"

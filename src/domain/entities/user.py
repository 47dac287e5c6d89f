"""
User Entity

Represents a person who can sign in and reset their password.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from .enums import UserStatus


class User(SQLModel, table=True):
    """
    User entity - an account identified by email and username.

    Business Rules:
    - Email must be unique across all users
    - Username must be unique across all users
    - Password stored as bcrypt hash (cost factor 12)
    - password_hash is only replaced by signup or a confirmed password reset
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    username: str = Field(unique=True, index=True, max_length=100)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    status: UserStatus = Field(default=UserStatus.active)

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    updated_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

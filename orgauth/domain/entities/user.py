"""
User Entity

Represents a person who can belong to multiple organizations.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from orgauth.domain.base import utcnow


class User(SQLModel, table=True):
    """
    User entity - represents a person who can belong to multiple organizations.

    Business Rules:
    - Email must be unique across all users
    - Email verification required before email/password sign-in
    - password_hash is None for users who only ever signed in socially
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    name: str = Field(default="", max_length=255)
    image: Optional[str] = Field(default=None, max_length=2048)

    password_hash: Optional[str] = Field(default=None, max_length=60)

    email_verified: bool = Field(default=False)
    email_verification_token: Optional[str] = Field(
        default=None, unique=True, index=True, max_length=64
    )
    email_verification_expires_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_user_email_verified", "email_verified"),)

"""
Account Entity

Links a user to a sign-in provider identity.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from orgauth.domain.base import utcnow


class Account(SQLModel, table=True):
    """
    Account entity - one row per (provider, subject) a user can sign in with.

    provider_id is "credential" for email/password, otherwise the social
    provider name. account_id is the provider's stable subject identifier.
    """

    __tablename__ = "accounts"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    provider_id: str = Field(max_length=32)
    account_id: str = Field(max_length=255)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_account_provider_subject", "provider_id", "account_id", unique=True),
    )

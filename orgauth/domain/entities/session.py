"""
Session Entity

Server-side record behind a signed session cookie.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from orgauth.domain.base import utcnow


class Session(SQLModel, table=True):
    """
    Session entity - links a user to their active organization.

    Business Rules:
    - active_organization_id is resolved once, before the session is persisted
    - Revoked or expired sessions are rejected
    - Expires after 7 days
    """

    __tablename__ = "sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    active_organization_id: Optional[UUID] = Field(
        default=None, foreign_key="organizations.id"
    )

    ip_address: Optional[str] = Field(default=None, max_length=64)
    user_agent: Optional[str] = Field(default=None, max_length=512)

    revoked: bool = Field(default=False)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))

    __table_args__ = (
        Index("idx_session_expires_at", "expires_at"),
        Index("idx_session_revoked", "revoked"),
    )

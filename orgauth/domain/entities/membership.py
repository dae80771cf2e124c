"""
Membership Entity

Links User to Organization with a role.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from orgauth.domain.base import utcnow

from .enums import MembershipRole


class Membership(SQLModel, table=True):
    """
    Membership entity - links User to Organization with a role.

    Business Rules:
    - One user can be member of multiple organizations
    - (user_id, organization_id) must be unique
    - Role governs permissions through the access control policy
    """

    __tablename__ = "memberships"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    organization_id: UUID = Field(
        foreign_key="organizations.id", nullable=False, index=True
    )

    role: MembershipRole = Field(nullable=False)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_membership_user_org", "user_id", "organization_id", unique=True),
    )

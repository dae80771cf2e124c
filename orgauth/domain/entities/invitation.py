"""
Invitation Entity

Pending invitations to join an organization.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from orgauth.domain.base import utcnow

from .enums import InvitationStatus, MembershipRole


class Invitation(SQLModel, table=True):
    """
    Invitation entity - pending invitations to join an organization.

    Business Rules:
    - Created by a member allowed to invite (owner/admin)
    - Expires after 48 hours
    - The id itself is the deep link key: /invitation/{id}
    - May target an email with no existing account
    """

    __tablename__ = "invitations"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    organization_id: UUID = Field(
        foreign_key="organizations.id", nullable=False, index=True
    )
    inviter_id: UUID = Field(foreign_key="users.id", nullable=False)
    email: str = Field(max_length=255, nullable=False, index=True)

    role: MembershipRole = Field(nullable=False)
    status: InvitationStatus = Field(default=InvitationStatus.pending)

    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_invitation_org_email", "organization_id", "email"),
        Index("idx_invitation_status", "status"),
    )

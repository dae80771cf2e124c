"""
Organization Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the organization domain.
"""

from typing import Optional

from pydantic import BaseModel


class OrganizationInfo(BaseModel):
    """Organization information in responses"""

    id: str
    name: str
    slug: str
    role: Optional[str] = None


class InviteMemberResponse(BaseModel):
    """Response for invite member use case"""

    id: str
    email: str
    role: str
    status: str
    organization_id: str
    expires_at: str


class InvitationDetails(BaseModel):
    """Invitation as shown to its recipient"""

    id: str
    email: str
    role: str
    status: str
    expires_at: str
    organization_id: str
    organization_name: str
    inviter_name: str
    inviter_email: str


class AcceptInvitationResponse(BaseModel):
    """Response for accept invitation use case"""

    invitation_id: str
    organization: OrganizationInfo


class InvitationStatusResponse(BaseModel):
    """Response for reject and cancel invitation use cases"""

    id: str
    status: str

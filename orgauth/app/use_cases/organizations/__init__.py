"""
Organization Use Cases

Organization creation and the invitation workflow.
"""

from .accept_invitation_use_case import AcceptInvitationUseCase
from .cancel_invitation_use_case import CancelInvitationUseCase
from .create_organization_use_case import CreateOrganizationUseCase, slugify
from .dtos import (
    AcceptInvitationResponse,
    InvitationDetails,
    InvitationStatusResponse,
    InviteMemberResponse,
    OrganizationInfo,
)
from .get_invitation_use_case import GetInvitationUseCase
from .invite_member_use_case import InviteMemberUseCase
from .reject_invitation_use_case import RejectInvitationUseCase

__all__ = [
    "CreateOrganizationUseCase",
    "InviteMemberUseCase",
    "GetInvitationUseCase",
    "AcceptInvitationUseCase",
    "RejectInvitationUseCase",
    "CancelInvitationUseCase",
    "OrganizationInfo",
    "InviteMemberResponse",
    "InvitationDetails",
    "AcceptInvitationResponse",
    "InvitationStatusResponse",
    "slugify",
]

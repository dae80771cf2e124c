"""
Invite Member Use Case

Handles inviting an email address to join an organization.
"""

import logging
from uuid import UUID

from orgauth.app.hooks import InvitationEmailData
from orgauth.app.services.email_dispatcher import EmailDispatchError
from orgauth.app.services.unit_of_work import UnitOfWork
from orgauth.domain.base import utcnow
from orgauth.domain.entities import Invitation, MembershipRole
from orgauth.domain.permissions import can_assign_role, has_permission
from orgauth.result import Error, Result, Return

from .dtos import InviteMemberResponse

logger = logging.getLogger(__name__)


class InviteMemberUseCase:
    """
    Use case for inviting users to join an organization.

    Business Rules:
    - Role must be a valid MembershipRole
    - Inviter needs invitation:create; only owners may invite owners
    - Existing members and pending invitations are rejected
    - Organization must be below the membership limit
    - Invitation expires after invitation_expires_in (48 hours)
    - The invitation is committed before its email is sent; when the email
      cannot be delivered the invitation is deleted again
    """

    def __init__(self, uow: UnitOfWork, config):
        self.uow = uow
        self.config = config

    async def execute(
        self, inviter_user_id: UUID, organization_id: UUID, email: str, role: str
    ) -> Result[InviteMemberResponse]:
        """
        Execute invite member use case.

        Args:
            inviter_user_id: User sending the invite
            organization_id: Target organization
            email: Email address to invite
            role: Role to assign (owner/admin/member)

        Returns:
            Result with InviteMemberResponse DTO, or Error
        """
        email = email.strip().lower()

        try:
            membership_role = MembershipRole(role)
        except ValueError:
            return Return.err(
                Error(
                    "INVALID_ROLE",
                    f"Invalid role: {role}. Must be one of: owner, admin, member",
                )
            )

        async with self.uow:
            organization = await self.uow.organizations.get_by_id(organization_id)
            if organization is None:
                return Return.err(
                    Error("ORGANIZATION_NOT_FOUND", "Organization not found")
                )

            inviter_membership = await self.uow.memberships.get_by_user_and_organization(
                inviter_user_id, organization_id
            )
            if inviter_membership is None:
                return Return.err(
                    Error("NOT_A_MEMBER", "You are not a member of this organization")
                )

            if not has_permission(inviter_membership.role, "invitation", "create"):
                return Return.err(
                    Error(
                        "INSUFFICIENT_ROLE",
                        "You are not allowed to invite users to this organization",
                    )
                )

            if not can_assign_role(inviter_membership.role, membership_role):
                return Return.err(
                    Error(
                        "INSUFFICIENT_ROLE",
                        "You are not allowed to invite a user with this role",
                    )
                )

            existing_user = await self.uow.users.get_by_email(email)
            if existing_user:
                existing_membership = await self.uow.memberships.get_by_user_and_organization(
                    existing_user.id, organization_id
                )
                if existing_membership:
                    return Return.err(
                        Error("ALREADY_MEMBER", "User is already a member of this organization")
                    )

            pending_invitation = await self.uow.invitations.get_pending_by_organization_and_email(
                organization_id, email
            )
            if pending_invitation:
                return Return.err(
                    Error(
                        "INVITE_ALREADY_EXISTS",
                        "A pending invitation already exists for this email",
                    )
                )

            member_count = await self.uow.memberships.count_by_organization_id(organization_id)
            if member_count >= self.config.organization.membership_limit:
                return Return.err(
                    Error(
                        "MEMBERSHIP_LIMIT_REACHED",
                        "Organization membership limit reached",
                    )
                )

            invitation = await self.uow.invitations.create(
                Invitation(
                    organization_id=organization_id,
                    inviter_id=inviter_user_id,
                    email=email,
                    role=membership_role,
                    expires_at=utcnow() + self.config.organization.invitation_expires_in,
                )
            )

            inviter = await self.uow.users.get_by_id(inviter_user_id)

            # The link in the email must point at a stored invitation
            await self.uow.commit()

            try:
                await self.config.hooks.send_invitation_email(
                    InvitationEmailData(
                        id=invitation.id,
                        email=invitation.email,
                        inviter_name=inviter.name if inviter else "",
                        inviter_email=inviter.email if inviter else "",
                        organization_name=organization.name,
                    )
                )
            except EmailDispatchError:
                logger.error(
                    "Invitation email to %s could not be sent; invitation %s discarded",
                    email,
                    invitation.id,
                )
                await self.uow.invitations.delete(invitation)
                await self.uow.commit()
                return Return.err(
                    Error(
                        "INVITATION_EMAIL_FAILED",
                        "Invitation email could not be sent. Please try again.",
                    )
                )

            return Return.ok(
                InviteMemberResponse(
                    id=str(invitation.id),
                    email=invitation.email,
                    role=invitation.role.value,
                    status=invitation.status.value,
                    organization_id=str(invitation.organization_id),
                    expires_at=invitation.expires_at.isoformat(),
                )
            )

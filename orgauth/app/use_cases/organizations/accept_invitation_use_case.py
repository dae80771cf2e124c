"""
Accept Invitation Use Case

Turns a pending invitation into a membership for the signed-in recipient.
"""

from uuid import UUID

from orgauth.app.services.unit_of_work import UnitOfWork
from orgauth.domain.base import utcnow
from orgauth.domain.entities import InvitationStatus, Membership
from orgauth.result import Error, Result, Return

from .dtos import AcceptInvitationResponse, OrganizationInfo


class AcceptInvitationUseCase:
    """
    Use case for accepting organization invitations.

    Business Rules:
    - Invitation must be pending and not expired
    - Caller's email must match the invited email
    - Email verification is not required (invitees may be brand new)
    - Organization must be below the membership limit
    - The accepting session switches to the joined organization
    """

    def __init__(self, uow: UnitOfWork, config):
        self.uow = uow
        self.config = config

    async def execute(
        self, invitation_id: UUID, user_id: UUID, session_id: UUID
    ) -> Result[AcceptInvitationResponse]:
        async with self.uow:
            invitation = await self.uow.invitations.get_by_id(invitation_id)
            if invitation is None:
                return Return.err(
                    Error("INVITATION_NOT_FOUND", "Invitation not found")
                )

            if invitation.status != InvitationStatus.pending:
                return Return.err(
                    Error(
                        "INVITATION_NOT_PENDING",
                        f"This invitation has already been {invitation.status.value}",
                    )
                )

            if invitation.expires_at < utcnow():
                return Return.err(
                    Error("INVITATION_EXPIRED", "This invitation has expired")
                )

            user = await self.uow.users.get_by_id(user_id)
            if user is None or user.email != invitation.email:
                return Return.err(
                    Error("NOT_RECIPIENT", "You are not the recipient of the invitation")
                )

            if (
                self.config.organization.require_email_verification_on_invitation
                and not user.email_verified
            ):
                return Return.err(
                    Error("EMAIL_NOT_VERIFIED", "Verify your email before accepting")
                )

            existing = await self.uow.memberships.get_by_user_and_organization(
                user_id, invitation.organization_id
            )
            if existing:
                return Return.err(
                    Error("ALREADY_MEMBER", "You are already a member of this organization")
                )

            member_count = await self.uow.memberships.count_by_organization_id(
                invitation.organization_id
            )
            if member_count >= self.config.organization.membership_limit:
                return Return.err(
                    Error(
                        "MEMBERSHIP_LIMIT_REACHED",
                        "Organization membership limit reached",
                    )
                )

            organization = await self.uow.organizations.get_by_id(invitation.organization_id)
            if organization is None:
                return Return.err(
                    Error("ORGANIZATION_NOT_FOUND", "Organization not found")
                )

            await self.uow.memberships.create(
                Membership(
                    user_id=user_id,
                    organization_id=organization.id,
                    role=invitation.role,
                )
            )

            invitation.status = InvitationStatus.accepted
            await self.uow.invitations.update(invitation)

            session = await self.uow.sessions.get_by_id(session_id)
            if session is not None:
                session.active_organization_id = organization.id
                await self.uow.sessions.update(session)

            await self.uow.commit()

            return Return.ok(
                AcceptInvitationResponse(
                    invitation_id=str(invitation.id),
                    organization=OrganizationInfo(
                        id=str(organization.id),
                        name=organization.name,
                        slug=organization.slug,
                        role=invitation.role.value,
                    ),
                )
            )

from uuid import UUID

from orgauth.app.services.unit_of_work import UnitOfWork
from orgauth.result import Error, Result, Return

from .dtos import InvitationDetails


class GetInvitationUseCase:
    """Invitation details, visible to the invited email address only"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, invitation_id: UUID, user_email: str) -> Result[InvitationDetails]:
        async with self.uow:
            invitation = await self.uow.invitations.get_by_id(invitation_id)
            if invitation is None:
                return Return.err(
                    Error("INVITATION_NOT_FOUND", "Invitation not found")
                )

            if invitation.email != user_email.lower():
                return Return.err(
                    Error("NOT_RECIPIENT", "You are not the recipient of the invitation")
                )

            organization = await self.uow.organizations.get_by_id(invitation.organization_id)
            inviter = await self.uow.users.get_by_id(invitation.inviter_id)

            return Return.ok(
                InvitationDetails(
                    id=str(invitation.id),
                    email=invitation.email,
                    role=invitation.role.value,
                    status=invitation.status.value,
                    expires_at=invitation.expires_at.isoformat(),
                    organization_id=str(invitation.organization_id),
                    organization_name=organization.name if organization else "",
                    inviter_name=inviter.name if inviter else "",
                    inviter_email=inviter.email if inviter else "",
                )
            )

from uuid import UUID

from orgauth.app.services.unit_of_work import UnitOfWork
from orgauth.domain.entities import InvitationStatus
from orgauth.result import Error, Result, Return

from .dtos import InvitationStatusResponse


class RejectInvitationUseCase:
    """Recipient declines a pending invitation"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, invitation_id: UUID, user_email: str
    ) -> Result[InvitationStatusResponse]:
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

            if invitation.status != InvitationStatus.pending:
                return Return.err(
                    Error(
                        "INVITATION_NOT_PENDING",
                        f"This invitation has already been {invitation.status.value}",
                    )
                )

            invitation.status = InvitationStatus.rejected
            await self.uow.invitations.update(invitation)
            await self.uow.commit()

            return Return.ok(
                InvitationStatusResponse(id=str(invitation.id), status=invitation.status.value)
            )

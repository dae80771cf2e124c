from uuid import UUID

from orgauth.app.services.unit_of_work import UnitOfWork
from orgauth.domain.entities import InvitationStatus
from orgauth.domain.permissions import has_permission
from orgauth.result import Error, Result, Return

from .dtos import InvitationStatusResponse


class CancelInvitationUseCase:
    """
    Organization side withdrawal of a pending invitation.

    Requires invitation:cancel in the invitation's organization.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, invitation_id: UUID, user_id: UUID
    ) -> Result[InvitationStatusResponse]:
        async with self.uow:
            invitation = await self.uow.invitations.get_by_id(invitation_id)
            if invitation is None:
                return Return.err(
                    Error("INVITATION_NOT_FOUND", "Invitation not found")
                )

            membership = await self.uow.memberships.get_by_user_and_organization(
                user_id, invitation.organization_id
            )
            if membership is None or not has_permission(
                membership.role, "invitation", "cancel"
            ):
                return Return.err(
                    Error(
                        "INSUFFICIENT_ROLE",
                        "You are not allowed to cancel this invitation",
                    )
                )

            if invitation.status != InvitationStatus.pending:
                return Return.err(
                    Error(
                        "INVITATION_NOT_PENDING",
                        f"This invitation has already been {invitation.status.value}",
                    )
                )

            invitation.status = InvitationStatus.canceled
            await self.uow.invitations.update(invitation)
            await self.uow.commit()

            return Return.ok(
                InvitationStatusResponse(id=str(invitation.id), status=invitation.status.value)
            )

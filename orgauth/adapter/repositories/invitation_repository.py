from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from orgauth.app.repositories.invitation_repository import IInvitationRepository
from orgauth.domain.base import utcnow
from orgauth.domain.entities import Invitation, InvitationStatus


class InvitationRepository(IInvitationRepository):
    """Invitation repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, invitation_id: UUID) -> Optional[Invitation]:
        result = await self.session.exec(
            select(Invitation).where(Invitation.id == invitation_id)
        )
        return result.one_or_none()

    async def get_pending_by_organization_and_email(
        self, organization_id: UUID, email: str
    ) -> Optional[Invitation]:
        stmt = (
            select(Invitation)
            .where(
                Invitation.organization_id == organization_id,
                Invitation.email == email.lower(),
                Invitation.status == InvitationStatus.pending,
                Invitation.expires_at > utcnow(),
            )
            .order_by(Invitation.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def create(self, invitation: Invitation) -> Invitation:
        invitation.email = invitation.email.strip().lower()
        self.session.add(invitation)
        await self.session.flush()
        await self.session.refresh(invitation)
        return invitation

    async def update(self, invitation: Invitation) -> Invitation:
        self.session.add(invitation)
        await self.session.flush()
        await self.session.refresh(invitation)
        return invitation

    async def delete(self, invitation: Invitation) -> None:
        await self.session.delete(invitation)
        await self.session.flush()

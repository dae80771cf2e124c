from typing import Optional
from uuid import UUID

from sqlmodel import func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from orgauth.app.repositories.membership_repository import IMembershipRepository
from orgauth.domain.entities import Membership


class MembershipRepository(IMembershipRepository):
    """Membership repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_user_and_organization(
        self, user_id: UUID, organization_id: UUID
    ) -> Optional[Membership]:
        """Get membership by user and organization"""
        stmt = select(Membership).where(
            Membership.user_id == user_id,
            Membership.organization_id == organization_id,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_latest_by_user_id(self, user_id: UUID) -> Optional[Membership]:
        """Get the user's most recently created membership"""
        stmt = (
            select(Membership)
            .where(Membership.user_id == user_id)
            .order_by(Membership.created_at.desc())
            .limit(1)
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def count_by_organization_id(self, organization_id: UUID) -> int:
        """Count members of an organization"""
        stmt = select(func.count(Membership.id)).where(
            Membership.organization_id == organization_id
        )
        result = await self.session.exec(stmt)
        return result.one()

    async def create(self, membership: Membership) -> Membership:
        """Create a new membership"""
        self.session.add(membership)
        await self.session.flush()
        await self.session.refresh(membership)
        return membership

from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from orgauth.app.repositories.organization_repository import IOrganizationRepository
from orgauth.domain.entities import Organization


class OrganizationRepository(IOrganizationRepository):
    """Organization repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, organization_id: UUID) -> Optional[Organization]:
        """Get organization by ID"""
        stmt = select(Organization).where(Organization.id == organization_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_slug(self, slug: str) -> Optional[Organization]:
        """Get organization by slug"""
        stmt = select(Organization).where(Organization.slug == slug)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, organization: Organization) -> Organization:
        """Create a new organization"""
        self.session.add(organization)
        await self.session.flush()
        await self.session.refresh(organization)
        return organization

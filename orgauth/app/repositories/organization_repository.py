from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from orgauth.domain.entities import Organization


class IOrganizationRepository(ABC):
    """Organization repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, organization_id: UUID) -> Optional[Organization]:
        """Get organization by ID"""
        pass

    @abstractmethod
    async def get_by_slug(self, slug: str) -> Optional[Organization]:
        """Get organization by slug"""
        pass

    @abstractmethod
    async def create(self, organization: Organization) -> Organization:
        """Create a new organization"""
        pass

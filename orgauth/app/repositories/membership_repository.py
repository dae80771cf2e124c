from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from orgauth.domain.entities import Membership


class IMembershipRepository(ABC):
    """Membership repository interface - application layer"""

    @abstractmethod
    async def get_by_user_and_organization(
        self, user_id: UUID, organization_id: UUID
    ) -> Optional[Membership]:
        """Get membership by user and organization"""
        pass

    @abstractmethod
    async def get_latest_by_user_id(self, user_id: UUID) -> Optional[Membership]:
        """Get the user's most recently created membership"""
        pass

    @abstractmethod
    async def count_by_organization_id(self, organization_id: UUID) -> int:
        """Count members of an organization"""
        pass

    @abstractmethod
    async def create(self, membership: Membership) -> Membership:
        """Create a new membership"""
        pass

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from orgauth.domain.entities import Invitation


class IInvitationRepository(ABC):
    @abstractmethod
    async def get_by_id(self, invitation_id: UUID) -> Optional[Invitation]:
        pass

    @abstractmethod
    async def get_pending_by_organization_and_email(
        self, organization_id: UUID, email: str
    ) -> Optional[Invitation]:
        """Pending, unexpired invitation for this address, if any"""
        pass

    @abstractmethod
    async def create(self, invitation: Invitation) -> Invitation:
        pass

    @abstractmethod
    async def update(self, invitation: Invitation) -> Invitation:
        pass

    @abstractmethod
    async def delete(self, invitation: Invitation) -> None:
        pass

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from orgauth.domain.entities import Session


class ISessionRepository(ABC):
    """
    Session store.

    Bulk operations return the number of rows they touched.
    """

    @abstractmethod
    async def get_by_id(self, session_id: UUID) -> Optional[Session]:
        pass

    @abstractmethod
    async def create(self, session: Session) -> Session:
        pass

    @abstractmethod
    async def update(self, session: Session) -> Session:
        pass

    @abstractmethod
    async def set_active_organization_for_user(
        self, user_id: UUID, organization_id: UUID
    ) -> int:
        """Point every session of a user at an organization"""
        pass

    @abstractmethod
    async def revoke_all_by_user_id(self, user_id: UUID) -> int:
        pass

    @abstractmethod
    async def revoke_by_id(self, session_id: UUID) -> bool:
        """True when a live session was revoked"""
        pass

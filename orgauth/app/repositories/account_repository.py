from abc import ABC, abstractmethod
from typing import Optional

from orgauth.domain.entities import Account


class IAccountRepository(ABC):
    """Account repository interface - application layer"""

    @abstractmethod
    async def get_by_provider(self, provider_id: str, account_id: str) -> Optional[Account]:
        """Get the account linked to a provider subject"""
        pass

    @abstractmethod
    async def create(self, account: Account) -> Account:
        """Create a new account link"""
        pass

from abc import ABC, abstractmethod

from orgauth.app.repositories.account_repository import IAccountRepository
from orgauth.app.repositories.invitation_repository import IInvitationRepository
from orgauth.app.repositories.membership_repository import IMembershipRepository
from orgauth.app.repositories.organization_repository import IOrganizationRepository
from orgauth.app.repositories.password_reset_token_repository import (
    IPasswordResetTokenRepository,
)
from orgauth.app.repositories.session_repository import ISessionRepository
from orgauth.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    accounts: IAccountRepository
    organizations: IOrganizationRepository
    memberships: IMembershipRepository
    sessions: ISessionRepository
    invitations: IInvitationRepository
    password_reset_tokens: IPasswordResetTokenRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass

    @abstractmethod
    def savepoint(self):
        """
        Async context manager around a nested transaction.

        An exception inside the block rolls back only the work done in it;
        the enclosing transaction stays usable.
        """
        pass
